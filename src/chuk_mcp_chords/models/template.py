"""
Progression template model - the generative seed for a progression.

A template is a fixed sequence of (scale degree, chord quality) steps.
Templates are grouped under 'Genre_Mood' keys in the YAML library.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_chords.core import ChordQuality


class TemplateStep(BaseModel):
    """One chord in a template: a 1-based degree and a quality."""

    degree: int = Field(..., ge=1, le=7, description="Scale degree (1-7)")
    quality: ChordQuality = Field(..., description="Chord quality")

    model_config = {"frozen": True}

    def as_tuple(self) -> tuple[int, ChordQuality]:
        return (self.degree, self.quality)


class ProgressionTemplate(BaseModel):
    """An ordered progression shape, optionally named."""

    steps: tuple[TemplateStep, ...] = Field(..., min_length=1, description="Chord steps")
    name: str | None = Field(None, description="Optional description ('Classic house')")

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def signature(self) -> tuple[tuple[int, ChordQuality], ...]:
        """Content identity, ignoring the name."""
        return tuple(step.as_tuple() for step in self.steps)

    @classmethod
    def from_pairs(
        cls, pairs: list[tuple[int, ChordQuality | str]] | list[list[Any]], name: str | None = None
    ) -> ProgressionTemplate:
        """
        Build from [degree, quality] pairs.

        This is the compact form used in the YAML library:
            - [2, min7]
            - [5, "7"]
        """
        steps = tuple(
            TemplateStep(degree=int(degree), quality=ChordQuality(str(quality)))
            for degree, quality in pairs
        )
        return cls(steps=steps, name=name)

    def __str__(self) -> str:
        return " - ".join(f"{step.degree}{step.quality.suffix or 'maj'}" for step in self.steps)
