"""
Chord and progression models.

Chords and progressions are frozen snapshots. Every edit produces a new
object (``model_copy(update=...)``) so readers never observe a partially
updated progression.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_chords.constants import (
    DEFAULT_CHORD_DURATION,
    MAX_CHORD_DURATION,
    MIN_CHORD_DURATION,
    BorrowedFrom,
)
from chuk_mcp_chords.core import ChordQuality, PitchClass, chord_display_name


def new_id() -> str:
    """Opaque unique token for chords and progressions."""
    return uuid.uuid4().hex[:8]


def clamp_duration(duration_beats: float) -> float:
    """Clamp a chord duration into [0.5, 8] beats."""
    return max(MIN_CHORD_DURATION, min(MAX_CHORD_DURATION, float(duration_beats)))


class Chord(BaseModel):
    """
    A realized chord: root, quality and concrete voicing.

    ``notes`` are absolute MIDI pitches, conventionally ascending.
    """

    id: str = Field(default_factory=new_id, description="Opaque unique token")
    root: PitchClass = Field(..., description="Root pitch class")
    quality: ChordQuality = Field(..., description="Harmonic quality")
    notes: tuple[int, ...] = Field(..., description="Voiced MIDI notes")
    duration_beats: float = Field(
        DEFAULT_CHORD_DURATION,
        ge=MIN_CHORD_DURATION,
        le=MAX_CHORD_DURATION,
        description="Length in beats",
    )
    borrowed_from: BorrowedFrom | None = Field(None, description="Parallel mode if borrowed")
    borrowed_degree: str | None = Field(None, description="Borrowed degree label, e.g. '♭VI'")

    model_config = {"frozen": True}

    @property
    def display_name(self) -> str:
        return chord_display_name(self.root, self.quality)

    @property
    def is_borrowed(self) -> bool:
        return self.borrowed_from is not None

    def with_duration(self, duration_beats: float) -> Chord:
        """Copy with a clamped duration."""
        return self.model_copy(update={"duration_beats": clamp_duration(duration_beats)})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        d: dict[str, Any] = {
            "id": self.id,
            "root": self.root.spell(),
            "quality": self.quality.value,
            "display_name": self.display_name,
            "notes": list(self.notes),
            "duration_beats": self.duration_beats,
        }
        if self.borrowed_from is not None:
            d["borrowed_from"] = self.borrowed_from.value
            d["borrowed_degree"] = self.borrowed_degree
        return d


class ChordProgression(BaseModel):
    """An ordered, labelled sequence of chords ('Main', 'Bridge 1', ...)."""

    id: str = Field(default_factory=new_id, description="Opaque unique token")
    chords: tuple[Chord, ...] = Field(default_factory=tuple, description="Chords in order")
    label: str = Field(..., description="Display label")

    model_config = {"frozen": True}

    @property
    def total_beats(self) -> float:
        """Sum of chord durations - the timeline every pattern expander uses."""
        return sum(chord.duration_beats for chord in self.chords)

    def __len__(self) -> int:
        return len(self.chords)

    def with_chords(self, chords: list[Chord] | tuple[Chord, ...]) -> ChordProgression:
        """Copy with a new chord sequence, keeping id and label."""
        return self.model_copy(update={"chords": tuple(chords)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "total_beats": self.total_beats,
            "chords": [chord.to_dict() for chord in self.chords],
        }


class ProgressionSet(BaseModel):
    """
    One main progression plus zero or more bridges.

    Each progression is independently addressable by id.
    """

    main: ChordProgression
    bridges: tuple[ChordProgression, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def all(self) -> list[ChordProgression]:
        return [self.main, *self.bridges]

    def find(self, progression_id: str) -> ChordProgression | None:
        for progression in self.all():
            if progression.id == progression_id:
                return progression
        return None

    def replace(self, progression: ChordProgression) -> ProgressionSet:
        """
        Swap in an updated progression with the same id.

        Unknown ids leave the set unchanged.
        """
        if self.main.id == progression.id:
            return self.model_copy(update={"main": progression})
        bridges = tuple(progression if b.id == progression.id else b for b in self.bridges)
        return self.model_copy(update={"bridges": bridges})

    def to_dict(self) -> dict[str, Any]:
        return {
            "main": self.main.to_dict(),
            "bridges": [bridge.to_dict() for bridge in self.bridges],
        }
