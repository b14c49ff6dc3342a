"""
Shared helpers for the pattern expanders.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from enum import Enum
from typing import TypeVar

from chuk_mcp_chords.models import Chord, NoteEvent

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def coerce_pattern(enum_cls: type[E], value: E | str, fallback: E) -> E:
    """
    Resolve a pattern name, falling back instead of failing.

    Expansion is total over any input: an unknown name logs a warning and
    uses the simplest pattern of the family.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "Unknown %s '%s', falling back to '%s'", enum_cls.__name__, value, fallback.value
        )
        return fallback


def fold_progression(
    chords: Sequence[Chord],
    expand: Callable[[Chord, float], Iterator[NoteEvent]],
) -> Iterator[NoteEvent]:
    """
    Expand each chord at its place on the timeline.

    Chord n starts at the sum of the durations of chords 0..n-1.
    """
    current_beat = 0.0
    for chord in chords:
        yield from expand(chord, current_beat)
        current_beat += chord.duration_beats
