"""
Core music primitives.

The pure, deterministic theory layer everything else composes on:
- PitchClass: The 12 chromatic pitch classes (0-11)
- ScaleType: major / natural minor interval patterns
- Key: Root + scale type, resolves degrees to pitches
- ChordQuality: Interval stacks defining chord types
- BorrowableChord: Modal interchange candidates for a key
"""

from chuk_mcp_chords.core.chord import (
    DIATONIC_QUALITIES,
    BorrowableChord,
    ChordQuality,
    chord_display_name,
    chord_intervals,
    chord_notes,
    get_borrowable_chords,
)
from chuk_mcp_chords.core.pitch import PitchClass, midi_to_note_name, midi_to_octave
from chuk_mcp_chords.core.scale import Key, ScaleType, is_note_in_scale

__all__ = [
    # Pitch
    "PitchClass",
    "midi_to_note_name",
    "midi_to_octave",
    # Scale
    "ScaleType",
    "Key",
    "is_note_in_scale",
    # Chord
    "ChordQuality",
    "BorrowableChord",
    "DIATONIC_QUALITIES",
    "chord_display_name",
    "chord_intervals",
    "chord_notes",
    "get_borrowable_chords",
]
