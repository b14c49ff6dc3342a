"""
Rhythmic pattern expanders.

Three parallel engines turn chords into timed note events:
- bass: root-only, root-fifth, walking, syncopated, octave
- comping: sustain, arpeggio-up/down, staccato, strum
- melody: simple, smooth, rhythmic

Each has a per-chord generator and a progression-level wrapper that
lays chords end to end. All of them yield events lazily.
"""

from chuk_mcp_chords.patterns.base import coerce_pattern, fold_progression
from chuk_mcp_chords.patterns.bass import (
    bass_intervals,
    bass_root,
    generate_bassline,
    generate_progression_bassline,
)
from chuk_mcp_chords.patterns.comping import (
    DEFAULT_STRUM_AMOUNT,
    generate_chord_pattern,
    generate_progression_chord_notes,
)
from chuk_mcp_chords.patterns.layers import render_layers
from chuk_mcp_chords.patterns.melody import (
    generate_melody,
    generate_progression_melody,
    snap_to_scale,
)

__all__ = [
    "coerce_pattern",
    "fold_progression",
    # Bass
    "bass_intervals",
    "bass_root",
    "generate_bassline",
    "generate_progression_bassline",
    # Comping
    "DEFAULT_STRUM_AMOUNT",
    "generate_chord_pattern",
    "generate_progression_chord_notes",
    # Melody
    "generate_melody",
    "generate_progression_melody",
    "snap_to_scale",
    # Layers
    "render_layers",
]
