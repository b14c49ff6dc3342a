"""
Layer rendering - run all three expanders over one progression.
"""

from __future__ import annotations

from chuk_mcp_chords.constants import BasslinePattern, ChordPattern, LayerRole, MelodyPattern
from chuk_mcp_chords.core import Key
from chuk_mcp_chords.models import ChordProgression, NoteEvent
from chuk_mcp_chords.patterns.bass import generate_progression_bassline
from chuk_mcp_chords.patterns.comping import (
    DEFAULT_STRUM_AMOUNT,
    generate_progression_chord_notes,
)
from chuk_mcp_chords.patterns.melody import generate_progression_melody
from chuk_mcp_chords.randomness import RandomSource, resolve


def render_layers(
    progression: ChordProgression,
    key: Key,
    chord_pattern: ChordPattern | str = ChordPattern.SUSTAIN,
    bass_pattern: BasslinePattern | str = BasslinePattern.NONE,
    melody_pattern: MelodyPattern | str = MelodyPattern.NONE,
    strum_amount: float = DEFAULT_STRUM_AMOUNT,
    rng: RandomSource | None = None,
) -> dict[LayerRole, list[NoteEvent]]:
    """
    Expand a progression into harmony, bass and melody events.

    Layers whose pattern is 'none' come back empty.

    Args:
        progression: Progression to render
        key: Key for the melody's scale tones
        chord_pattern: Comping pattern
        bass_pattern: Bassline pattern
        melody_pattern: Melody pattern
        strum_amount: Strum spread and direction, -100..100
        rng: Random source

    Returns:
        Events per layer role, each in generation order
    """
    rng = resolve(rng)
    chords = progression.chords
    return {
        LayerRole.HARMONY: list(
            generate_progression_chord_notes(chords, chord_pattern, strum_amount, rng)
        ),
        LayerRole.BASS: list(generate_progression_bassline(chords, bass_pattern)),
        LayerRole.MELODY: list(generate_progression_melody(chords, key, melody_pattern, rng)),
    }
