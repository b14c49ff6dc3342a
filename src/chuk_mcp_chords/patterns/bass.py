"""
Bassline expander.

Each pattern is a fixed subdivision of the chord's duration. Roots sit in
the C2-B2 register (MIDI 36-47); the third and fifth come from a
simplified major/minor classification of the chord quality.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

from chuk_mcp_chords.constants import BasslinePattern
from chuk_mcp_chords.core import ChordQuality
from chuk_mcp_chords.models import BassNote, Chord
from chuk_mcp_chords.patterns.base import coerce_pattern, fold_progression

# Lowest bass root (C2)
BASS_ROOT_BASE = 36
BASS_VELOCITY = 90
EIGHTH = 0.5


def bass_root(chord: Chord) -> int:
    """Chord root in the bass register."""
    return BASS_ROOT_BASE + chord.root.value


def bass_intervals(quality: ChordQuality) -> tuple[int, int]:
    """(third, fifth) above the root for bass movement."""
    third = 3 if quality.has_minor_third else 4
    fifth = 6 if quality.has_flat_fifth else 7
    return third, fifth


def generate_bassline(
    chord: Chord,
    pattern: BasslinePattern | str,
    start_beat: float = 0.0,
) -> Iterator[BassNote]:
    """
    Expand one chord into bass notes.

    Args:
        chord: Chord to expand
        pattern: Bassline pattern (unknown names fall back to root-only)
        start_beat: Where the chord starts on the timeline

    Yields:
        Bass notes in start order
    """
    pattern = coerce_pattern(BasslinePattern, pattern, BasslinePattern.ROOT_ONLY)
    if pattern is BasslinePattern.NONE:
        return

    root = bass_root(chord)
    third, fifth = bass_intervals(chord.quality)
    duration = chord.duration_beats
    velocity = BASS_VELOCITY

    if pattern is BasslinePattern.ROOT_FIFTH:
        half = duration / 2
        yield BassNote(root, start_beat, half, velocity)
        yield BassNote(root + fifth, start_beat + half, half, velocity - 10)

    elif pattern is BasslinePattern.WALKING:
        if duration >= 4:
            beat = duration / 4
            # Root, third, fifth, then an approach tone above the fifth
            yield BassNote(root, start_beat, beat, velocity)
            yield BassNote(root + third, start_beat + beat, beat, velocity - 5)
            yield BassNote(root + fifth, start_beat + beat * 2, beat, velocity - 5)
            yield BassNote(root + fifth + 2, start_beat + beat * 3, beat, velocity - 10)
        elif duration >= 2:
            half = duration / 2
            yield BassNote(root, start_beat, half, velocity)
            yield BassNote(root + fifth, start_beat + half, half, velocity - 5)
        else:
            yield BassNote(root, start_beat, duration, velocity)

    elif pattern is BasslinePattern.SYNCOPATED:
        if duration >= 2:
            # Off-beat eighths, alternating root and fifth
            for i in range(math.floor(duration)):
                note = root if i % 2 == 0 else root + fifth
                accent = 0 if i % 2 == 0 else 10
                yield BassNote(note, start_beat + i + EIGHTH, EIGHTH, velocity - accent)
        else:
            yield BassNote(root, start_beat + EIGHTH, EIGHTH, velocity)

    elif pattern is BasslinePattern.OCTAVE:
        if duration >= 1:
            for i in range(math.floor(duration / EIGHTH)):
                if i % 2 == 0:
                    yield BassNote(root, start_beat + i * EIGHTH, EIGHTH, velocity)
                else:
                    yield BassNote(root + 12, start_beat + i * EIGHTH, EIGHTH, velocity - 15)
        else:
            yield BassNote(root, start_beat, duration, velocity)

    else:
        yield BassNote(root, start_beat, duration, velocity)


def generate_progression_bassline(
    chords: Sequence[Chord],
    pattern: BasslinePattern | str,
) -> Iterator[BassNote]:
    """Bassline for a whole progression, chords laid end to end."""
    pattern = coerce_pattern(BasslinePattern, pattern, BasslinePattern.ROOT_ONLY)
    if pattern is BasslinePattern.NONE:
        return iter(())
    return fold_progression(chords, lambda chord, beat: generate_bassline(chord, pattern, beat))
