"""
Chord comping expander - how the voiced notes of a chord are played.

Voices are always taken low to high first; arpeggio-down and negative
strums reverse that order.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

from chuk_mcp_chords.constants import ChordPattern
from chuk_mcp_chords.models import Chord, ChordNote
from chuk_mcp_chords.patterns.base import coerce_pattern, fold_progression
from chuk_mcp_chords.randomness import RandomSource, resolve

SUSTAIN_VELOCITY = 80

# Arpeggio steps are never slower than a sixteenth
ARPEGGIO_MAX_STEP = 0.25
ARPEGGIO_GATE = 0.9

STACCATO_STEP = 0.5
STACCATO_LENGTH = 0.15
STACCATO_STRONG = 85
STACCATO_WEAK = 65

# Per-voice offset at full strum (|amount| == 100)
STRUM_MAX_DELAY = 0.06
STRUM_BASE_VELOCITY = 80
STRUM_VELOCITY_SPREAD = 10
DEFAULT_STRUM_AMOUNT = 50


def _sustain(notes: list[int], start: float, duration: float) -> Iterator[ChordNote]:
    for note in notes:
        yield ChordNote(note, start, duration, SUSTAIN_VELOCITY)


def _arpeggio(
    notes: list[int], start: float, duration: float, ascending: bool
) -> Iterator[ChordNote]:
    """
    Even steps, capped at a sixteenth; the last voice holds to the end.

    Ascending arpeggios get louder with each voice, descending ones softer.
    """
    ordered = notes if ascending else list(reversed(notes))
    count = len(ordered)
    step = min(ARPEGGIO_MAX_STEP, duration / count)
    last_length = duration - step * (count - 1)

    for index, note in enumerate(ordered):
        length = last_length if index == count - 1 else step * ARPEGGIO_GATE
        velocity = 75 + index * 3 if ascending else 80 - index * 2
        yield ChordNote(note, start + step * index, length, velocity)


def _staccato(notes: list[int], start: float, duration: float) -> Iterator[ChordNote]:
    """Short hits on an eighth grid, alternating strong and weak."""
    for i in range(math.floor(duration * 2)):
        offset = i * STACCATO_STEP
        if offset >= duration:
            break
        velocity = STACCATO_STRONG if i % 2 == 0 else STACCATO_WEAK
        for note in notes:
            yield ChordNote(note, start + offset, STACCATO_LENGTH, velocity)


def _strum(
    notes: list[int],
    start: float,
    duration: float,
    strum_amount: float,
    rng: RandomSource,
) -> Iterator[ChordNote]:
    """
    Staggered voices, like a guitar strum.

    Positive amounts strum low to high, negative high to low. Each voice
    is shortened by its offset so all voices end together.
    """
    amount = max(-100.0, min(100.0, strum_amount))
    delay = STRUM_MAX_DELAY * abs(amount) / 100
    ordered = notes if amount >= 0 else list(reversed(notes))

    for index, note in enumerate(ordered):
        offset = delay * index
        jitter = rng.random() * 2 * STRUM_VELOCITY_SPREAD - STRUM_VELOCITY_SPREAD
        velocity = max(0, min(127, round(STRUM_BASE_VELOCITY + jitter)))
        yield ChordNote(note, start + offset, duration - offset, velocity)


def generate_chord_pattern(
    chord: Chord,
    pattern: ChordPattern | str,
    start_beat: float = 0.0,
    strum_amount: float = DEFAULT_STRUM_AMOUNT,
    rng: RandomSource | None = None,
) -> Iterator[ChordNote]:
    """
    Expand one chord into note events.

    Args:
        chord: Chord to play
        pattern: Comping pattern (unknown names fall back to sustain)
        start_beat: Where the chord starts on the timeline
        strum_amount: Strum spread and direction, -100..100
        rng: Random source for strum velocity jitter

    Yields:
        Chord notes
    """
    pattern = coerce_pattern(ChordPattern, pattern, ChordPattern.SUSTAIN)
    notes = sorted(chord.notes)
    if not notes:
        return iter(())

    duration = chord.duration_beats

    if pattern is ChordPattern.ARPEGGIO_UP:
        return _arpeggio(notes, start_beat, duration, ascending=True)
    if pattern is ChordPattern.ARPEGGIO_DOWN:
        return _arpeggio(notes, start_beat, duration, ascending=False)
    if pattern is ChordPattern.STACCATO:
        return _staccato(notes, start_beat, duration)
    if pattern is ChordPattern.STRUM:
        return _strum(notes, start_beat, duration, strum_amount, resolve(rng))
    return _sustain(notes, start_beat, duration)


def generate_progression_chord_notes(
    chords: Sequence[Chord],
    pattern: ChordPattern | str,
    strum_amount: float = DEFAULT_STRUM_AMOUNT,
    rng: RandomSource | None = None,
) -> Iterator[ChordNote]:
    """Comping for a whole progression, chords laid end to end."""
    pattern = coerce_pattern(ChordPattern, pattern, ChordPattern.SUSTAIN)
    rng = resolve(rng)
    return fold_progression(
        chords,
        lambda chord, beat: generate_chord_pattern(chord, pattern, beat, strum_amount, rng),
    )
