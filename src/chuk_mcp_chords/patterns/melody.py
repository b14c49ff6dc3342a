"""
Melody expander - stochastic lines that fill each chord's duration.

Melodies stay in the C4-C6 register. Pitches that drift out of the key
are snapped to the nearest in-scale neighbour.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from chuk_mcp_chords.constants import MELODY_MAX_NOTE, MELODY_MIN_NOTE, MelodyPattern
from chuk_mcp_chords.core import Key, chord_notes
from chuk_mcp_chords.models import Chord, MelodyNote
from chuk_mcp_chords.patterns.base import coerce_pattern, fold_progression
from chuk_mcp_chords.randomness import RandomSource, chance, pick, randint, resolve

CHORD_TONE_CHANCE = 0.8
REST_CHANCE = 0.1
RHYTHMIC_LENGTHS = (0.5, 0.5, 1.0, 1.5)
RHYTHMIC_VELOCITY = 95

# Used when a register holds no candidate at all
_FALLBACK_NOTE = 60


def snap_to_scale(midi_note: int, key: Key) -> int:
    """
    Nearest in-scale pitch, searching +1, -1, +2, -2 semitones.

    Returns the input unchanged if nothing within two semitones fits.
    """
    if key.contains(midi_note):
        return midi_note
    for distance in (1, 2):
        if key.contains(midi_note + distance):
            return midi_note + distance
        if key.contains(midi_note - distance):
            return midi_note - distance
    return midi_note


def chord_tones_in_register(
    chord: Chord, low: int = MELODY_MIN_NOTE, high: int = MELODY_MAX_NOTE
) -> list[int]:
    pitch_classes = {note % 12 for note in chord_notes(chord.root, chord.quality)}
    return [note for note in range(low, high + 1) if note % 12 in pitch_classes]


def scale_tones_in_register(
    key: Key, low: int = MELODY_MIN_NOTE, high: int = MELODY_MAX_NOTE
) -> list[int]:
    return [note for note in range(low, high + 1) if key.contains(note)]


def _random_tone(rng: RandomSource, candidates: list[int]) -> int:
    return pick(rng, candidates) if candidates else _FALLBACK_NOTE


def _simple(chord: Chord, key: Key, start: float, rng: RandomSource) -> Iterator[MelodyNote]:
    """One- and two-beat notes, mostly chord tones."""
    duration = chord.duration_beats
    chord_tones = chord_tones_in_register(chord)
    scale_tones = scale_tones_in_register(key)

    position = 0.0
    while position < duration:
        remaining = duration - position
        if remaining >= 2 and rng.random() > 0.5:
            length = 2.0
        elif remaining >= 1:
            length = 1.0
        else:
            length = remaining

        if chance(rng, CHORD_TONE_CHANCE):
            note = _random_tone(rng, chord_tones)
        else:
            note = _random_tone(rng, scale_tones)

        yield MelodyNote(note, start + position, length, 90 + randint(rng, 0, 9))
        position += length


def _smooth(chord: Chord, key: Key, start: float, rng: RandomSource) -> Iterator[MelodyNote]:
    """Stepwise eighths and quarters starting from a chord tone."""
    duration = chord.duration_beats
    last_note = _random_tone(rng, chord_tones_in_register(chord))

    position = 0.0
    while position < duration:
        remaining = duration - position
        length = 1.0 if remaining >= 1 and rng.random() > 0.7 else 0.5
        length = min(length, remaining)

        step = randint(rng, -2, 2)
        note = snap_to_scale(last_note + step, key)
        if note < MELODY_MIN_NOTE:
            note += 12
        if note > MELODY_MAX_NOTE:
            note -= 12

        yield MelodyNote(note, start + position, length, 85 + randint(rng, 0, 14))
        last_note = note
        position += length


def _rhythmic(chord: Chord, key: Key, start: float, rng: RandomSource) -> Iterator[MelodyNote]:
    """Scale tones on a mixed rhythm, with occasional rests."""
    duration = chord.duration_beats
    scale_tones = scale_tones_in_register(key)

    position = 0.0
    while position < duration:
        length = min(pick(rng, RHYTHMIC_LENGTHS), duration - position)
        if not chance(rng, REST_CHANCE):
            yield MelodyNote(
                _random_tone(rng, scale_tones), start + position, length, RHYTHMIC_VELOCITY
            )
        position += length


_GENERATORS = {
    MelodyPattern.SIMPLE: _simple,
    MelodyPattern.SMOOTH: _smooth,
    MelodyPattern.RHYTHMIC: _rhythmic,
}


def generate_melody(
    chord: Chord,
    key: Key,
    pattern: MelodyPattern | str,
    start_beat: float = 0.0,
    rng: RandomSource | None = None,
) -> Iterator[MelodyNote]:
    """
    Generate a melody over one chord.

    Args:
        chord: Chord underneath the melody
        key: Key for scale tones
        pattern: Melody pattern (unknown names fall back to none)
        start_beat: Where the chord starts on the timeline
        rng: Random source

    Yields:
        Melody notes; no note extends past the chord
    """
    pattern = coerce_pattern(MelodyPattern, pattern, MelodyPattern.NONE)
    generator = _GENERATORS.get(pattern)
    if generator is None:
        return iter(())
    return generator(chord, key, start_beat, resolve(rng))


def generate_progression_melody(
    chords: Sequence[Chord],
    key: Key,
    pattern: MelodyPattern | str,
    rng: RandomSource | None = None,
) -> Iterator[MelodyNote]:
    """
    Melody for a whole progression.

    Each chord gets an independent line; nothing carries over between
    chords.
    """
    pattern = coerce_pattern(MelodyPattern, pattern, MelodyPattern.NONE)
    rng = resolve(rng)
    return fold_progression(
        chords, lambda chord, beat: generate_melody(chord, key, pattern, beat, rng)
    )
