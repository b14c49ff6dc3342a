"""
Chord substitutions that reach outside the template: modal interchange,
diatonic degree shifting and progression extension.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

from chuk_mcp_chords.constants import (
    MAX_EXTENSION_CHORDS,
    MAX_PROGRESSION_LENGTH,
    ErrorMessages,
    Genre,
    Mood,
)
from chuk_mcp_chords.core import (
    DIATONIC_QUALITIES,
    BorrowableChord,
    ChordQuality,
    Key,
    PitchClass,
    get_borrowable_chords,
)
from chuk_mcp_chords.harmony.generator import realize_steps, uses_open_voicing
from chuk_mcp_chords.harmony.templates import TemplateBank, get_template_bank, template_key
from chuk_mcp_chords.harmony.voicing import voice_chord
from chuk_mcp_chords.models import Chord
from chuk_mcp_chords.randomness import RandomSource, pick, resolve

logger = logging.getLogger(__name__)


class ShiftedDegree(NamedTuple):
    """Result of moving a root one scale step."""

    root: PitchClass
    quality: ChordQuality
    degree: int  # 1-based


def create_borrowed_chord(
    borrowable: BorrowableChord,
    old_chord: Chord,
    prev_chord: Chord | None,
    genre: Genre,
) -> Chord:
    """
    Replace a chord with a specific borrowed chord.

    Keeps the old chord's duration and tags the result with where it was
    borrowed from. Borrowed qualities are not enriched.

    Args:
        borrowable: Chord from ``get_borrowable_chords``
        old_chord: Chord being replaced
        prev_chord: Chord before it, for voice leading
        genre: Genre for voicing style

    Returns:
        Borrowed chord
    """
    notes = voice_chord(
        borrowable.root,
        borrowable.quality,
        previous_notes=prev_chord.notes if prev_chord else None,
        use_open_voicing=uses_open_voicing(genre),
    )
    return Chord(
        root=borrowable.root,
        quality=borrowable.quality,
        notes=tuple(notes),
        duration_beats=old_chord.duration_beats,
        borrowed_from=borrowable.borrowed_from,
        borrowed_degree=borrowable.degree,
    )


def generate_modal_interchange_chord(
    old_chord: Chord,
    prev_chord: Chord | None,
    key: Key,
    genre: Genre,
    rng: RandomSource | None = None,
) -> Chord:
    """Replace a chord with a uniformly chosen borrowed chord."""
    borrowable = pick(resolve(rng), get_borrowable_chords(key))
    logger.debug("Borrowing %s (%s) in %s", borrowable.display_name, borrowable.degree, key)
    return create_borrowed_chord(borrowable, old_chord, prev_chord, genre)


def get_shifted_degree_chord(key: Key, current_root: PitchClass, direction: int) -> ShiftedDegree:
    """
    Move a root one diatonic step up or down.

    A non-diatonic root is first attached to the scale tone with the
    smallest downward distance to it. The new degree takes its diatonic
    seventh quality.

    Args:
        key: Current key
        current_root: Root to move
        direction: 1 (up) or -1 (down)

    Returns:
        New root, quality and 1-based degree

    Raises:
        ValueError: If direction is not 1 or -1
    """
    if direction not in (1, -1):
        raise ValueError(ErrorMessages.INVALID_DIRECTION.format(direction=direction))

    scale_notes = key.scale_notes()
    if current_root in scale_notes:
        index = scale_notes.index(current_root)
    else:
        index = 0
        min_distance = 12
        for i, note in enumerate(scale_notes):
            distance = (current_root.value - note.value + 12) % 12
            if distance < min_distance:
                min_distance = distance
                index = i

    new_index = (index + direction + 7) % 7
    return ShiftedDegree(
        root=scale_notes[new_index],
        quality=DIATONIC_QUALITIES[key.scale][new_index],
        degree=new_index + 1,
    )


def create_shifted_degree_chord(
    old_chord: Chord,
    prev_chord: Chord | None,
    key: Key,
    genre: Genre,
    direction: int,
) -> Chord:
    """
    Replace a chord with its diatonic neighbour.

    The result is diatonic, so any borrowed tag is dropped. Duration is kept.
    """
    shifted = get_shifted_degree_chord(key, old_chord.root, direction)
    notes = voice_chord(
        shifted.root,
        shifted.quality,
        previous_notes=prev_chord.notes if prev_chord else None,
        use_open_voicing=uses_open_voicing(genre),
    )
    return Chord(
        root=shifted.root,
        quality=shifted.quality,
        notes=tuple(notes),
        duration_beats=old_chord.duration_beats,
    )


def generate_extension_chords(
    existing: Sequence[Chord],
    key: Key,
    genre: Genre,
    mood: Mood,
    rng: RandomSource | None = None,
    bank: TemplateBank | None = None,
) -> list[Chord]:
    """
    Chords to append to a progression.

    Adds up to four chords without taking the progression past eight.
    Steps come from a template of the exact genre/mood, or from the
    extension templates when the library has none. Voice leading
    continues from the last existing chord.

    Returns:
        New chords only; empty once the progression is full
    """
    room = MAX_PROGRESSION_LENGTH - len(existing)
    if room <= 0:
        return []
    count = min(MAX_EXTENSION_CHORDS, room)

    rng = resolve(rng)
    bank = bank or get_template_bank()
    candidates = bank.templates.get(template_key(genre, mood)) or bank.extensions
    template = pick(rng, candidates)

    steps = [step.as_tuple() for step in template.steps]
    while len(steps) < count:
        steps.extend(steps)
    steps = steps[:count]

    previous_notes = existing[-1].notes if existing else None
    return realize_steps(key, steps, genre=genre, previous_notes=previous_notes, rng=rng)
