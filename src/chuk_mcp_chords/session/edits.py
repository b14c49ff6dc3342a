"""
Immutable edit operations.

Each function takes a snapshot and returns a new one; inputs are never
modified. Index errors raise ValueError with the standard messages.
"""

from __future__ import annotations

from collections.abc import Sequence

from chuk_mcp_chords.constants import ErrorMessages
from chuk_mcp_chords.models import Chord, ChordProgression, ProgressionSet, clamp_duration

# Floor for the preceding chord when a chord is inserted after it
MIN_HALVED_DURATION = 1.0


def _check_index(progression: ChordProgression, index: int) -> None:
    if not 0 <= index < len(progression.chords):
        raise ValueError(
            ErrorMessages.CHORD_INDEX_OUT_OF_RANGE.format(index=index, label=progression.label)
        )


def _require(progressions: ProgressionSet, progression_id: str) -> ChordProgression:
    progression = progressions.find(progression_id)
    if progression is None:
        raise ValueError(ErrorMessages.PROGRESSION_NOT_FOUND.format(progression_id=progression_id))
    return progression


def swap_chords(
    progressions: ProgressionSet,
    source_id: str,
    target_id: str,
    source_index: int,
    target_index: int,
) -> ProgressionSet:
    """
    Exchange two chords.

    Within one progression this reorders: the two chords trade places and
    nothing else moves. Across progressions each chord moves into the
    other progression's slot.

    Args:
        progressions: Current snapshot
        source_id: Progression holding the dragged chord
        target_id: Progression receiving it
        source_index: Index in the source progression
        target_index: Index in the target progression

    Returns:
        New snapshot
    """
    source = _require(progressions, source_id)
    target = _require(progressions, target_id)
    _check_index(source, source_index)
    _check_index(target, target_index)

    if source_id == target_id:
        chords = list(source.chords)
        chords[source_index], chords[target_index] = chords[target_index], chords[source_index]
        return progressions.replace(source.with_chords(chords))

    source_chords = list(source.chords)
    target_chords = list(target.chords)
    source_chords[source_index], target_chords[target_index] = (
        target_chords[target_index],
        source_chords[source_index],
    )
    updated = progressions.replace(source.with_chords(source_chords))
    return updated.replace(target.with_chords(target_chords))


def insert_chord(progression: ChordProgression, index: int, chord: Chord) -> ChordProgression:
    """
    Insert a chord after at least one existing chord.

    The chord before the insertion point gives up half its length
    (never dropping below one beat).

    Raises:
        ValueError: If index is not in 1..len(progression)
    """
    if not 0 < index <= len(progression.chords):
        raise ValueError(
            ErrorMessages.INSERT_INDEX_INVALID.format(index=index, length=len(progression.chords))
        )

    chords = list(progression.chords)
    preceding = chords[index - 1]
    chords[index - 1] = preceding.with_duration(
        max(MIN_HALVED_DURATION, preceding.duration_beats / 2)
    )
    chords.insert(index, chord)
    return progression.with_chords(chords)


def replace_chord(progression: ChordProgression, index: int, chord: Chord) -> ChordProgression:
    """Put a new chord in an existing slot."""
    _check_index(progression, index)
    chords = list(progression.chords)
    chords[index] = chord
    return progression.with_chords(chords)


def update_chord_duration(
    progression: ChordProgression, index: int, duration_beats: float
) -> ChordProgression:
    """Set a chord's length, clamped to 0.5-8 beats. Never rejects a value."""
    _check_index(progression, index)
    chords = list(progression.chords)
    chords[index] = chords[index].with_duration(clamp_duration(duration_beats))
    return progression.with_chords(chords)


def append_chords(progression: ChordProgression, chords: Sequence[Chord]) -> ChordProgression:
    return progression.with_chords([*progression.chords, *chords])
