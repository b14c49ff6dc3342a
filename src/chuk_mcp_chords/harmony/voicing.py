"""
Voicing engine - turns (root, quality) into absolute pitches.

Three strategies:
- Closed: no previous chord. Voices cluster around the center of the
  target range, each voice placed nearest the running average of the
  voices already chosen.
- Smoothed: a previous voicing exists. Each voice moves to the candidate
  closest to an unused pitch of the previous voicing (greedy
  nearest-neighbour voice leading, O(voices x candidates)).
- Open: a bass note one octave below the default root, plus an upper
  structure of the non-root tones (closed or smoothed), with the
  second-highest upper voice dropped an octave (drop-2).

All strategies are deterministic. Tie-breaks follow candidate order:
closed voicing keeps the later (higher) of two equidistant candidates,
smoothed voicing keeps the first (lower) one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chuk_mcp_chords.constants import DEFAULT_VOICING_RANGE
from chuk_mcp_chords.core import ChordQuality, PitchClass

logger = logging.getLogger(__name__)

# Octaves searched for candidate pitches
_CLOSED_OCTAVES = range(2, 7)
_OPEN_UPPER_OCTAVES = range(3, 7)

# Previous-voicing pitches above this count as upper structure in open voicing
_OPEN_BASS_CEILING = 48


def voice_chord(
    root: PitchClass,
    quality: ChordQuality,
    previous_notes: Sequence[int] | None = None,
    target_range: tuple[int, int] = DEFAULT_VOICING_RANGE,
    use_open_voicing: bool = False,
) -> list[int]:
    """
    Voice a chord as absolute MIDI pitches.

    Args:
        root: Chord root
        quality: Chord quality
        previous_notes: Voicing of the previous chord, for voice leading
        target_range: (low, high) MIDI range for the voices
        use_open_voicing: Separate bass plus drop-2 upper structure

    Returns:
        MIDI notes, sorted ascending
    """
    root_midi = root.to_midi(4)
    intervals = quality.intervals

    if use_open_voicing:
        return _open_voicing(root_midi, intervals, previous_notes, target_range)

    low, high = target_range
    candidates = [
        _candidates(root_midi + interval, _CLOSED_OCTAVES, low, high) for interval in intervals
    ]

    if not previous_notes:
        return _close_voicing(candidates, target_range)

    return _smoothed_voicing(candidates, previous_notes)


def _candidates(base: int, octaves: range, low: int, high: int) -> list[int]:
    """Octave transpositions of ``base`` (given in octave 4) inside [low, high]."""
    notes = []
    for octave in octaves:
        note = base + (octave - 4) * 12
        if low <= note <= high:
            notes.append(note)
    return notes


def _closest(options: Sequence[int], anchor: float) -> int:
    """Closest option to anchor; on a tie the later option wins."""
    best = options[0]
    for option in options[1:]:
        if not abs(best - anchor) < abs(option - anchor):
            best = option
    return best


def _close_voicing(candidates: list[list[int]], target_range: tuple[int, int]) -> list[int]:
    """Tightly clustered voicing around the range center."""
    center = (target_range[0] + target_range[1]) / 2
    result: list[int] = []

    for options in candidates:
        if not options:
            continue
        anchor = center if not result else sum(result) / len(result)
        result.append(_closest(options, anchor))

    return sorted(result)


def _smoothed_voicing(candidates: list[list[int]], previous_notes: Sequence[int]) -> list[int]:
    """
    Greedy voice leading from a previous voicing.

    Voice i aims at the i-th still-unused previous pitch (or the previous
    median once all are consumed) and takes the candidate with the smallest
    movement. The previous pitch closest to the chosen note is then marked
    used so no previous pitch anchors two voices.
    """
    sorted_prev = sorted(previous_notes)
    result: list[int] = []
    used_options: set[int] = set()
    used_prev: set[int] = set()

    for i, all_options in enumerate(candidates):
        options = [note for note in all_options if note not in used_options]
        if not options:
            continue

        available_prev = [note for note in sorted_prev if note not in used_prev]
        if available_prev:
            target = available_prev[min(i, len(available_prev) - 1)]
        else:
            target = sorted_prev[len(sorted_prev) // 2]

        best = options[0]
        min_movement = abs(best - target)
        for option in options:
            movement = abs(option - target)
            if movement < min_movement:
                min_movement = movement
                best = option

        result.append(best)
        used_options.add(best)

        if available_prev:
            used_prev.add(_closest(available_prev, best))

    return sorted(result)


def _open_voicing(
    root_midi: int,
    intervals: tuple[int, ...],
    previous_notes: Sequence[int] | None,
    target_range: tuple[int, int],
) -> list[int]:
    """Bass note plus drop-2 upper structure."""
    bass = root_midi - 12
    low, high = target_range

    upper_candidates = [
        _candidates(root_midi + interval, _OPEN_UPPER_OCTAVES, low, high + 12)
        for interval in intervals
        if interval != 0
    ]

    if previous_notes and len(previous_notes) > 1:
        prev_upper = [note for note in previous_notes if note > _OPEN_BASS_CEILING]
        upper = _smoothed_voicing(upper_candidates, prev_upper or list(previous_notes))
    else:
        upper = _close_voicing(upper_candidates, target_range)

    if len(upper) >= 3:
        upper = sorted(upper)
        upper[-2] -= 12

    logger.debug("Open voicing: bass=%d upper=%s", bass, upper)
    return sorted([bass, *upper])
