"""
Chord primitives - ChordQuality, diatonic tables, borrowable chords.

Chord qualities are interval stacks measured from the root (not stacked).
Extended chords (11ths, 13ths) omit tones to stay playable; the omissions
are part of each quality's definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chuk_mcp_chords.constants import BorrowedFrom

from .pitch import PitchClass
from .scale import Key, ScaleType

_INTERVALS: dict[str, tuple[int, ...]] = {
    "maj": (0, 4, 7),
    "min": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    "maj7": (0, 4, 7, 11),
    "min7": (0, 3, 7, 10),
    "7": (0, 4, 7, 10),
    "dim7": (0, 3, 6, 9),
    "m7b5": (0, 3, 6, 10),
    "maj9": (0, 4, 7, 11, 14),
    "min9": (0, 3, 7, 10, 14),
    "9": (0, 4, 7, 10, 14),
    "maj11": (0, 4, 11, 14, 17),  # R 3 7 9 11, no 5th
    "min11": (0, 3, 10, 14, 17),  # R b3 b7 9 11, no 5th
    "11": (0, 10, 14, 17),  # R b7 9 11, no 3rd or 5th
    "maj13": (0, 4, 11, 14, 21),  # R 3 7 9 13, no 5th
    "min13": (0, 3, 10, 14, 21),  # R b3 b7 9 13, no 5th
    "13": (0, 4, 10, 14, 21),  # R 3 b7 9 13, no 5th
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    "add9": (0, 4, 7, 14),
}

_SUFFIXES: dict[str, str] = {
    "maj": "",
    "min": "m",
    "dim": "dim",
    "aug": "aug",
    "maj7": "maj7",
    "min7": "m7",
    "7": "7",
    "dim7": "dim7",
    "m7b5": "m7♭5",
    "maj9": "maj9",
    "min9": "m9",
    "9": "9",
    "maj11": "maj11",
    "min11": "m11",
    "11": "11",
    "maj13": "maj13",
    "min13": "m13",
    "13": "13",
    "sus2": "sus2",
    "sus4": "sus4",
    "add9": "add9",
}


class ChordQuality(str, Enum):
    """
    Harmonic qualities from triads through 13th chords.

    Values are the short symbols used in templates ('maj7', 'min9', '7').
    """

    MAJOR = "maj"
    MINOR = "min"
    DIMINISHED = "dim"
    AUGMENTED = "aug"
    MAJOR_7 = "maj7"
    MINOR_7 = "min7"
    DOMINANT_7 = "7"
    DIMINISHED_7 = "dim7"
    HALF_DIMINISHED_7 = "m7b5"
    MAJOR_9 = "maj9"
    MINOR_9 = "min9"
    DOMINANT_9 = "9"
    MAJOR_11 = "maj11"
    MINOR_11 = "min11"
    DOMINANT_11 = "11"
    MAJOR_13 = "maj13"
    MINOR_13 = "min13"
    DOMINANT_13 = "13"
    SUS2 = "sus2"
    SUS4 = "sus4"
    ADD9 = "add9"

    @property
    def intervals(self) -> tuple[int, ...]:
        """Semitone offsets from the root, ascending."""
        return _INTERVALS[self.value]

    @property
    def suffix(self) -> str:
        """Display suffix appended to the root name."""
        return _SUFFIXES[self.value]

    @property
    def is_minor(self) -> bool:
        """Minor-family by name (min, min7, min9, ...)."""
        return "min" in self.value

    @property
    def has_minor_third(self) -> bool:
        """Minor third for bass purposes: minor family plus diminished family."""
        return self.is_minor or self in (
            ChordQuality.DIMINISHED,
            ChordQuality.DIMINISHED_7,
            ChordQuality.HALF_DIMINISHED_7,
        )

    @property
    def has_flat_fifth(self) -> bool:
        return self in (
            ChordQuality.DIMINISHED,
            ChordQuality.DIMINISHED_7,
            ChordQuality.HALF_DIMINISHED_7,
        )

    def __str__(self) -> str:
        return self.value


def chord_intervals(quality: ChordQuality | str) -> tuple[int, ...]:
    """Interval table lookup. Unknown qualities raise ValueError."""
    return ChordQuality(quality).intervals


def chord_display_name(root: PitchClass, quality: ChordQuality) -> str:
    """Root symbol plus the quality suffix ('C', 'Am', 'Dm7♭5')."""
    return f"{root.spell()}{quality.suffix}"


def chord_notes(root: PitchClass, quality: ChordQuality, octave: int = 4) -> list[int]:
    """Root-position MIDI notes with the root in the given octave."""
    root_midi = root.to_midi(octave)
    return [root_midi + interval for interval in quality.intervals]


# Default diatonic seventh chord per degree (1-7)
DIATONIC_QUALITIES: dict[ScaleType, tuple[ChordQuality, ...]] = {
    ScaleType.MAJOR: (
        ChordQuality.MAJOR_7,
        ChordQuality.MINOR_7,
        ChordQuality.MINOR_7,
        ChordQuality.MAJOR_7,
        ChordQuality.DOMINANT_7,
        ChordQuality.MINOR_7,
        ChordQuality.HALF_DIMINISHED_7,
    ),
    ScaleType.MINOR: (
        ChordQuality.MINOR_7,
        ChordQuality.HALF_DIMINISHED_7,
        ChordQuality.MAJOR_7,
        ChordQuality.MINOR_7,
        ChordQuality.MINOR_7,
        ChordQuality.MAJOR_7,
        ChordQuality.DOMINANT_7,
    ),
}


@dataclass(frozen=True)
class BorrowableChord:
    """A chord available from the parallel mode, resolved in a key."""

    root: PitchClass
    quality: ChordQuality
    degree: str  # Display label, e.g. '♭VI'
    borrowed_from: BorrowedFrom

    @property
    def display_name(self) -> str:
        return chord_display_name(self.root, self.quality)


# (semitones from key root, quality, degree label)
_MAJOR_KEY_BORROWABLE: tuple[tuple[int, ChordQuality, str], ...] = (
    (3, ChordQuality.MAJOR_7, "♭III"),
    (8, ChordQuality.MAJOR_7, "♭VI"),
    (10, ChordQuality.DOMINANT_7, "♭VII"),
    (5, ChordQuality.MINOR_7, "iv"),
    (2, ChordQuality.HALF_DIMINISHED_7, "ii°"),
)
_MINOR_KEY_BORROWABLE: tuple[tuple[int, ChordQuality, str], ...] = (
    (5, ChordQuality.MAJOR_7, "IV"),
    (7, ChordQuality.DOMINANT_7, "V"),
    (2, ChordQuality.MINOR_7, "II"),
)


def get_borrowable_chords(key: Key) -> list[BorrowableChord]:
    """
    Chords a key can borrow from its parallel mode.

    Major keys borrow from the parallel minor (♭III, ♭VI, ♭VII, iv, ii°);
    minor keys borrow from the parallel major (IV, V, II).
    """
    if key.scale is ScaleType.MAJOR:
        table = _MAJOR_KEY_BORROWABLE
        borrowed_from = BorrowedFrom.PARALLEL_MINOR
    else:
        table = _MINOR_KEY_BORROWABLE
        borrowed_from = BorrowedFrom.PARALLEL_MAJOR

    return [
        BorrowableChord(key.root.transpose(semitones), quality, degree, borrowed_from)
        for semitones, quality, degree in table
    ]
