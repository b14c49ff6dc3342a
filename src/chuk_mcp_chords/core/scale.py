"""
Scale primitives - ScaleType and Key.

Scales are interval patterns from a root. Keys are scale types applied to a root pitch.
Scale degrees are 1-indexed positions within the 7-note scale and wrap modulo 7.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .pitch import PitchClass

_SCALE_INTERVALS: dict[str, tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 10),  # natural minor
}


class ScaleType(str, Enum):
    """
    The two scale modes the engine generates in.

    Intervals are cumulative semitone offsets from the root.
    """

    MAJOR = "major"
    MINOR = "minor"

    @property
    def intervals(self) -> tuple[int, ...]:
        """Semitones from the root for each of the 7 degrees."""
        return _SCALE_INTERVALS[self.value]


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    This is the context for resolving scale degrees to actual pitches.
    Selected by the caller and never mutated by the engine.

    Examples:
        Key(PitchClass.C, ScaleType.MAJOR) = C major
        Key(PitchClass.A, ScaleType.MINOR) = A minor
    """

    root: PitchClass
    scale: ScaleType = ScaleType.MAJOR

    @property
    def is_minor(self) -> bool:
        return self.scale is ScaleType.MINOR

    def scale_notes(self) -> list[PitchClass]:
        """The 7 pitch classes of this key, starting from the root."""
        return [self.root.transpose(interval) for interval in self.scale.intervals]

    def degree_note(self, degree: int) -> PitchClass:
        """
        Resolve a 1-based scale degree to a pitch class.

        Degrees above 7 wrap (8 is the tonic again).

        Raises:
            ValueError: If degree is below 1
        """
        if degree < 1:
            raise ValueError(f"Degree must be >= 1, got {degree}")
        return self.scale_notes()[(degree - 1) % 7]

    def degree_of(self, pitch: PitchClass) -> int | None:
        """1-based degree of a pitch class, or None if it is not in the scale."""
        for index, note in enumerate(self.scale_notes()):
            if note == pitch:
                return index + 1
        return None

    def contains(self, midi_note: int) -> bool:
        """Whether a MIDI note's pitch class belongs to this key."""
        return PitchClass.from_midi(midi_note) in self.scale_notes()

    def scale_midi_notes(self, start_octave: int = 3) -> list[int]:
        """
        MIDI notes of the scale across two octaves.

        Used for piano-roll style displays.
        """
        root_midi = self.root.to_midi(start_octave)
        return [
            root_midi + interval + octave * 12
            for octave in range(2)
            for interval in self.scale.intervals
        ]

    @property
    def name(self) -> str:
        """Compact identifier like 'C_major' or 'F#_minor'."""
        return f"{self.root.spell()}_{self.scale.value}"

    def __str__(self) -> str:
        return f"{self.root.spell()} {self.scale.value}"

    def __repr__(self) -> str:
        return f"Key({self.root!r}, {self.scale!r})"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C_major', 'A_minor', 'F#_minor'.

        Args:
            name: Key name with underscore separator

        Returns:
            Parsed Key object
        """
        parts = name.split("_")
        if len(parts) != 2:
            raise ValueError(f"Invalid key format: {name}. Expected 'root_scale' like 'C_major'")

        root = PitchClass.parse(parts[0])

        scale_str = parts[1].lower()
        if scale_str == "natural minor":
            scale_str = "minor"
        try:
            scale = ScaleType(scale_str)
        except ValueError:
            raise ValueError(f"Unknown scale type: {parts[1]}") from None

        return cls(root, scale)


def is_note_in_scale(midi_note: int, key: Key) -> bool:
    """Whether a MIDI note belongs to the key's scale."""
    return key.contains(midi_note)
