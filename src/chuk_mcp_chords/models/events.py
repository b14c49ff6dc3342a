"""
Note events - the output of the pattern expanders.

Events are ephemeral: generated fresh for every render, playback or export
request and never mutated. Times are in beats from the progression start;
the audio and MIDI adapters convert beats to seconds or ticks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NoteEvent:
    """A single timed note."""

    midi_note: int  # MIDI note number (0-127)
    start_beat: float  # Offset from progression start
    duration_beats: float
    velocity: int  # 0-127

    def __post_init__(self) -> None:
        """Validate ranges."""
        if not 0 <= self.midi_note <= 127:
            raise ValueError(f"MIDI note must be 0-127, got {self.midi_note}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if self.start_beat < 0:
            raise ValueError(f"Start beat must be >= 0, got {self.start_beat}")
        if self.duration_beats <= 0:
            raise ValueError(f"Duration must be positive, got {self.duration_beats}")

    @property
    def end_beat(self) -> float:
        return self.start_beat + self.duration_beats

    def to_dict(self) -> dict[str, Any]:
        return {
            "midi_note": self.midi_note,
            "start_beat": self.start_beat,
            "duration_beats": self.duration_beats,
            "velocity": self.velocity,
        }


# Each expander names its events after its layer; the shape is shared.
BassNote = NoteEvent
ChordNote = NoteEvent
MelodyNote = NoteEvent
