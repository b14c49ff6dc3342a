"""
Playback scheduling - beats to wall-clock time for an audio device.

This module does no synthesis. It produces a schedule (start time,
duration, frequency, velocity, envelope) that an audio backend can play.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from chuk_mcp_chords.constants import SoundType
from chuk_mcp_chords.models import Chord, ChordProgression, NoteEvent

# A4
_REFERENCE_NOTE = 69
_REFERENCE_FREQUENCY = 440.0


@dataclass(frozen=True)
class Envelope:
    """ADSR envelope. Times in seconds, sustain as a fraction of peak level."""

    attack: float
    decay: float
    sustain: float
    release: float


ENVELOPES: dict[SoundType, Envelope] = {
    SoundType.SINE: Envelope(attack=0.02, decay=0.1, sustain=0.7, release=0.3),
    SoundType.PIANO: Envelope(attack=0.005, decay=0.3, sustain=0.4, release=0.5),
    SoundType.PAD: Envelope(attack=0.3, decay=0.2, sustain=0.8, release=0.8),
}


@dataclass(frozen=True)
class ScheduledNote:
    """One note placed on the audio clock."""

    midi_note: int
    frequency: float  # Hz
    start_time: float  # Seconds
    duration: float  # Seconds
    velocity: int
    envelope: Envelope

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def to_dict(self) -> dict[str, Any]:
        return {
            "midi_note": self.midi_note,
            "frequency": round(self.frequency, 3),
            "start_time": self.start_time,
            "duration": self.duration,
            "velocity": self.velocity,
        }


def beats_to_seconds(beats: float, tempo_bpm: float) -> float:
    """seconds = beats * 60 / tempo."""
    if tempo_bpm <= 0:
        raise ValueError(f"Tempo must be positive, got {tempo_bpm}")
    return beats * 60.0 / tempo_bpm


def midi_to_frequency(midi_note: int) -> float:
    """Equal-tempered frequency, A4 (69) = 440 Hz."""
    return _REFERENCE_FREQUENCY * 2 ** ((midi_note - _REFERENCE_NOTE) / 12)


def get_envelope(sound_type: SoundType | str) -> Envelope:
    return ENVELOPES[SoundType(sound_type)]


def schedule_events(
    events: Iterable[NoteEvent],
    tempo_bpm: float,
    sound_type: SoundType | str = SoundType.PIANO,
    start_time: float = 0.0,
) -> list[ScheduledNote]:
    """
    Place note events on a clock starting at ``start_time``.

    Args:
        events: Beat-timed note events
        tempo_bpm: Tempo in beats per minute
        sound_type: Timbre, selects the envelope
        start_time: Clock time of beat 0, in seconds

    Returns:
        Scheduled notes in the order given
    """
    envelope = get_envelope(sound_type)
    return [
        ScheduledNote(
            midi_note=event.midi_note,
            frequency=midi_to_frequency(event.midi_note),
            start_time=start_time + beats_to_seconds(event.start_beat, tempo_bpm),
            duration=beats_to_seconds(event.duration_beats, tempo_bpm),
            velocity=event.velocity,
            envelope=envelope,
        )
        for event in events
    ]


def chord_events(chord: Chord, start_beat: float = 0.0, velocity: int = 80) -> list[NoteEvent]:
    """A chord as simultaneous notes lasting its full duration."""
    return [NoteEvent(note, start_beat, chord.duration_beats, velocity) for note in chord.notes]


def schedule_progression(
    progression: ChordProgression,
    tempo_bpm: float,
    sound_type: SoundType | str = SoundType.PIANO,
    start_time: float = 0.0,
) -> list[ScheduledNote]:
    """Block-chord playback of a progression, chords back to back."""
    events: list[NoteEvent] = []
    start_beat = 0.0
    for chord in progression.chords:
        events.extend(chord_events(chord, start_beat))
        start_beat += chord.duration_beats
    return schedule_events(events, tempo_bpm, sound_type, start_time)


def chord_start_times(progression: ChordProgression, tempo_bpm: float) -> list[float]:
    """Start time in seconds of each chord, for highlighting during playback."""
    times = []
    elapsed = 0.0
    for chord in progression.chords:
        times.append(elapsed)
        elapsed += beats_to_seconds(chord.duration_beats, tempo_bpm)
    return times
