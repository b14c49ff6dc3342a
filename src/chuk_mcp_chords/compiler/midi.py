"""
MIDI export - the end of the pipeline.

Note events (in beats) become MidiEvents (in ticks) and then a mido
MidiFile. All operations are deterministic: same input -> same output.
"""

from __future__ import annotations

import io
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_chords.constants import (
    DEFAULT_CHANNEL_MAP,
    TICKS_PER_BEAT,
    BasslinePattern,
    ChordPattern,
    LayerRole,
    MelodyPattern,
)
from chuk_mcp_chords.core import Key
from chuk_mcp_chords.models import Chord, ChordProgression, NoteEvent
from chuk_mcp_chords.patterns import DEFAULT_STRUM_AMOUNT, render_layers
from chuk_mcp_chords.randomness import RandomSource

# Velocity for plain block-chord export
BLOCK_CHORD_VELOCITY = 80


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    This is the lowest-level representation before writing to MIDI.
    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int  # Absolute start time in ticks
    duration_ticks: int
    velocity: int  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a beat position to the nearest tick."""
    return int(round(beats * ticks_per_beat))


def note_events_to_midi_events(
    events: Iterable[NoteEvent],
    channel: int = 0,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """Convert beat-timed note events to tick-timed MIDI events on one channel."""
    return [
        MidiEvent(
            pitch=event.midi_note,
            start_ticks=beats_to_ticks(event.start_beat, ticks_per_beat),
            duration_ticks=beats_to_ticks(event.duration_beats, ticks_per_beat),
            velocity=event.velocity,
            channel=channel,
        )
        for event in events
    ]


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 128)

    Returns:
        A mido MidiFile ready to be saved
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message(
                    "note_off",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=0,
                    time=0,
                ),
            )
        )

    # note_off before note_on at the same tick
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    # Absolute -> delta times
    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def _block_chord_events(chord: Chord, start_beat: float, ticks_per_beat: int) -> list[MidiEvent]:
    start = beats_to_ticks(start_beat, ticks_per_beat)
    duration = beats_to_ticks(chord.duration_beats, ticks_per_beat)
    return [
        MidiEvent(
            pitch=note, start_ticks=start, duration_ticks=duration, velocity=BLOCK_CHORD_VELOCITY
        )
        for note in chord.notes
    ]


def chord_to_midi(
    chord: Chord, tempo_bpm: int, ticks_per_beat: int = TICKS_PER_BEAT
) -> MidiFile:
    """One chord as a block, all voices together for its full duration."""
    return events_to_midi(
        _block_chord_events(chord, 0.0, ticks_per_beat), tempo_bpm, ticks_per_beat
    )


def progression_to_midi(
    progression: ChordProgression, tempo_bpm: int, ticks_per_beat: int = TICKS_PER_BEAT
) -> MidiFile:
    """A progression as back-to-back block chords."""
    events: list[MidiEvent] = []
    start_beat = 0.0
    for chord in progression.chords:
        events.extend(_block_chord_events(chord, start_beat, ticks_per_beat))
        start_beat += chord.duration_beats
    return events_to_midi(events, tempo_bpm, ticks_per_beat)


def render_progression_midi(
    progression: ChordProgression,
    key: Key,
    tempo_bpm: int,
    chord_pattern: ChordPattern | str = ChordPattern.SUSTAIN,
    bass_pattern: BasslinePattern | str = BasslinePattern.NONE,
    melody_pattern: MelodyPattern | str = MelodyPattern.NONE,
    strum_amount: float = DEFAULT_STRUM_AMOUNT,
    rng: RandomSource | None = None,
    channel_map: dict[LayerRole, int] | None = None,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Render all layers of a progression to one MIDI file.

    Harmony, bass and melody each go to their own channel.

    Args:
        progression: Progression to render
        key: Key for melody generation
        tempo_bpm: Tempo in beats per minute
        chord_pattern: Comping pattern
        bass_pattern: Bassline pattern ('none' to omit)
        melody_pattern: Melody pattern ('none' to omit)
        strum_amount: Strum spread and direction, -100..100
        rng: Random source for strum jitter and melody
        channel_map: Channel per layer role
        ticks_per_beat: Resolution (default 128)

    Returns:
        A mido MidiFile
    """
    channels = channel_map or DEFAULT_CHANNEL_MAP
    layers = render_layers(
        progression, key, chord_pattern, bass_pattern, melody_pattern, strum_amount, rng
    )

    events: list[MidiEvent] = []
    for role, notes in layers.items():
        events.extend(note_events_to_midi_events(notes, channels[role], ticks_per_beat))
    return events_to_midi(events, tempo_bpm, ticks_per_beat)


def midi_to_bytes(mid: MidiFile) -> bytes:
    """Serialize a MidiFile to standard MIDI file bytes."""
    buffer = io.BytesIO()
    mid.save(file=buffer)
    return buffer.getvalue()


def chord_filename(chord: Chord) -> str:
    """File name for a single chord, e.g. 'Cmaj7.mid'."""
    return f"{re.sub(r'[^a-zA-Z0-9]', '', chord.display_name)}.mid"


def progression_filename(progression: ChordProgression) -> str:
    """File name for a progression, e.g. 'Bridge_1_Dm7-G7-Cmaj7.mid'."""
    label = re.sub(r"\s+", "_", progression.label)
    names = "-".join(chord.display_name for chord in progression.chords)
    return f"{label}_{re.sub(r'[^a-zA-Z0-9-]', '', names)}.mid"
