"""
Output adapters - note events to MIDI files and playback schedules.

The pipeline:
    ChordProgression
    -> NoteEvent streams (pattern expanders, in beats)
    -> MidiEvent (ticks) -> mido MidiFile
    -> or ScheduledNote (seconds) for an audio device
"""

from chuk_mcp_chords.compiler.midi import (
    MidiEvent,
    beats_to_ticks,
    chord_filename,
    chord_to_midi,
    events_to_midi,
    midi_to_bytes,
    note_events_to_midi_events,
    progression_filename,
    progression_to_midi,
    render_progression_midi,
)
from chuk_mcp_chords.compiler.playback import (
    ENVELOPES,
    Envelope,
    ScheduledNote,
    beats_to_seconds,
    chord_start_times,
    midi_to_frequency,
    schedule_events,
    schedule_progression,
)

__all__ = [
    # MIDI
    "MidiEvent",
    "beats_to_ticks",
    "chord_filename",
    "chord_to_midi",
    "events_to_midi",
    "midi_to_bytes",
    "note_events_to_midi_events",
    "progression_filename",
    "progression_to_midi",
    "render_progression_midi",
    # Playback
    "ENVELOPES",
    "Envelope",
    "ScheduledNote",
    "beats_to_seconds",
    "chord_start_times",
    "midi_to_frequency",
    "schedule_events",
    "schedule_progression",
]
