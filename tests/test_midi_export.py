"""
MIDI export tests.

If these pass, the end of the pipeline writes files a DAW can open.
"""

import random
from pathlib import Path

import pytest
from mido import MidiFile

from chuk_mcp_chords.compiler.midi import (
    TICKS_PER_BEAT,
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
from chuk_mcp_chords.core import ChordQuality, Key, PitchClass
from chuk_mcp_chords.models import Chord, ChordProgression, NoteEvent


def note_messages(mid: MidiFile, kind: str) -> list:
    return [msg for track in mid.tracks for msg in track if msg.type == kind]


class TestMidiEvent:
    """Test MidiEvent dataclass."""

    def test_create_valid_event(self) -> None:
        """Can create a valid MIDI event."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=128, velocity=100, channel=1)
        assert event.pitch == 60
        assert event.duration_ticks == 128
        assert event.channel == 1

    def test_event_validation_pitch_range(self) -> None:
        """Pitch must be 0-127."""
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=128, velocity=100)

    def test_event_validation_velocity_range(self) -> None:
        """Velocity must be 0-127."""
        with pytest.raises(ValueError, match="Velocity must be 0-127"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=128, velocity=128)

    def test_event_validation_channel_range(self) -> None:
        """Channel must be 0-15."""
        with pytest.raises(ValueError, match="Channel must be 0-15"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=128, velocity=100, channel=16)

    def test_event_validation_start(self) -> None:
        """Start must not be negative."""
        with pytest.raises(ValueError, match="Start ticks"):
            MidiEvent(pitch=60, start_ticks=-1, duration_ticks=128, velocity=100)


class TestTicks:
    """Beat to tick conversion."""

    def test_resolution(self) -> None:
        """128 ticks per beat."""
        assert TICKS_PER_BEAT == 128
        assert beats_to_ticks(1.0) == 128
        assert beats_to_ticks(0.5) == 64
        assert beats_to_ticks(4.0) == 512

    def test_rounds(self) -> None:
        """Fractional ticks round to the nearest tick."""
        assert beats_to_ticks(0.06) == 8
        assert beats_to_ticks(0.225) == 29

    def test_note_events(self) -> None:
        """Note events map to one channel."""
        events = note_events_to_midi_events([NoteEvent(36, 1.0, 0.5, 90)], channel=1)
        assert events == [
            MidiEvent(pitch=36, start_ticks=128, duration_ticks=64, velocity=90, channel=1)
        ]


class TestEventsToMidi:
    """Test the events_to_midi function."""

    def test_empty_events(self) -> None:
        """Can create MIDI file with no events."""
        mid = events_to_midi([])
        assert len(mid.tracks) == 1
        assert mid.ticks_per_beat == TICKS_PER_BEAT

    def test_tempo(self) -> None:
        """Tempo meta message in microseconds per beat."""
        mid = events_to_midi([], tempo_bpm=120)
        tempos = [msg.tempo for msg in mid.tracks[0] if msg.type == "set_tempo"]
        assert tempos == [500000]

    def test_note_off_before_note_on(self) -> None:
        """A repeated note is released before it sounds again."""
        events = [
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=128, velocity=100),
            MidiEvent(pitch=60, start_ticks=128, duration_ticks=128, velocity=100),
        ]
        mid = events_to_midi(events)
        kinds = [msg.type for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")]
        assert kinds == ["note_on", "note_off", "note_on", "note_off"]

    def test_delta_times(self) -> None:
        """Message times are deltas."""
        events = [MidiEvent(pitch=60, start_ticks=64, duration_ticks=128, velocity=100)]
        mid = events_to_midi(events)
        notes = [msg for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")]
        assert [msg.time for msg in notes] == [64, 128]


class TestChordExport:
    """Block chord and progression export."""

    def test_chord_to_midi(self, cmaj7: Chord) -> None:
        """One note pair per voice, all held for the chord."""
        mid = chord_to_midi(cmaj7, tempo_bpm=90)
        ons = note_messages(mid, "note_on")
        offs = note_messages(mid, "note_off")
        assert sorted(msg.note for msg in ons) == [60, 64, 67, 71]
        assert len(offs) == 4
        assert all(msg.velocity == 80 for msg in ons)
        assert sum(msg.time for msg in mid.tracks[0]) == 4 * 128

    def test_progression_to_midi(self, cmaj7: Chord) -> None:
        """Block chords back to back."""
        g7 = Chord(
            root=PitchClass.G,
            quality=ChordQuality.DOMINANT_7,
            notes=(55, 59, 62, 65),
            duration_beats=2.0,
        )
        progression = ChordProgression(chords=(cmaj7, g7), label="Main")
        mid = progression_to_midi(progression, tempo_bpm=120)
        assert len(note_messages(mid, "note_on")) == 8
        assert sum(msg.time for msg in mid.tracks[0]) == 6 * 128

    def test_save_and_reload(self, cmaj7: Chord, temp_midi_path: Path) -> None:
        """Written files load back with the same resolution."""
        progression = ChordProgression(chords=(cmaj7,), label="Main")
        progression_to_midi(progression, tempo_bpm=100).save(str(temp_midi_path))
        loaded = MidiFile(str(temp_midi_path))
        assert loaded.ticks_per_beat == 128
        assert len(note_messages(loaded, "note_on")) == 4

    def test_to_bytes(self, cmaj7: Chord) -> None:
        """Standard MIDI file header."""
        data = midi_to_bytes(chord_to_midi(cmaj7, tempo_bpm=120))
        assert data[:4] == b"MThd"


class TestLayeredExport:
    """Rendering patterns into a multi-channel file."""

    def test_channels_per_layer(self, cmaj7: Chord) -> None:
        """Harmony, bass and melody on channels 0, 1 and 2."""
        progression = ChordProgression(chords=(cmaj7, cmaj7), label="Main")
        mid = render_progression_midi(
            progression,
            Key.parse("C_major"),
            tempo_bpm=90,
            chord_pattern="strum",
            bass_pattern="root-fifth",
            melody_pattern="simple",
            rng=random.Random(0),
        )
        channels = {msg.channel for msg in note_messages(mid, "note_on")}
        assert channels == {0, 1, 2}

    def test_layers_omitted(self, cmaj7: Chord) -> None:
        """'none' layers add no notes."""
        progression = ChordProgression(chords=(cmaj7,), label="Main")
        mid = render_progression_midi(progression, Key.parse("C_major"), tempo_bpm=90)
        assert {msg.channel for msg in note_messages(mid, "note_on")} == {0}


class TestFilenames:
    """Export file naming."""

    def test_chord_filename(self, cmaj7: Chord) -> None:
        """Display name stripped to alphanumerics."""
        assert chord_filename(cmaj7) == "Cmaj7.mid"
        half_dim = Chord(
            root=PitchClass.D, quality=ChordQuality.HALF_DIMINISHED_7, notes=(50, 53, 56, 60)
        )
        assert chord_filename(half_dim) == "Dm75.mid"

    def test_progression_filename(self, cmaj7: Chord) -> None:
        """Label plus chord names."""
        dm7 = Chord(root=PitchClass.D, quality=ChordQuality.MINOR_7, notes=(50, 53, 57, 60))
        g7 = Chord(root=PitchClass.G, quality=ChordQuality.DOMINANT_7, notes=(55, 59, 62, 65))
        progression = ChordProgression(chords=(dm7, g7, cmaj7), label="Bridge 1")
        assert progression_filename(progression) == "Bridge_1_Dm7-G7-Cmaj7.mid"

    def test_sharp_roots(self) -> None:
        """Sharps are dropped from file names."""
        chord = Chord(root=PitchClass.Fs, quality=ChordQuality.MINOR, notes=(54, 57, 61))
        progression = ChordProgression(chords=(chord,), label="Main")
        assert progression_filename(progression) == "Main_Fm.mid"
