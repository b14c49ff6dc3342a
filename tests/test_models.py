"""
Tests for chord, progression, event and settings models.
"""

import pytest
from pydantic import ValidationError

from chuk_mcp_chords.constants import Genre
from chuk_mcp_chords.core import ChordQuality, PitchClass
from chuk_mcp_chords.models import (
    AppSettings,
    Chord,
    ChordProgression,
    NoteEvent,
    ProgressionSet,
    clamp_duration,
)


class TestChord:
    """Tests for the Chord model."""

    def test_frozen(self, cmaj7: Chord) -> None:
        """Chords cannot be changed in place."""
        with pytest.raises(ValidationError):
            cmaj7.duration_beats = 2.0

    def test_duration_bounds(self) -> None:
        """Direct construction rejects out-of-range durations."""
        with pytest.raises(ValidationError):
            Chord(root=PitchClass.C, quality=ChordQuality.MAJOR, notes=(60,), duration_beats=9)

    def test_with_duration_clamps(self, cmaj7: Chord) -> None:
        """Copies clamp instead of failing."""
        assert cmaj7.with_duration(0.1).duration_beats == 0.5
        assert cmaj7.with_duration(12).duration_beats == 8.0
        assert cmaj7.with_duration(2).id == cmaj7.id

    def test_clamp_duration(self) -> None:
        """Clamp into 0.5-8."""
        assert clamp_duration(-5) == 0.5
        assert clamp_duration(3.25) == 3.25
        assert clamp_duration(100) == 8.0

    def test_to_dict(self, cmaj7: Chord) -> None:
        """Serialized with a display name."""
        data = cmaj7.to_dict()
        assert data["display_name"] == "Cmaj7"
        assert data["root"] == "C"
        assert data["quality"] == "maj7"
        assert data["notes"] == [60, 64, 67, 71]


class TestProgressionSet:
    """Tests for progression snapshots."""

    def test_replace(self, cmaj7: Chord) -> None:
        """Replacing by id swaps only that progression."""
        main = ChordProgression(chords=(cmaj7,), label="Main")
        bridge = ChordProgression(chords=(cmaj7,), label="Bridge 1")
        progressions = ProgressionSet(main=main, bridges=(bridge,))

        longer = bridge.with_chords([cmaj7, cmaj7])
        updated = progressions.replace(longer)
        assert len(updated.bridges[0]) == 2
        assert updated.main is main
        assert len(progressions.bridges[0]) == 1

    def test_replace_unknown(self, cmaj7: Chord) -> None:
        """Unknown ids change nothing."""
        main = ChordProgression(chords=(cmaj7,), label="Main")
        progressions = ProgressionSet(main=main)
        stranger = ChordProgression(chords=(), label="Other")
        assert progressions.replace(stranger) == progressions

    def test_find(self, cmaj7: Chord) -> None:
        """Lookup by id across main and bridges."""
        main = ChordProgression(chords=(cmaj7,), label="Main")
        bridge = ChordProgression(chords=(), label="Bridge 1")
        progressions = ProgressionSet(main=main, bridges=(bridge,))
        assert progressions.find(bridge.id) is bridge
        assert progressions.find("missing") is None


class TestNoteEvent:
    """Tests for NoteEvent validation."""

    def test_valid(self) -> None:
        """End is start plus duration."""
        assert NoteEvent(60, 1.0, 0.5, 80).end_beat == 1.5

    @pytest.mark.parametrize(
        "args",
        [(128, 0.0, 1.0, 80), (60, 0.0, 1.0, 200), (60, -1.0, 1.0, 80), (60, 0.0, 0.0, 80)],
    )
    def test_invalid(self, args: tuple) -> None:
        """Out-of-range values raise."""
        with pytest.raises(ValueError):
            NoteEvent(*args)


class TestAppSettings:
    """Tests for settings validation."""

    def test_genre_by_value(self) -> None:
        """Genres are accepted by display value."""
        assert AppSettings(genre="UK Garage").genre is Genre.UK_GARAGE

    def test_tempo_bounds(self) -> None:
        """40-240 BPM."""
        AppSettings(tempo=40)
        AppSettings(tempo=240)
        with pytest.raises(ValidationError, match="Invalid tempo"):
            AppSettings(tempo=39)

    def test_key_validated(self) -> None:
        """Keys must parse."""
        with pytest.raises(ValidationError, match="Invalid key"):
            AppSettings(key="C-major")

    def test_natural_minor_alias(self) -> None:
        """'natural minor' is accepted as minor."""
        assert AppSettings(key="A_natural minor").key == "A_minor"
