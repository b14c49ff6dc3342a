"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_chords.core import ChordQuality, Key, PitchClass
from chuk_mcp_chords.harmony import create_chord_from_degree
from chuk_mcp_chords.models import Chord, ChordProgression


class ScriptedRandom:
    """Random source that replays a fixed list of values, cycling."""

    def __init__(self, values: list[float]):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def c_major() -> Key:
    return Key.parse("C_major")


@pytest.fixture
def a_minor() -> Key:
    return Key.parse("A_minor")


@pytest.fixture
def cmaj7() -> Chord:
    """Root-position Cmaj7, four beats."""
    return Chord(root=PitchClass.C, quality=ChordQuality.MAJOR_7, notes=(60, 64, 67, 71))


@pytest.fixture
def am_f_g_em(c_major: Key) -> ChordProgression:
    """Am - Fmaj7 - G7 - Em7 in C major, voiced without genre coloring."""
    steps = [
        (6, ChordQuality.MINOR),
        (4, ChordQuality.MAJOR_7),
        (5, ChordQuality.DOMINANT_7),
        (3, ChordQuality.MINOR_7),
    ]
    chords = []
    previous = None
    for degree, quality in steps:
        chord = create_chord_from_degree(c_major, degree, quality, previous)
        chords.append(chord)
        previous = chord.notes
    return ChordProgression(chords=tuple(chords), label="Main")
