"""
Constants and enums for the chord engine.

No magic strings - use enums for constrained values.
"""

from enum import Enum


class Genre(str, Enum):
    """Genres the progression generator knows how to color."""

    LOFI = "Lo-Fi"
    NEO_SOUL = "Neo Soul"
    JAZZ = "Jazz"
    POP = "Pop"
    RNB = "R&B"
    ROCK = "Rock"
    EDM = "EDM"
    HIP_HOP = "Hip Hop"
    FUNK = "Funk"
    HOUSE = "House"
    UK_GARAGE = "UK Garage"
    FUTURE_BASS = "Future Bass"
    DRUM_AND_BASS = "Drum & Bass"
    TRANCE = "Trance"
    TECHNO = "Techno"
    DUBSTEP = "Dubstep"
    AMBIENT = "Ambient"
    BOSSA_NOVA = "Bossa Nova"
    REGGAE = "Reggae"
    COUNTRY = "Country"
    BLUES = "Blues"
    GOSPEL = "Gospel"
    METAL = "Metal"
    LATIN = "Latin"
    CITY_POP = "City Pop"


class Mood(str, Enum):
    """Moods used together with a genre to pick templates."""

    UPLIFTING = "Uplifting"
    MELANCHOLIC = "Melancholic"
    CHILL = "Chill"
    DARK = "Dark"
    DREAMY = "Dreamy"
    ENERGETIC = "Energetic"


class SoundType(str, Enum):
    """Playback timbre. Passed through to the audio adapter untouched."""

    SINE = "sine"
    PIANO = "piano"
    PAD = "pad"


class BasslinePattern(str, Enum):
    """Bassline expansion patterns."""

    NONE = "none"
    ROOT_ONLY = "root-only"
    ROOT_FIFTH = "root-fifth"
    WALKING = "walking"
    SYNCOPATED = "syncopated"
    OCTAVE = "octave"


class ChordPattern(str, Enum):
    """Chord comping patterns."""

    SUSTAIN = "sustain"
    ARPEGGIO_UP = "arpeggio-up"
    ARPEGGIO_DOWN = "arpeggio-down"
    STACCATO = "staccato"
    STRUM = "strum"


class MelodyPattern(str, Enum):
    """Melody generation patterns."""

    NONE = "none"
    SIMPLE = "simple"
    SMOOTH = "smooth"
    RHYTHMIC = "rhythmic"


class BorrowedFrom(str, Enum):
    """Parallel mode a borrowed (modal interchange) chord comes from."""

    PARALLEL_MINOR = "parallel-minor"
    PARALLEL_MAJOR = "parallel-major"


class LayerRole(str, Enum):
    """Rendered layers, one MIDI channel each."""

    HARMONY = "harmony"
    BASS = "bass"
    MELODY = "melody"


# Genres that get a separated bass note plus drop-2 upper structure
OPEN_VOICING_GENRES: frozenset[Genre] = frozenset({Genre.JAZZ, Genre.NEO_SOUL, Genre.LOFI})

# Default MIDI channel assignments by role
DEFAULT_CHANNEL_MAP: dict[LayerRole, int] = {
    LayerRole.HARMONY: 0,
    LayerRole.BASS: 1,
    LayerRole.MELODY: 2,
}

# Default voicing range for chords (C3-C5)
DEFAULT_VOICING_RANGE: tuple[int, int] = (48, 72)

# Melody register (C4-C6)
MELODY_MIN_NOTE = 60
MELODY_MAX_NOTE = 84

# Chord duration bounds (beats)
MIN_CHORD_DURATION = 0.5
MAX_CHORD_DURATION = 8.0
DEFAULT_CHORD_DURATION = 4.0
PASSING_CHORD_DURATION = 2.0

# Progression length limits
MAX_PROGRESSION_LENGTH = 8
MAX_EXTENSION_CHORDS = 4

# Tempo bounds (BPM)
MIN_TEMPO = 40
MAX_TEMPO = 240

# MIDI export resolution
TICKS_PER_BEAT = 128

MAIN_LABEL = "Main"
BRIDGE_LABEL = "Bridge {number}"


class ErrorMessages:
    """Standardized error messages."""

    PROGRESSION_NOT_FOUND = "Progression '{progression_id}' not found."
    CHORD_INDEX_OUT_OF_RANGE = "Chord index {index} out of range for progression '{label}'."
    BRIDGE_NOT_FOUND = "Bridge {index} not found."
    INSERT_INDEX_INVALID = "Invalid insert index {index} for a progression of {length} chords."
    NO_PROGRESSIONS = "No progressions generated yet. Call generate first."
    INVALID_KEY = "Invalid key: '{key}'. Expected format like 'C_major' or 'A_minor'."
    INVALID_TEMPO = "Invalid tempo: {tempo}. Must be between 40 and 240 BPM."
    INVALID_DIRECTION = "Direction must be 1 or -1, got {direction}."


class SuccessMessages:
    """Standardized success messages."""

    GENERATED = "Generated main progression and {bridges} bridges."
    CHORD_INSERTED = "Inserted {chord} at index {index}."
    PROGRESSION_EXTENDED = "Added {count} chords to '{label}'."
    MIDI_EXPORTED = "Exported '{label}' to {path}."
