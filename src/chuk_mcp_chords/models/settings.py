"""
Session settings - the configuration the generator reads on every call.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_chords.constants import (
    MAX_TEMPO,
    MIN_TEMPO,
    ErrorMessages,
    Genre,
    Mood,
    SoundType,
)
from chuk_mcp_chords.core import Key


class AppSettings(BaseModel):
    """
    Key, tempo, genre, mood and sound type.

    The key is stored in its compact string form ('C_major') and parsed
    on demand, so settings stay trivially serializable.
    """

    key: str = Field("C_major", description="Key (e.g., 'C_major', 'A_minor')")
    tempo: int = Field(90, description="Tempo in BPM")
    genre: Genre = Field(Genre.LOFI, description="Genre")
    mood: Mood = Field(Mood.CHILL, description="Mood")
    sound_type: SoundType = Field(SoundType.PIANO, description="Playback timbre")

    model_config = {"frozen": True}

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        try:
            return Key.parse(v).name
        except ValueError:
            raise ValueError(ErrorMessages.INVALID_KEY.format(key=v)) from None

    @field_validator("tempo")
    @classmethod
    def validate_tempo(cls, v: int) -> int:
        if not MIN_TEMPO <= v <= MAX_TEMPO:
            raise ValueError(ErrorMessages.INVALID_TEMPO.format(tempo=v))
        return v

    def get_key(self) -> Key:
        return Key.parse(self.key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "tempo": self.tempo,
            "genre": self.genre.value,
            "mood": self.mood.value,
            "sound_type": self.sound_type.value,
        }
