"""
Models for the chord engine.

This module provides:
- Chord: A realized, voiced chord
- ChordProgression: Labelled chord sequence
- ProgressionSet: Main progression plus bridges
- ProgressionTemplate: Degree/quality seed for a progression
- NoteEvent: Timed note produced by the pattern expanders
- AppSettings: Key, tempo, genre, mood, sound type
"""

from chuk_mcp_chords.models.chord import (
    Chord,
    ChordProgression,
    ProgressionSet,
    clamp_duration,
    new_id,
)
from chuk_mcp_chords.models.events import BassNote, ChordNote, MelodyNote, NoteEvent
from chuk_mcp_chords.models.settings import AppSettings
from chuk_mcp_chords.models.template import ProgressionTemplate, TemplateStep

__all__ = [
    "AppSettings",
    "BassNote",
    "Chord",
    "ChordNote",
    "ChordProgression",
    "MelodyNote",
    "NoteEvent",
    "ProgressionSet",
    "ProgressionTemplate",
    "TemplateStep",
    "clamp_duration",
    "new_id",
]
