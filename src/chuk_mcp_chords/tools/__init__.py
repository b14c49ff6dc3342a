"""
MCP tool implementations.

Tools are organized by domain:
- settings - Key, tempo, genre, mood, sound type
- generation - Progression generation and inspection
- editing - Chord-level edits
- rendering - Note events, playback schedules, MIDI export
"""

from chuk_mcp_chords.tools.editing import register_editing_tools
from chuk_mcp_chords.tools.generation import register_generation_tools
from chuk_mcp_chords.tools.rendering import register_rendering_tools
from chuk_mcp_chords.tools.settings import register_settings_tools

__all__ = [
    "register_editing_tools",
    "register_generation_tools",
    "register_rendering_tools",
    "register_settings_tools",
]
