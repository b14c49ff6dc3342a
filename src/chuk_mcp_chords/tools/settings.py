"""
Settings tools - MCP tools for key, tempo, genre, mood and sound type.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_chords.constants import Genre, Mood, SoundType
from chuk_mcp_chords.session import ProgressionSession

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_settings_tools(mcp: ChukMCPServer, session: ProgressionSession) -> dict[str, Any]:
    """
    Register settings tools with the MCP server.

    Args:
        mcp: The MCP server instance
        session: The progression session

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def chords_get_settings() -> str:
        """
        Get the current generation settings.

        Returns:
            JSON string with key, tempo, genre, mood and sound type, plus
            the accepted values for genre, mood and sound type

        Example:
            chords_get_settings()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "settings": session.settings.to_dict(),
                    "options": {
                        "genres": [g.value for g in Genre],
                        "moods": [m.value for m in Mood],
                        "sound_types": [s.value for s in SoundType],
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to get settings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_get_settings"] = chords_get_settings

    @mcp.tool  # type: ignore[arg-type]
    async def chords_update_settings(
        key: str | None = None,
        tempo: int | None = None,
        genre: str | None = None,
        mood: str | None = None,
        sound_type: str | None = None,
    ) -> str:
        """
        Change generation settings.

        Only the arguments given are changed. Existing progressions are
        kept; call chords_generate to apply the new settings.

        Args:
            key: Key (e.g., 'C_major', 'A_minor', 'F#_minor')
            tempo: Tempo in BPM (40-240)
            genre: Genre (e.g., 'Lo-Fi', 'Jazz', 'House')
            mood: Mood (e.g., 'Chill', 'Dreamy', 'Dark')
            sound_type: Playback timbre ('sine', 'piano', 'pad')

        Returns:
            JSON string with the updated settings

        Example:
            chords_update_settings(key="D_minor", genre="Neo Soul", mood="Chill")
        """
        try:
            settings = session.update_settings(
                key=key, tempo=tempo, genre=genre, mood=mood, sound_type=sound_type
            )
            return json.dumps({"status": "success", "settings": settings.to_dict()})
        except Exception as e:
            logger.exception("Failed to update settings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_update_settings"] = chords_update_settings

    return tools
