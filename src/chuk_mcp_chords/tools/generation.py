"""
Generation tools - MCP tools for creating and inspecting progressions.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_chords.constants import SuccessMessages
from chuk_mcp_chords.session import ProgressionSession

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_generation_tools(mcp: ChukMCPServer, session: ProgressionSession) -> dict[str, Any]:
    """
    Register generation tools with the MCP server.

    Args:
        mcp: The MCP server instance
        session: The progression session

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def chords_generate() -> str:
        """
        Generate a main progression and two bridges.

        Uses the current key, genre and mood. Replaces any existing
        progressions.

        Returns:
            JSON string with the new progressions

        Example:
            chords_generate()
        """
        try:
            progressions = session.generate()
            return json.dumps(
                {
                    "status": "success",
                    "settings": session.settings.to_dict(),
                    "progressions": progressions.to_dict(),
                    "message": SuccessMessages.GENERATED.format(bridges=len(progressions.bridges)),
                }
            )
        except Exception as e:
            logger.exception("Failed to generate progressions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_generate"] = chords_generate

    @mcp.tool  # type: ignore[arg-type]
    async def chords_regenerate(bridge: int | None = None) -> str:
        """
        Regenerate one progression from a fresh template.

        Args:
            bridge: Bridge number (1 or 2). Omit to regenerate the main progression.

        Returns:
            JSON string with the new progression

        Example:
            chords_regenerate(bridge=2)
        """
        try:
            if bridge is None:
                progression = session.regenerate_main()
            else:
                progression = session.regenerate_bridge(bridge - 1)
            return json.dumps({"status": "success", "progression": progression.to_dict()})
        except Exception as e:
            logger.exception("Failed to regenerate progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_regenerate"] = chords_regenerate

    @mcp.tool  # type: ignore[arg-type]
    async def chords_get_progressions() -> str:
        """
        Get the current progressions.

        Returns:
            JSON string with main and bridge progressions, including chord
            ids, names, voicings and durations

        Example:
            chords_get_progressions()
        """
        try:
            progressions = session.require_progressions()
            return json.dumps(
                {
                    "status": "success",
                    "settings": session.settings.to_dict(),
                    "progressions": progressions.to_dict(),
                }
            )
        except Exception as e:
            logger.exception("Failed to get progressions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_get_progressions"] = chords_get_progressions

    @mcp.tool  # type: ignore[arg-type]
    async def chords_list_borrowable() -> str:
        """
        List chords the current key can borrow from its parallel mode.

        Major keys borrow from the parallel minor (♭III, ♭VI, ♭VII, iv, ii°);
        minor keys borrow from the parallel major (IV, V, II). Use the
        index with chords_apply_borrowed.

        Returns:
            JSON string with the borrowable chords

        Example:
            chords_list_borrowable()
        """
        try:
            borrowable = [
                {
                    "index": i,
                    "name": chord.display_name,
                    "degree": chord.degree,
                    "quality": chord.quality.value,
                    "borrowed_from": chord.borrowed_from.value,
                }
                for i, chord in enumerate(session.list_borrowable())
            ]
            return json.dumps(
                {"status": "success", "key": session.settings.key, "borrowable": borrowable}
            )
        except Exception as e:
            logger.exception("Failed to list borrowable chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_list_borrowable"] = chords_list_borrowable

    return tools
