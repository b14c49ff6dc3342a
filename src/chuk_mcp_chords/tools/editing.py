"""
Editing tools - MCP tools for changing chords inside progressions.

Progressions are addressed by id or by label ('Main', 'Bridge 1');
chords by 0-based index.
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


def register_editing_tools(mcp: ChukMCPServer, session: ProgressionSession) -> dict[str, Any]:
    """
    Register chord editing tools with the MCP server.

    Args:
        mcp: The MCP server instance
        session: The progression session

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def _progression_json(progression_id: str) -> dict[str, Any]:
        return session.get_progression(progression_id).to_dict()

    @mcp.tool  # type: ignore[arg-type]
    async def chords_swap(
        source: str,
        source_index: int,
        target_index: int,
        target: str | None = None,
    ) -> str:
        """
        Swap two chords.

        Within one progression the two chords trade places. Across two
        progressions each chord moves into the other's slot.

        Args:
            source: Progression id or label holding the first chord
            source_index: Index of the first chord
            target_index: Index of the second chord
            target: Progression id or label of the second chord (default: same as source)

        Returns:
            JSON string with the updated progressions

        Example:
            chords_swap(source="Main", source_index=1, target_index=3)
        """
        try:
            progressions = session.swap_chord(
                source, target or source, source_index, target_index
            )
            return json.dumps({"status": "success", "progressions": progressions.to_dict()})
        except Exception as e:
            logger.exception("Failed to swap chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_swap"] = chords_swap

    @mcp.tool  # type: ignore[arg-type]
    async def chords_insert_passing(progression: str, index: int) -> str:
        """
        Insert a 2-beat passing chord between two chords.

        The passing chord is rooted near the midpoint of its neighbours'
        roots. The chord before it is halved in length (minimum 1 beat).

        Args:
            progression: Progression id or label
            index: Insert position; needs a chord on both sides (1..len-1)

        Returns:
            JSON string with the inserted chord and the updated progression

        Example:
            chords_insert_passing(progression="Main", index=2)
        """
        try:
            chord = session.insert_passing_chord(progression, index)
            return json.dumps(
                {
                    "status": "success",
                    "chord": chord.to_dict(),
                    "progression": _progression_json(progression),
                    "message": SuccessMessages.CHORD_INSERTED.format(
                        chord=chord.display_name, index=index
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to insert passing chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_insert_passing"] = chords_insert_passing

    @mcp.tool  # type: ignore[arg-type]
    async def chords_regenerate_chord(progression: str, index: int) -> str:
        """
        Re-roll one chord with a new quality and voicing.

        Root and duration are kept.

        Args:
            progression: Progression id or label
            index: Chord index

        Returns:
            JSON string with the new chord

        Example:
            chords_regenerate_chord(progression="Main", index=0)
        """
        try:
            chord = session.regenerate_chord(progression, index)
            return json.dumps({"status": "success", "chord": chord.to_dict()})
        except Exception as e:
            logger.exception("Failed to regenerate chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_regenerate_chord"] = chords_regenerate_chord

    @mcp.tool  # type: ignore[arg-type]
    async def chords_set_duration(progression: str, index: int, duration_beats: float) -> str:
        """
        Set a chord's length in beats.

        Values outside 0.5-8 are clamped.

        Args:
            progression: Progression id or label
            index: Chord index
            duration_beats: New length in beats

        Returns:
            JSON string with the updated chord

        Example:
            chords_set_duration(progression="Bridge 1", index=3, duration_beats=2)
        """
        try:
            chord = session.update_chord_duration(progression, index, duration_beats)
            return json.dumps({"status": "success", "chord": chord.to_dict()})
        except Exception as e:
            logger.exception("Failed to set chord duration")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_set_duration"] = chords_set_duration

    @mcp.tool  # type: ignore[arg-type]
    async def chords_modal_interchange(progression: str, index: int) -> str:
        """
        Replace a chord with a random chord borrowed from the parallel mode.

        Args:
            progression: Progression id or label
            index: Chord index

        Returns:
            JSON string with the borrowed chord

        Example:
            chords_modal_interchange(progression="Main", index=2)
        """
        try:
            chord = session.apply_modal_interchange(progression, index)
            return json.dumps({"status": "success", "chord": chord.to_dict()})
        except Exception as e:
            logger.exception("Failed to apply modal interchange")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_modal_interchange"] = chords_modal_interchange

    @mcp.tool  # type: ignore[arg-type]
    async def chords_apply_borrowed(progression: str, index: int, borrowed: int) -> str:
        """
        Replace a chord with a specific borrowed chord.

        Args:
            progression: Progression id or label
            index: Chord index
            borrowed: Index from chords_list_borrowable

        Returns:
            JSON string with the borrowed chord

        Example:
            chords_apply_borrowed(progression="Main", index=3, borrowed=1)
        """
        try:
            chord = session.apply_borrowed_chord(progression, index, borrowed)
            return json.dumps({"status": "success", "chord": chord.to_dict()})
        except Exception as e:
            logger.exception("Failed to apply borrowed chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_apply_borrowed"] = chords_apply_borrowed

    @mcp.tool  # type: ignore[arg-type]
    async def chords_shift_degree(progression: str, index: int, direction: int) -> str:
        """
        Move a chord one scale degree up or down.

        The new chord takes the diatonic seventh quality of its degree.

        Args:
            progression: Progression id or label
            index: Chord index
            direction: 1 (up) or -1 (down)

        Returns:
            JSON string with the shifted chord

        Example:
            chords_shift_degree(progression="Main", index=1, direction=-1)
        """
        try:
            chord = session.shift_chord_degree(progression, index, direction)
            return json.dumps({"status": "success", "chord": chord.to_dict()})
        except Exception as e:
            logger.exception("Failed to shift chord degree")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_shift_degree"] = chords_shift_degree

    @mcp.tool  # type: ignore[arg-type]
    async def chords_extend(progression: str) -> str:
        """
        Append up to four chords to a progression.

        A progression never grows past eight chords. Voice leading
        continues from the current last chord.

        Args:
            progression: Progression id or label

        Returns:
            JSON string with the added chords and the updated progression

        Example:
            chords_extend(progression="Main")
        """
        try:
            added = session.extend_progression(progression)
            updated = session.get_progression(progression)
            return json.dumps(
                {
                    "status": "success",
                    "added": [chord.to_dict() for chord in added],
                    "progression": updated.to_dict(),
                    "message": SuccessMessages.PROGRESSION_EXTENDED.format(
                        count=len(added), label=updated.label
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to extend progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_extend"] = chords_extend

    return tools
