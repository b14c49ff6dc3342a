"""
Rendering tools - MCP tools for note events, playback schedules and MIDI export.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_chords.compiler import (
    chord_start_times,
    progression_filename,
    progression_to_midi,
    render_progression_midi,
    schedule_events,
)
from chuk_mcp_chords.constants import SuccessMessages
from chuk_mcp_chords.patterns import DEFAULT_STRUM_AMOUNT, render_layers
from chuk_mcp_chords.session import ProgressionSession

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_rendering_tools(
    mcp: ChukMCPServer,
    session: ProgressionSession,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register rendering/export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        session: The progression session
        output_dir: Directory for MIDI files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def chords_render_events(
        progression: str,
        chord_pattern: str = "sustain",
        bass_pattern: str = "none",
        melody_pattern: str = "none",
        strum_amount: float = DEFAULT_STRUM_AMOUNT,
        include_schedule: bool = False,
    ) -> str:
        """
        Expand a progression into timed note events.

        Events are in beats from the start of the progression. With
        include_schedule the harmony layer is also placed on a clock in
        seconds at the current tempo, with the current sound type.

        Args:
            progression: Progression id or label
            chord_pattern: sustain, arpeggio-up, arpeggio-down, staccato or strum
            bass_pattern: none, root-only, root-fifth, walking, syncopated or octave
            melody_pattern: none, simple, smooth or rhythmic
            strum_amount: Strum spread and direction (-100 to 100)
            include_schedule: Also return the playback schedule

        Returns:
            JSON string with events per layer

        Example:
            chords_render_events(progression="Main", bass_pattern="walking")
        """
        try:
            target = session.get_progression(progression)
            layers = render_layers(
                target,
                session.key,
                chord_pattern,
                bass_pattern,
                melody_pattern,
                strum_amount,
                session.rng,
            )
            result: dict[str, Any] = {
                "status": "success",
                "progression": target.label,
                "total_beats": target.total_beats,
                "layers": {
                    role.value: [event.to_dict() for event in events]
                    for role, events in layers.items()
                },
            }
            if include_schedule:
                settings = session.settings
                schedule = [
                    note.to_dict()
                    for role_events in layers.values()
                    for note in schedule_events(role_events, settings.tempo, settings.sound_type)
                ]
                result["schedule"] = {
                    "tempo": settings.tempo,
                    "sound_type": settings.sound_type.value,
                    "chord_start_times": chord_start_times(target, settings.tempo),
                    "notes": schedule,
                }
            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to render events")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_render_events"] = chords_render_events

    @mcp.tool  # type: ignore[arg-type]
    async def chords_export_midi(
        progression: str,
        chord_pattern: str = "sustain",
        bass_pattern: str = "none",
        melody_pattern: str = "none",
        strum_amount: float = DEFAULT_STRUM_AMOUNT,
        block_chords: bool = False,
        output_name: str | None = None,
    ) -> str:
        """
        Export a progression to a MIDI file.

        Harmony, bass and melody go to channels 1, 2 and 3. With
        block_chords the patterns are ignored and each chord is written
        as one block.

        Args:
            progression: Progression id or label
            chord_pattern: Comping pattern
            bass_pattern: Bassline pattern
            melody_pattern: Melody pattern
            strum_amount: Strum spread and direction (-100 to 100)
            block_chords: Plain block chords only
            output_name: Optional output filename (without .mid extension)

        Returns:
            JSON string with the file path

        Example:
            chords_export_midi(progression="Main", bass_pattern="root-fifth")
        """
        try:
            target = session.get_progression(progression)
            tempo = session.settings.tempo

            if block_chords:
                midi_file = progression_to_midi(target, tempo)
            else:
                midi_file = render_progression_midi(
                    target,
                    session.key,
                    tempo,
                    chord_pattern=chord_pattern,
                    bass_pattern=bass_pattern,
                    melody_pattern=melody_pattern,
                    strum_amount=strum_amount,
                    rng=session.rng,
                )

            filename = f"{output_name}.mid" if output_name else progression_filename(target)
            output_dir.mkdir(parents=True, exist_ok=True)
            output_path = output_dir / filename
            midi_file.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "ticks_per_beat": midi_file.ticks_per_beat,
                    "message": SuccessMessages.MIDI_EXPORTED.format(
                        label=target.label, path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chords_export_midi"] = chords_export_midi

    return tools
