#!/usr/bin/env python3
"""
Async Chord Progression MCP Server using chuk-mcp-server

This server provides MCP tools for generating and editing chord
progressions in a chosen key, genre and mood.

The server provides tools for:
- Settings (key, tempo, genre, mood, sound type)
- Generating a main progression and two bridges
- Chord edits: swaps, passing chords, borrowed chords, degree shifts
- Rendering bass, comping and melody patterns to note events
- Exporting progressions to MIDI files
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_chords.session import ProgressionSession
from chuk_mcp_chords.tools import (
    register_editing_tools,
    register_generation_tools,
    register_rendering_tools,
    register_settings_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-chords")

OUTPUT_DIR = Path.cwd() / "output"

# One session per server process
session = ProgressionSession()

# Register all tools
settings_tools = register_settings_tools(mcp, session)
generation_tools = register_generation_tools(mcp, session)
editing_tools = register_editing_tools(mcp, session)
rendering_tools = register_rendering_tools(mcp, session, OUTPUT_DIR)

# Export tool functions for direct access
chords_get_settings = settings_tools["chords_get_settings"]
chords_update_settings = settings_tools["chords_update_settings"]

chords_generate = generation_tools["chords_generate"]
chords_regenerate = generation_tools["chords_regenerate"]
chords_get_progressions = generation_tools["chords_get_progressions"]
chords_list_borrowable = generation_tools["chords_list_borrowable"]

chords_swap = editing_tools["chords_swap"]
chords_insert_passing = editing_tools["chords_insert_passing"]
chords_regenerate_chord = editing_tools["chords_regenerate_chord"]
chords_set_duration = editing_tools["chords_set_duration"]
chords_modal_interchange = editing_tools["chords_modal_interchange"]
chords_apply_borrowed = editing_tools["chords_apply_borrowed"]
chords_shift_degree = editing_tools["chords_shift_degree"]
chords_extend = editing_tools["chords_extend"]

chords_render_events = rendering_tools["chords_render_events"]
chords_export_midi = rendering_tools["chords_export_midi"]

logger.info("CHUK Chords MCP Server initialized")
logger.info("  Output dir: %s", OUTPUT_DIR)
