"""
chuk-mcp-chords - chord progression generation as MCP tools.

Generates genre- and mood-flavoured chord progressions with voice-led
voicings, expands them into bass, comping and melody parts, and renders
the result to note events or MIDI.
"""

__version__ = "0.1.0"
