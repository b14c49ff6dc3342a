"""
Session layer - settings plus the current progression snapshot.

This module provides:
- edits: Pure functions that return updated progressions
- ProgressionSession: Stateful owner of settings, randomness and progressions
"""

from chuk_mcp_chords.session import edits
from chuk_mcp_chords.session.manager import ProgressionSession

__all__ = ["ProgressionSession", "edits"]
