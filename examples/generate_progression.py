#!/usr/bin/env python3
"""
Example: Generate a progression set and export it to MIDI.

This walks the whole pipeline without the MCP server: settings, generation,
a few chord edits, then pattern rendering and MIDI export.

Usage:
    python examples/generate_progression.py
    # Creates: examples/output/Main_*.mid, examples/output/Bridge_1_*.mid, ...
"""

import random
from pathlib import Path

from chuk_mcp_chords.compiler import (
    progression_filename,
    progression_to_midi,
    render_progression_midi,
)
from chuk_mcp_chords.models import AppSettings
from chuk_mcp_chords.session import ProgressionSession


def main() -> None:
    """Generate example progressions."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    session = ProgressionSession(
        AppSettings(key="D_minor", tempo=84, genre="Neo Soul", mood="Chill"),
        rng=random.Random(2024),
    )
    progressions = session.generate()

    print(f"Key: {session.key}  Genre: {session.settings.genre.value}")
    for progression in progressions.all():
        print(f"  {progression.label:<9} {' - '.join(c.display_name for c in progression.chords)}")

    # Edits: passing chord, borrowed chord, extension
    print("\nEditing Main...")
    passing = session.insert_passing_chord("Main", 2)
    print(f"  Passing chord: {passing.display_name}")
    borrowed = session.apply_modal_interchange("Main", 0)
    print(f"  Borrowed: {borrowed.display_name} ({borrowed.borrowed_degree})")
    added = session.extend_progression("Main")
    print(f"  Extended by: {', '.join(c.display_name for c in added) or 'nothing'}")

    main = session.get_progression("Main")
    print(f"  Main is now {len(main)} chords, {main.total_beats} beats")

    # Full arrangement of Main: strummed chords, walking bass, smooth melody
    mid = render_progression_midi(
        main,
        session.key,
        session.settings.tempo,
        chord_pattern="strum",
        bass_pattern="walking",
        melody_pattern="smooth",
        rng=session.rng,
    )
    path = output_dir / progression_filename(main)
    mid.save(str(path))
    print(f"\n  Created: {path}")

    # Block chords for the bridges
    for bridge in progressions.bridges:
        path = output_dir / progression_filename(bridge)
        progression_to_midi(bridge, session.settings.tempo).save(str(path))
        print(f"  Created: {path}")

    print("\nDone! Open the MIDI files in your DAW to hear them.")


if __name__ == "__main__":
    main()
