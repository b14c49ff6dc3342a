"""
Harmony engine - voicing, templates and progression generation.

This module provides:
- voice_chord: Closed, voice-led and open (drop-2) voicings
- TemplateBank: Genre/mood progression templates from the YAML library
- Progression generation, passing chords and single-chord re-rolls
- Modal interchange, degree shifting and progression extension
"""

from chuk_mcp_chords.harmony.generator import (
    ENRICHMENT_CHANCE,
    QUALITY_UPGRADES,
    adjust_for_minor_key,
    create_chord_from_degree,
    enrich_quality,
    generate_passing_chord,
    generate_progression_from_template,
    generate_progressions,
    generate_single_chord,
    regenerate_progression,
    uses_open_voicing,
)
from chuk_mcp_chords.harmony.interchange import (
    ShiftedDegree,
    create_borrowed_chord,
    create_shifted_degree_chord,
    generate_extension_chords,
    generate_modal_interchange_chord,
    get_shifted_degree_chord,
)
from chuk_mcp_chords.harmony.templates import TemplateBank, get_template_bank, template_key
from chuk_mcp_chords.harmony.voicing import voice_chord

__all__ = [
    # Voicing
    "voice_chord",
    # Templates
    "TemplateBank",
    "get_template_bank",
    "template_key",
    # Generation
    "ENRICHMENT_CHANCE",
    "QUALITY_UPGRADES",
    "adjust_for_minor_key",
    "create_chord_from_degree",
    "enrich_quality",
    "generate_passing_chord",
    "generate_progression_from_template",
    "generate_progressions",
    "generate_single_chord",
    "regenerate_progression",
    "uses_open_voicing",
    # Substitution
    "ShiftedDegree",
    "create_borrowed_chord",
    "create_shifted_degree_chord",
    "generate_extension_chords",
    "generate_modal_interchange_chord",
    "get_shifted_degree_chord",
]
