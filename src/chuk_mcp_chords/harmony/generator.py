"""
Progression generator.

Every progression goes through three stages:
1. Template selection - a (degree, quality) shape from the template bank
2. Per-chord realization - minor-key adjustment, genre enrichment,
   root resolution and voicing against the previous chord
3. Assembly - chords collected into a labelled progression

Nothing is remembered between calls. All randomness comes from the
``rng`` argument (see ``chuk_mcp_chords.randomness``).
"""

from __future__ import annotations

import logging

from chuk_mcp_chords.constants import (
    BRIDGE_LABEL,
    DEFAULT_CHORD_DURATION,
    MAIN_LABEL,
    OPEN_VOICING_GENRES,
    PASSING_CHORD_DURATION,
    Genre,
    Mood,
)
from chuk_mcp_chords.core import ChordQuality, Key, PitchClass, ScaleType
from chuk_mcp_chords.harmony.templates import TemplateBank, get_template_bank
from chuk_mcp_chords.harmony.voicing import voice_chord
from chuk_mcp_chords.models import Chord, ChordProgression, ProgressionSet, ProgressionTemplate
from chuk_mcp_chords.randomness import RandomSource, pick, resolve, sample

logger = logging.getLogger(__name__)

Q = ChordQuality

# (degree, quality) substitutions for natural minor
_MINOR_KEY_ADJUSTMENTS: dict[tuple[int, ChordQuality], tuple[int, ChordQuality]] = {
    (1, Q.MAJOR): (1, Q.MINOR),
    (1, Q.MAJOR_7): (1, Q.MINOR_7),
    (1, Q.MAJOR_9): (1, Q.MINOR_9),
    (4, Q.MAJOR): (4, Q.MINOR),
    (4, Q.MAJOR_7): (4, Q.MINOR_7),
    (5, Q.MAJOR): (5, Q.MINOR),
    (6, Q.MINOR): (6, Q.MAJOR),
    (6, Q.MINOR_7): (6, Q.MAJOR_7),
}

# Probability that a chord gets upgraded to a richer quality.
# Genres not listed are never enriched.
ENRICHMENT_CHANCE: dict[Genre, float] = {
    Genre.NEO_SOUL: 0.6,
    Genre.JAZZ: 0.5,
    Genre.LOFI: 0.4,
    Genre.RNB: 0.3,
    Genre.HIP_HOP: 0.2,
    Genre.FUNK: 0.3,
    Genre.ROCK: 0.0,
    Genre.POP: 0.1,
    Genre.EDM: 0.1,
    Genre.HOUSE: 0.2,
    Genre.UK_GARAGE: 0.4,
    Genre.FUTURE_BASS: 0.3,
}

QUALITY_UPGRADES: dict[ChordQuality, tuple[ChordQuality, ...]] = {
    Q.MAJOR_7: (Q.MAJOR_9, Q.MAJOR_13),
    Q.MINOR_7: (Q.MINOR_9, Q.MINOR_11),
    Q.DOMINANT_7: (Q.DOMINANT_9, Q.DOMINANT_13),
    Q.MAJOR_9: (Q.MAJOR_13,),
    Q.MINOR_9: (Q.MINOR_11,),
    Q.DOMINANT_9: (Q.DOMINANT_13,),
}

# Replacement qualities for single-chord regeneration, by key mode
_REPLACEMENT_QUALITIES: dict[ScaleType, tuple[ChordQuality, ...]] = {
    ScaleType.MINOR: (
        Q.MINOR_7,
        Q.MINOR_9,
        Q.MINOR_11,
        Q.HALF_DIMINISHED_7,
        Q.DOMINANT_7,
        Q.DIMINISHED_7,
    ),
    ScaleType.MAJOR: (
        Q.MAJOR_7,
        Q.MAJOR_9,
        Q.MAJOR_13,
        Q.DOMINANT_7,
        Q.DOMINANT_9,
        Q.DOMINANT_13,
        Q.MINOR_7,
        Q.MINOR_9,
    ),
}

# Reference octave for root arithmetic (C4 = 60)
_ROOT_OCTAVE = 4


def uses_open_voicing(genre: Genre | None) -> bool:
    """Jazz, Neo Soul and Lo-Fi get a separated bass and drop-2 upper voices."""
    return genre in OPEN_VOICING_GENRES


def adjust_for_minor_key(
    degree: int, quality: ChordQuality, key: Key
) -> tuple[int, ChordQuality]:
    """
    Remap a major-key template step for a natural-minor key.

    Only a fixed set of (degree, quality) pairs changes; everything else,
    and every step in a major key, passes through.
    """
    if key.scale != ScaleType.MINOR:
        return degree, quality
    return _MINOR_KEY_ADJUSTMENTS.get((degree, quality), (degree, quality))


def enrich_quality(
    quality: ChordQuality, genre: Genre | None, rng: RandomSource | None = None
) -> ChordQuality:
    """
    Probabilistically upgrade a quality (maj7 -> maj9/maj13, ...).

    One draw decides whether to enrich; a second picks the upgrade.
    Qualities without an upgrade pass through unchanged.

    Args:
        quality: Quality to color
        genre: Genre whose enrichment chance applies
        rng: Random source

    Returns:
        The original or an upgraded quality
    """
    if genre is None:
        return quality

    rng = resolve(rng)
    probability = ENRICHMENT_CHANCE.get(genre, 0.0)
    if rng.random() >= probability:
        return quality

    options = QUALITY_UPGRADES.get(quality)
    if not options:
        return quality
    return pick(rng, options)


def create_chord_from_degree(
    key: Key,
    degree: int,
    quality: ChordQuality,
    previous_notes: tuple[int, ...] | list[int] | None = None,
    genre: Genre | None = None,
    duration_beats: float = DEFAULT_CHORD_DURATION,
    rng: RandomSource | None = None,
) -> Chord:
    """
    Realize one template step as a voiced chord.

    Args:
        key: Key the degree refers to
        degree: 1-based scale degree
        quality: Template quality (before minor adjustment and enrichment)
        previous_notes: Voicing of the previous chord
        genre: Genre for enrichment and voicing style
        duration_beats: Chord length
        rng: Random source

    Returns:
        Voiced chord
    """
    degree, quality = adjust_for_minor_key(degree, quality, key)
    quality = enrich_quality(quality, genre, rng)
    root = key.degree_note(degree)

    notes = voice_chord(
        root,
        quality,
        previous_notes=previous_notes,
        use_open_voicing=uses_open_voicing(genre),
    )
    return Chord(root=root, quality=quality, notes=tuple(notes), duration_beats=duration_beats)


def realize_steps(
    key: Key,
    steps: list[tuple[int, ChordQuality]],
    genre: Genre | None = None,
    previous_notes: tuple[int, ...] | None = None,
    rng: RandomSource | None = None,
) -> list[Chord]:
    """Fold template steps into chords, threading voicing context."""
    chords: list[Chord] = []
    context = previous_notes
    for degree, quality in steps:
        chord = create_chord_from_degree(key, degree, quality, context, genre, rng=rng)
        chords.append(chord)
        context = chord.notes
    return chords


def generate_progression_from_template(
    key: Key,
    template: ProgressionTemplate,
    label: str,
    genre: Genre | None = None,
    rng: RandomSource | None = None,
) -> ChordProgression:
    """
    Realize a whole template.

    The first chord has no voicing context (closed voicing); each later
    chord is voiced against the one before it.
    """
    steps = [step.as_tuple() for step in template.steps]
    chords = realize_steps(key, steps, genre=genre, rng=rng)
    return ChordProgression(chords=tuple(chords), label=label)


def _distinct(templates: list[ProgressionTemplate]) -> list[ProgressionTemplate]:
    """Drop templates whose steps repeat an earlier one."""
    seen: set[tuple[tuple[int, ChordQuality], ...]] = set()
    result = []
    for template in templates:
        if template.signature not in seen:
            seen.add(template.signature)
            result.append(template)
    return result


def select_templates(
    templates: list[ProgressionTemplate],
    count: int,
    rng: RandomSource,
    bank: TemplateBank,
) -> list[ProgressionTemplate]:
    """
    Pick ``count`` distinct templates.

    Supplements from the default bank when the pool is too small and
    repeats templates only when even that is not enough.
    """
    pool = _distinct(templates)
    if len(pool) < count:
        pool = _distinct(pool + bank.defaults)

    selected = sample(rng, pool, count)
    i = 0
    while len(selected) < count:
        selected.append(selected[i % len(selected)])
        i += 1
    return selected


def generate_progressions(
    key: Key,
    genre: Genre,
    mood: Mood,
    rng: RandomSource | None = None,
    bank: TemplateBank | None = None,
) -> ProgressionSet:
    """
    Generate a main progression and two bridges.

    Args:
        key: Key
        genre: Genre
        mood: Mood
        rng: Random source
        bank: Template bank (defaults to the built-in library)

    Returns:
        ProgressionSet labelled 'Main', 'Bridge 1', 'Bridge 2'
    """
    rng = resolve(rng)
    bank = bank or get_template_bank()

    templates = bank.get_templates(genre, mood)
    main_template, *bridge_templates = select_templates(templates, 3, rng, bank)
    logger.debug(
        "Selected templates: %s | %s", main_template, " | ".join(map(str, bridge_templates))
    )

    main = generate_progression_from_template(key, main_template, MAIN_LABEL, genre, rng)
    bridges = tuple(
        generate_progression_from_template(
            key, template, BRIDGE_LABEL.format(number=i + 1), genre, rng
        )
        for i, template in enumerate(bridge_templates)
    )
    return ProgressionSet(main=main, bridges=bridges)


def regenerate_progression(
    key: Key,
    genre: Genre,
    mood: Mood,
    label: str,
    rng: RandomSource | None = None,
    bank: TemplateBank | None = None,
) -> ChordProgression:
    """
    Generate one progression from a fresh template draw.

    The draw may repeat the template of the progression being replaced.
    """
    rng = resolve(rng)
    bank = bank or get_template_bank()
    template = pick(rng, bank.get_templates(genre, mood))
    return generate_progression_from_template(key, template, label, genre, rng)


def _js_round(value: float) -> int:
    """Round half up (2.5 -> 3), unlike Python's banker's rounding."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def passing_root(prev_root: PitchClass, next_root: PitchClass, key: Key) -> PitchClass:
    """
    Scale tone nearest the midpoint of two roots.

    Roots are placed in octave 4 and the midpoint rounded half up. An
    out-of-scale midpoint resolves to the nearest scale tone; on equal
    distance the lower scale degree wins.
    """
    midpoint = _js_round((prev_root.to_midi(_ROOT_OCTAVE) + next_root.to_midi(_ROOT_OCTAVE)) / 2)
    candidate = PitchClass(midpoint % 12)

    scale_notes = key.scale_notes()
    if candidate in scale_notes:
        return candidate

    return min(scale_notes, key=lambda pc: abs(pc.to_midi(_ROOT_OCTAVE) - midpoint))


def passing_quality(prev_chord: Chord, next_chord: Chord) -> ChordQuality:
    """maj7 by default, min7 next to a minor chord, 7 next to a dominant 7."""
    quality = Q.MAJOR_7
    if prev_chord.quality.is_minor or next_chord.quality.is_minor:
        quality = Q.MINOR_7
    if Q.DOMINANT_7 in (prev_chord.quality, next_chord.quality):
        quality = Q.DOMINANT_7
    return quality


def generate_passing_chord(
    prev_chord: Chord,
    next_chord: Chord,
    key: Key,
    genre: Genre,
    rng: RandomSource | None = None,
) -> Chord:
    """
    Build a 2-beat chord connecting two neighbours.

    Args:
        prev_chord: Chord before the insertion point
        next_chord: Chord after the insertion point
        key: Current key
        genre: Genre for enrichment and voicing
        rng: Random source

    Returns:
        Passing chord voiced from the previous chord
    """
    root = passing_root(prev_chord.root, next_chord.root, key)
    quality = enrich_quality(passing_quality(prev_chord, next_chord), genre, rng)

    notes = voice_chord(
        root,
        quality,
        previous_notes=prev_chord.notes,
        use_open_voicing=uses_open_voicing(genre),
    )
    logger.debug(
        "Passing chord between %s and %s: %s%s",
        prev_chord.display_name,
        next_chord.display_name,
        root.spell(),
        quality.suffix,
    )
    return Chord(
        root=root, quality=quality, notes=tuple(notes), duration_beats=PASSING_CHORD_DURATION
    )


def generate_single_chord(
    old_chord: Chord,
    prev_chord: Chord | None,
    key: Key,
    genre: Genre,
    rng: RandomSource | None = None,
) -> Chord:
    """
    Re-roll one chord: same root and duration, a different quality.

    The new quality is drawn from a pool suited to the key mode, minus
    the current quality, then enriched and revoiced from ``prev_chord``.
    """
    rng = resolve(rng)
    pool = [q for q in _REPLACEMENT_QUALITIES[key.scale] if q != old_chord.quality]
    quality = pick(rng, pool) if pool else old_chord.quality
    quality = enrich_quality(quality, genre, rng)

    notes = voice_chord(
        old_chord.root,
        quality,
        previous_notes=prev_chord.notes if prev_chord else None,
        use_open_voicing=uses_open_voicing(genre),
    )
    return Chord(
        root=old_chord.root,
        quality=quality,
        notes=tuple(notes),
        duration_beats=old_chord.duration_beats,
    )
