"""
Tests for progression generation, passing chords and single-chord re-rolls.
"""

import random

import pytest

from chuk_mcp_chords.constants import Genre, Mood
from chuk_mcp_chords.core import ChordQuality, Key, PitchClass
from chuk_mcp_chords.harmony import (
    adjust_for_minor_key,
    create_chord_from_degree,
    enrich_quality,
    generate_passing_chord,
    generate_progression_from_template,
    generate_progressions,
    generate_single_chord,
    get_template_bank,
    regenerate_progression,
)
from chuk_mcp_chords.harmony.generator import passing_quality, passing_root, select_templates
from chuk_mcp_chords.models import Chord, ProgressionSet, ProgressionTemplate


def shape(progressions: ProgressionSet) -> list:
    """Everything about a progression set except the random ids."""
    return [
        (p.label, [(c.root, c.quality, c.notes, c.duration_beats) for c in p.chords])
        for p in progressions.all()
    ]


class TestMinorKeyAdjustment:
    """Tests for major-template remapping in minor keys."""

    def test_tonic_becomes_minor(self, a_minor: Key) -> None:
        """I and Imaj7 become i and im7."""
        assert adjust_for_minor_key(1, ChordQuality.MAJOR, a_minor) == (1, ChordQuality.MINOR)
        assert adjust_for_minor_key(1, ChordQuality.MAJOR_7, a_minor) == (
            1,
            ChordQuality.MINOR_7,
        )

    def test_submediant_becomes_major(self, a_minor: Key) -> None:
        """vi becomes VI."""
        assert adjust_for_minor_key(6, ChordQuality.MINOR_7, a_minor) == (
            6,
            ChordQuality.MAJOR_7,
        )

    def test_unlisted_pairs_pass_through(self, a_minor: Key) -> None:
        """Only the fixed table changes anything."""
        assert adjust_for_minor_key(5, ChordQuality.DOMINANT_7, a_minor) == (
            5,
            ChordQuality.DOMINANT_7,
        )

    def test_major_key_untouched(self, c_major: Key) -> None:
        """Major keys never remap."""
        assert adjust_for_minor_key(1, ChordQuality.MAJOR, c_major) == (1, ChordQuality.MAJOR)


class TestEnrichment:
    """Tests for probabilistic quality upgrades."""

    def test_no_genre(self, scripted) -> None:
        """Without a genre nothing is drawn or changed."""
        rng = scripted([0.0])
        assert enrich_quality(ChordQuality.MAJOR_7, None, rng) is ChordQuality.MAJOR_7
        assert rng.calls == 0

    def test_rock_never_enriches(self, scripted) -> None:
        """A zero chance never fires, even on a zero draw."""
        assert enrich_quality(ChordQuality.MAJOR_7, Genre.ROCK, scripted([0.0])) is (
            ChordQuality.MAJOR_7
        )

    def test_enriches_below_chance(self, scripted) -> None:
        """A draw under the genre chance picks an upgrade."""
        assert enrich_quality(ChordQuality.MAJOR_7, Genre.NEO_SOUL, scripted([0.1, 0.0])) is (
            ChordQuality.MAJOR_9
        )
        assert enrich_quality(ChordQuality.MAJOR_7, Genre.NEO_SOUL, scripted([0.1, 0.99])) is (
            ChordQuality.MAJOR_13
        )

    def test_draw_above_chance(self, scripted) -> None:
        """A draw at or over the chance leaves the quality."""
        assert enrich_quality(ChordQuality.MINOR_7, Genre.NEO_SOUL, scripted([0.6])) is (
            ChordQuality.MINOR_7
        )

    def test_triads_have_no_upgrade(self, scripted) -> None:
        """Qualities without an upgrade pass through."""
        assert enrich_quality(ChordQuality.MAJOR, Genre.JAZZ, scripted([0.0])) is (
            ChordQuality.MAJOR
        )

    def test_unlisted_genre(self, scripted) -> None:
        """Genres without an enrichment chance are never enriched."""
        assert enrich_quality(ChordQuality.MINOR_7, Genre.METAL, scripted([0.0])) is (
            ChordQuality.MINOR_7
        )


class TestChordFromDegree:
    """Tests for single-step realization."""

    def test_dominant(self, c_major: Key) -> None:
        """Degree 5 in C is G."""
        chord = create_chord_from_degree(c_major, 5, ChordQuality.DOMINANT_7)
        assert chord.root == PitchClass.G
        assert chord.quality is ChordQuality.DOMINANT_7
        assert len(chord.notes) == 4
        assert chord.duration_beats == 4.0

    def test_minor_key(self, a_minor: Key) -> None:
        """Template Imaj7 becomes Am7 in A minor."""
        chord = create_chord_from_degree(a_minor, 1, ChordQuality.MAJOR_7)
        assert chord.display_name == "Am7"

    def test_open_voicing_genre(self, c_major: Key, scripted) -> None:
        """Jazz voicings put the bass an octave below the default root."""
        chord = create_chord_from_degree(
            c_major, 1, ChordQuality.MAJOR_7, genre=Genre.JAZZ, rng=scripted([0.99])
        )
        assert chord.notes[0] == 48


class TestGenerateProgressions:
    """Tests for the main + bridges generator."""

    def test_labels(self, c_major: Key) -> None:
        """One main progression and two bridges."""
        progressions = generate_progressions(c_major, Genre.LOFI, Mood.CHILL, random.Random(1))
        assert progressions.main.label == "Main"
        assert [b.label for b in progressions.bridges] == ["Bridge 1", "Bridge 2"]

    def test_seeded_is_deterministic(self, c_major: Key) -> None:
        """The same seed reproduces the same chords."""
        first = generate_progressions(c_major, Genre.JAZZ, Mood.CHILL, random.Random(42))
        second = generate_progressions(c_major, Genre.JAZZ, Mood.CHILL, random.Random(42))
        assert shape(first) == shape(second)

    def test_unique_ids(self, c_major: Key) -> None:
        """Every progression and chord gets its own id."""
        progressions = generate_progressions(c_major, Genre.POP, Mood.CHILL, random.Random(3))
        ids = [p.id for p in progressions.all()]
        ids += [c.id for p in progressions.all() for c in p.chords]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize(
        "key_name,genre,mood",
        [
            ("C_major", Genre.LOFI, Mood.CHILL),
            ("A_minor", Genre.ROCK, Mood.DARK),
            ("F#_minor", Genre.HOUSE, Mood.DREAMY),
            ("Eb_major", Genre.METAL, Mood.ENERGETIC),
        ],
    )
    def test_roots_are_diatonic(self, key_name: str, genre: Genre, mood: Mood) -> None:
        """Generated roots always come from the key's scale."""
        key = Key.parse(key_name)
        scale = key.scale_notes()
        for seed in range(5):
            progressions = generate_progressions(key, genre, mood, random.Random(seed))
            for progression in progressions.all():
                assert len(progression) >= 1
                for chord in progression.chords:
                    assert chord.root in scale
                    assert len(chord.notes) == len(chord.quality.intervals)

    def test_rock_never_enriched(self, c_major: Key) -> None:
        """Rock chords keep their template qualities."""
        bank = get_template_bank()
        allowed = {
            step.quality for template in bank.genre_templates(Genre.ROCK) for step in template.steps
        }
        allowed |= {step.quality for template in bank.defaults for step in template.steps}
        for seed in range(5):
            progressions = generate_progressions(
                c_major, Genre.ROCK, Mood.ENERGETIC, random.Random(seed)
            )
            for progression in progressions.all():
                assert all(chord.quality in allowed for chord in progression.chords)

    def test_first_chord_voiced_closed(self, c_major: Key) -> None:
        """The first chord has no voicing context."""
        template = ProgressionTemplate.from_pairs([(1, "maj7"), (5, "7")])
        progression = generate_progression_from_template(c_major, template, "Main")
        assert progression.chords[0].notes == (59, 60, 64, 67)
        assert progression.chords[1].notes == (55, 59, 62, 65)


class TestSelectTemplates:
    """Tests for distinct template selection."""

    def test_supplements_from_defaults(self) -> None:
        """A single genre template is topped up with defaults."""
        bank = get_template_bank()
        only = ProgressionTemplate.from_pairs([(2, "min7"), (5, "7")])
        selected = select_templates([only], 3, random.Random(0), bank)
        assert len(selected) == 3
        assert len({t.signature for t in selected}) == 3

    def test_repeats_as_last_resort(self) -> None:
        """With nothing to supplement from, templates repeat."""

        class EmptyBank:
            defaults: list = []

        only = ProgressionTemplate.from_pairs([(1, "maj")])
        selected = select_templates([only], 3, random.Random(0), EmptyBank())
        assert selected == [only, only, only]

    def test_duplicates_dropped(self) -> None:
        """Templates with identical steps count once."""
        a = ProgressionTemplate.from_pairs([(1, "maj")], name="a")
        b = ProgressionTemplate.from_pairs([(1, "maj")], name="b")
        c = ProgressionTemplate.from_pairs([(4, "maj")])
        d = ProgressionTemplate.from_pairs([(5, "maj")])
        selected = select_templates([a, b, c, d], 3, random.Random(0), get_template_bank())
        assert len({t.signature for t in selected}) == 3


class TestRegenerateProgression:
    """Tests for single progression regeneration."""

    def test_label_kept(self, c_major: Key) -> None:
        """The new progression carries the requested label."""
        progression = regenerate_progression(
            c_major, Genre.FUNK, Mood.CHILL, "Bridge 2", random.Random(5)
        )
        assert progression.label == "Bridge 2"
        assert len(progression) >= 1


class TestPassingChord:
    """Tests for passing chord generation."""

    def test_c_to_g(self, c_major: Key) -> None:
        """Between C and G the midpoint lands on E."""
        prev_chord = create_chord_from_degree(c_major, 1, ChordQuality.MAJOR_7)
        next_chord = create_chord_from_degree(c_major, 5, ChordQuality.MAJOR_7)
        chord = generate_passing_chord(prev_chord, next_chord, c_major, Genre.ROCK)
        assert chord.root == PitchClass.E
        assert chord.quality is ChordQuality.MAJOR_7
        assert chord.duration_beats == 2.0

    def test_dominant_wins(self, c_major: Key) -> None:
        """A dominant neighbour makes the passing chord dominant."""
        prev_chord = create_chord_from_degree(c_major, 2, ChordQuality.MINOR_7)
        next_chord = create_chord_from_degree(c_major, 5, ChordQuality.DOMINANT_7)
        chord = generate_passing_chord(prev_chord, next_chord, c_major, Genre.ROCK)
        assert chord.root == PitchClass.F
        assert chord.quality is ChordQuality.DOMINANT_7

    def test_minor_neighbour(self, c_major: Key) -> None:
        """A minor neighbour makes the passing chord min7."""
        prev_chord = create_chord_from_degree(c_major, 6, ChordQuality.MINOR)
        next_chord = create_chord_from_degree(c_major, 4, ChordQuality.MAJOR_7)
        assert passing_quality(prev_chord, next_chord) is ChordQuality.MINOR_7

    def test_root_snaps_to_scale(self, c_major: Key) -> None:
        """An out-of-key midpoint resolves to the lower scale tone on a tie."""
        assert passing_root(PitchClass.C, PitchClass.D, c_major) == PitchClass.C

    def test_midpoint_rounds_half_up(self, c_major: Key) -> None:
        """(62 + 67) / 2 = 64.5 rounds up to F."""
        assert passing_root(PitchClass.D, PitchClass.G, c_major) == PitchClass.F
        # 65.5 -> 66 (F#), equidistant from F and G
        assert passing_root(PitchClass.D, PitchClass.A, c_major) == PitchClass.F


class TestSingleChord:
    """Tests for re-rolling one chord."""

    def test_keeps_root_and_duration(self, c_major: Key) -> None:
        """Only the quality and voicing change."""
        old = Chord(
            root=PitchClass.A,
            quality=ChordQuality.MINOR_7,
            notes=(57, 60, 64, 67),
            duration_beats=2.5,
        )
        for seed in range(10):
            chord = generate_single_chord(old, None, c_major, Genre.ROCK, random.Random(seed))
            assert chord.root == PitchClass.A
            assert chord.duration_beats == 2.5
            assert chord.quality is not ChordQuality.MINOR_7
            assert chord.id != old.id

    def test_minor_key_pool(self, a_minor: Key, scripted) -> None:
        """Minor keys draw from the minor pool, skipping the current quality."""
        old = Chord(root=PitchClass.A, quality=ChordQuality.MINOR_7, notes=(57, 60, 64, 67))
        chord = generate_single_chord(old, None, a_minor, Genre.ROCK, scripted([0.0]))
        assert chord.quality is ChordQuality.MINOR_9

    def test_voice_led_from_previous(self, c_major: Key, scripted, cmaj7: Chord) -> None:
        """The replacement is voiced against the chord before it."""
        old = Chord(root=PitchClass.G, quality=ChordQuality.MAJOR_7, notes=(55, 59, 62, 66))
        chord = generate_single_chord(old, cmaj7, c_major, Genre.ROCK, scripted([0.2]))
        # Pool without maj7: maj9, maj13, 7, 9, 13, min7, min9 -> index 1
        assert chord.quality is ChordQuality.MAJOR_13
        assert len(chord.notes) == 5
