"""
Tests for the template bank and the YAML template library.
"""

from pathlib import Path

import pytest

from chuk_mcp_chords.constants import Genre, Mood
from chuk_mcp_chords.core import ChordQuality
from chuk_mcp_chords.harmony import TemplateBank, get_template_bank, template_key
from chuk_mcp_chords.models import ProgressionTemplate


@pytest.fixture
def bank() -> TemplateBank:
    """Bank backed by the built-in library."""
    return TemplateBank()


def write_library(path: Path, content: str) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "test.yaml").write_text(content)
    return path


class TestTemplateKey:
    """Tests for Genre_Mood keys."""

    def test_key_format(self) -> None:
        """Genre and mood values joined by an underscore."""
        assert template_key(Genre.LOFI, Mood.CHILL) == "Lo-Fi_Chill"
        assert template_key(Genre.HIP_HOP, Mood.DARK) == "Hip Hop_Dark"


class TestBuiltinLibrary:
    """Tests for the shipped library."""

    def test_loads(self, bank: TemplateBank) -> None:
        """Library loads with defaults and extensions."""
        assert len(bank.defaults) == 3
        assert len(bank.extensions) == 5
        assert "Lo-Fi_Chill" in bank.list_keys()

    def test_every_template_is_valid(self, bank: TemplateBank) -> None:
        """Every step has a degree 1-7 and a known quality."""
        for templates in bank.templates.values():
            for template in templates:
                assert len(template) >= 1
                for step in template.steps:
                    assert 1 <= step.degree <= 7
                    assert isinstance(step.quality, ChordQuality)

    def test_exact_match(self, bank: TemplateBank) -> None:
        """An exact Genre_Mood entry wins."""
        templates = bank.get_templates(Genre.LOFI, Mood.CHILL)
        assert templates == bank.lookup(Genre.LOFI, Mood.CHILL)

    def test_genre_fallback(self, bank: TemplateBank) -> None:
        """A missing mood falls back to every template of the genre."""
        templates = bank.get_templates(Genre.ROCK, Mood.DREAMY)
        expected = (
            bank.lookup(Genre.ROCK, Mood.ENERGETIC)
            + bank.lookup(Genre.ROCK, Mood.DARK)
            + bank.lookup(Genre.ROCK, Mood.UPLIFTING)
        )
        assert sorted(t.signature for t in templates) == sorted(t.signature for t in expected)

    def test_default_fallback(self, bank: TemplateBank) -> None:
        """A genre with no templates gets the defaults."""
        assert bank.get_templates(Genre.METAL, Mood.DARK) == bank.defaults

    def test_lookup_missing(self, bank: TemplateBank) -> None:
        """Exact lookup has no fallback."""
        with pytest.raises(KeyError):
            bank.lookup(Genre.METAL, Mood.DARK)

    def test_named_templates(self, bank: TemplateBank) -> None:
        """Mapping entries keep their names."""
        names = [t.name for t in bank.defaults]
        assert "I-V-vi-IV" in names

    def test_shared_bank(self) -> None:
        """get_template_bank returns one cached instance."""
        assert get_template_bank() is get_template_bank()


class TestCustomLibrary:
    """Tests for loading user-supplied libraries."""

    def test_load_custom(self, temp_dir: Path) -> None:
        """Bare pair lists and named mappings both load."""
        library = write_library(
            temp_dir / "lib",
            """
defaults:
  - [[1, maj], [4, maj], [5, maj]]
templates:
  Jazz_Chill:
    - name: two-five-one
      steps: [[2, min7], [5, "7"], [1, maj7]]
""",
        )
        bank = TemplateBank(library)
        templates = bank.get_templates(Genre.JAZZ, Mood.CHILL)
        assert len(templates) == 1
        assert templates[0].name == "two-five-one"
        assert templates[0].steps[1].quality is ChordQuality.DOMINANT_7
        assert bank.extensions == []

    def test_missing_defaults(self, temp_dir: Path) -> None:
        """A library without defaults is rejected."""
        library = write_library(
            temp_dir / "lib",
            """
templates:
  Jazz_Chill:
    - [[2, min7], [5, "7"], [1, maj7]]
""",
        )
        with pytest.raises(ValueError, match="no default templates"):
            TemplateBank(library).templates

    def test_bad_key(self, temp_dir: Path) -> None:
        """Unknown genres in keys fail at load time."""
        library = write_library(
            temp_dir / "lib",
            """
defaults:
  - [[1, maj]]
templates:
  Polka_Chill:
    - [[1, maj]]
""",
        )
        with pytest.raises(ValueError):
            TemplateBank(library).templates

    def test_bad_quality(self, temp_dir: Path) -> None:
        """Unknown qualities fail at load time."""
        library = write_library(
            temp_dir / "lib",
            """
defaults:
  - [[1, maj6]]
""",
        )
        with pytest.raises(ValueError):
            TemplateBank(library).defaults


class TestProgressionTemplate:
    """Tests for the template model."""

    def test_from_pairs(self) -> None:
        """Pairs become validated steps."""
        template = ProgressionTemplate.from_pairs([(2, "min7"), (5, "7")])
        assert template.signature == ((2, ChordQuality.MINOR_7), (5, ChordQuality.DOMINANT_7))

    def test_degree_out_of_range(self) -> None:
        """Degrees outside 1-7 are rejected."""
        with pytest.raises(ValueError):
            ProgressionTemplate.from_pairs([(8, "maj")])

    def test_signature_ignores_name(self) -> None:
        """Two templates with the same steps share a signature."""
        a = ProgressionTemplate.from_pairs([(1, "maj")], name="a")
        b = ProgressionTemplate.from_pairs([(1, "maj")], name="b")
        assert a.signature == b.signature
