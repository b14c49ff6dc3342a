"""
Template bank - loads progression templates from the YAML library.

Library files live in ``harmony/library/*.yaml``. Each file may carry:
- ``templates``: mapping of 'Genre_Mood' keys to template lists
- ``defaults``: generic templates used when a genre has none
- ``extensions``: continuations used when extending a progression

A template entry is either a bare list of [degree, quality] pairs or a
mapping with ``steps`` and an optional ``name``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_chords.constants import Genre, Mood
from chuk_mcp_chords.models.template import ProgressionTemplate

logger = logging.getLogger(__name__)


def template_key(genre: Genre, mood: Mood) -> str:
    """Library key for a genre/mood pair, e.g. 'Lo-Fi_Chill'."""
    return f"{genre.value}_{mood.value}"


class TemplateBank:
    """
    Genre/mood indexed progression templates.

    The library is read once, on first use. Every key and quality is
    validated at load time, so a bad library entry fails immediately
    instead of surfacing during generation.
    """

    def __init__(self, library_path: Path | None = None):
        """
        Initialize the template bank.

        Args:
            library_path: Directory of template YAML files
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self._templates: dict[str, list[ProgressionTemplate]] | None = None
        self._defaults: list[ProgressionTemplate] = []
        self._extensions: list[ProgressionTemplate] = []

    @property
    def templates(self) -> dict[str, list[ProgressionTemplate]]:
        """All Genre_Mood template lists."""
        if self._templates is None:
            self._load()
        assert self._templates is not None
        return self._templates

    @property
    def defaults(self) -> list[ProgressionTemplate]:
        """Generic fallback templates."""
        if self._templates is None:
            self._load()
        return list(self._defaults)

    @property
    def extensions(self) -> list[ProgressionTemplate]:
        """Continuation templates for extending a progression."""
        if self._templates is None:
            self._load()
        return list(self._extensions)

    def get_templates(self, genre: Genre, mood: Mood) -> list[ProgressionTemplate]:
        """
        Templates for a genre/mood, with fallbacks.

        Exact 'Genre_Mood' match first, then every template of the genre
        across moods, then the default bank. Never empty.

        Args:
            genre: Genre
            mood: Mood

        Returns:
            Candidate templates
        """
        exact = self.templates.get(template_key(genre, mood))
        if exact:
            return list(exact)

        genre_templates = self.genre_templates(genre)
        if genre_templates:
            logger.debug(
                "No %s templates, using all %s moods", template_key(genre, mood), genre.value
            )
            return genre_templates

        logger.debug("No templates for genre %s, using defaults", genre.value)
        return self.defaults

    def genre_templates(self, genre: Genre) -> list[ProgressionTemplate]:
        """Every template of a genre, across all moods, in library order."""
        prefix = f"{genre.value}_"
        result: list[ProgressionTemplate] = []
        for key, templates in self.templates.items():
            if key.startswith(prefix):
                result.extend(templates)
        return result

    def lookup(self, genre: Genre, mood: Mood) -> list[ProgressionTemplate]:
        """
        Exact lookup with no fallback.

        Raises:
            KeyError: If the library has no templates for the pair
        """
        key = template_key(genre, mood)
        if key not in self.templates:
            raise KeyError(f"No templates for '{key}'")
        return list(self.templates[key])

    def list_keys(self) -> list[str]:
        """All Genre_Mood keys present in the library."""
        return sorted(self.templates)

    def _load(self) -> None:
        """Read and validate every library file."""
        templates: dict[str, list[ProgressionTemplate]] = {}
        defaults: list[ProgressionTemplate] = []
        extensions: list[ProgressionTemplate] = []

        for path in sorted(self.library_path.glob("*.yaml")):
            data = self._read_file(path)

            for key, entries in (data.get("templates") or {}).items():
                self._validate_key(key, path)
                templates.setdefault(key, []).extend(self._parse_entries(entries))

            defaults.extend(self._parse_entries(data.get("defaults") or []))
            extensions.extend(self._parse_entries(data.get("extensions") or []))

        if not defaults:
            raise ValueError(f"Template library at {self.library_path} has no default templates")

        logger.debug(
            "Loaded %d template groups, %d defaults, %d extensions",
            len(templates),
            len(defaults),
            len(extensions),
        )
        self._templates = templates
        self._defaults = defaults
        self._extensions = extensions

    @staticmethod
    def _read_file(path: Path) -> dict[str, Any]:
        with open(path) as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Template file {path.name} must contain a mapping")
        return data

    @staticmethod
    def _validate_key(key: str, path: Path) -> None:
        genre_name, sep, mood_name = key.rpartition("_")
        if not sep:
            raise ValueError(f"Bad template key '{key}' in {path.name}")
        # Raises ValueError on unknown names
        Genre(genre_name)
        Mood(mood_name)

    @staticmethod
    def _parse_entries(entries: list[Any]) -> list[ProgressionTemplate]:
        result = []
        for entry in entries:
            if isinstance(entry, dict):
                template = ProgressionTemplate.from_pairs(entry["steps"], name=entry.get("name"))
                result.append(template)
            else:
                result.append(ProgressionTemplate.from_pairs(entry))
        return result


@lru_cache(maxsize=1)
def get_template_bank() -> TemplateBank:
    """Shared bank backed by the built-in library."""
    return TemplateBank()
