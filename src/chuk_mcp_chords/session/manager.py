"""
Progression session - owns settings, the random source and the current
progressions.

The session holds one ``ProgressionSet`` snapshot at a time. Every edit
builds a new snapshot and swaps it in with a single assignment, so a
reader always sees either the old set or the new one.
"""

from __future__ import annotations

import logging
from typing import Any

from chuk_mcp_chords.constants import (
    BRIDGE_LABEL,
    MAIN_LABEL,
    ErrorMessages,
    Genre,
    Mood,
    SoundType,
)
from chuk_mcp_chords.core import BorrowableChord, Key, get_borrowable_chords
from chuk_mcp_chords.harmony import (
    TemplateBank,
    create_borrowed_chord,
    create_shifted_degree_chord,
    generate_extension_chords,
    generate_modal_interchange_chord,
    generate_passing_chord,
    generate_progressions,
    generate_single_chord,
    get_template_bank,
    regenerate_progression,
)
from chuk_mcp_chords.models import AppSettings, Chord, ChordProgression, ProgressionSet
from chuk_mcp_chords.randomness import RandomSource, resolve
from chuk_mcp_chords.session import edits

logger = logging.getLogger(__name__)


class ProgressionSession:
    """
    Stateful front end to the generator.

    Settings changes never regenerate on their own; call ``generate``.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        rng: RandomSource | None = None,
        bank: TemplateBank | None = None,
    ):
        """
        Initialize the session.

        Args:
            settings: Initial settings (defaults: C major, 90 BPM, Lo-Fi, Chill)
            rng: Random source for every generation call
            bank: Template bank (defaults to the built-in library)
        """
        self._settings = settings or AppSettings()
        self.rng = resolve(rng)
        self.bank = bank or get_template_bank()
        self._progressions: ProgressionSet | None = None

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def key(self) -> Key:
        return self._settings.get_key()

    def update_settings(self, **changes: Any) -> AppSettings:
        """
        Apply settings changes.

        Unset (None) values are ignored. Validation errors leave the
        current settings untouched.
        """
        changes = {name: value for name, value in changes.items() if value is not None}
        if changes:
            self._settings = AppSettings.model_validate({**self._settings.model_dump(), **changes})
            logger.debug("Settings updated: %s", changes)
        return self._settings

    def set_key(self, key: str | Key) -> AppSettings:
        return self.update_settings(key=key.name if isinstance(key, Key) else key)

    def set_tempo(self, tempo: int) -> AppSettings:
        return self.update_settings(tempo=tempo)

    def set_genre(self, genre: Genre | str) -> AppSettings:
        return self.update_settings(genre=genre)

    def set_mood(self, mood: Mood | str) -> AppSettings:
        return self.update_settings(mood=mood)

    def set_sound_type(self, sound_type: SoundType | str) -> AppSettings:
        return self.update_settings(sound_type=sound_type)

    # ------------------------------------------------------------------
    # Progressions
    # ------------------------------------------------------------------

    @property
    def progressions(self) -> ProgressionSet | None:
        """Current snapshot, or None before the first generate."""
        return self._progressions

    def require_progressions(self) -> ProgressionSet:
        if self._progressions is None:
            raise ValueError(ErrorMessages.NO_PROGRESSIONS)
        return self._progressions

    def find_progression(self, progression_id: str) -> ChordProgression | None:
        """Progression by id or case-insensitive label, None if absent."""
        if self._progressions is None:
            return None
        progression = self._progressions.find(progression_id)
        if progression is None:
            progression = next(
                (
                    p
                    for p in self._progressions.all()
                    if p.label.lower() == progression_id.lower()
                ),
                None,
            )
        return progression

    def get_progression(self, progression_id: str) -> ChordProgression:
        """
        Look up a progression by id, or by label ('Main', 'Bridge 1').

        Raises:
            ValueError: If nothing is generated or the id is unknown
        """
        self.require_progressions()
        progression = self.find_progression(progression_id)
        if progression is None:
            raise ValueError(
                ErrorMessages.PROGRESSION_NOT_FOUND.format(progression_id=progression_id)
            )
        return progression

    def generate(self) -> ProgressionSet:
        """Replace everything with a fresh main progression and two bridges."""
        settings = self._settings
        self._progressions = generate_progressions(
            self.key, settings.genre, settings.mood, rng=self.rng, bank=self.bank
        )
        logger.info(
            "Generated progressions for %s %s in %s",
            settings.genre.value,
            settings.mood.value,
            self.key,
        )
        return self._progressions

    def regenerate_main(self) -> ChordProgression:
        """New main progression; bridges are kept."""
        current = self.require_progressions()
        main = self._regenerate(MAIN_LABEL)
        self._progressions = current.model_copy(update={"main": main})
        return main

    def regenerate_bridge(self, index: int) -> ChordProgression:
        """
        New bridge at a 0-based position, labelled 'Bridge {index + 1}'.

        Raises:
            ValueError: If there is no bridge at that position
        """
        current = self.require_progressions()
        if not 0 <= index < len(current.bridges):
            raise ValueError(ErrorMessages.BRIDGE_NOT_FOUND.format(index=index))

        bridge = self._regenerate(BRIDGE_LABEL.format(number=index + 1))
        bridges = list(current.bridges)
        bridges[index] = bridge
        self._progressions = current.model_copy(update={"bridges": tuple(bridges)})
        return bridge

    def _regenerate(self, label: str) -> ChordProgression:
        settings = self._settings
        return regenerate_progression(
            self.key, settings.genre, settings.mood, label, rng=self.rng, bank=self.bank
        )

    def _commit(self, progression: ChordProgression) -> None:
        self._progressions = self.require_progressions().replace(progression)

    # ------------------------------------------------------------------
    # Chord edits
    # ------------------------------------------------------------------

    def swap_chord(
        self, source_id: str, target_id: str, source_index: int, target_index: int
    ) -> ProgressionSet:
        """Swap two chords, within one progression or across two."""
        source = self.get_progression(source_id)
        target = self.get_progression(target_id)
        self._progressions = edits.swap_chords(
            self.require_progressions(), source.id, target.id, source_index, target_index
        )
        return self._progressions

    def insert_passing_chord(self, progression_id: str, index: int) -> Chord:
        """
        Insert a passing chord between chords ``index - 1`` and ``index``.

        Raises:
            ValueError: Unless there are chords on both sides of ``index``
        """
        progression = self.get_progression(progression_id)
        if not 0 < index < len(progression.chords):
            raise ValueError(
                ErrorMessages.INSERT_INDEX_INVALID.format(
                    index=index, length=len(progression.chords)
                )
            )

        prev_chord = progression.chords[index - 1]
        next_chord = progression.chords[index]
        chord = generate_passing_chord(
            prev_chord, next_chord, self.key, self._settings.genre, rng=self.rng
        )
        self._commit(edits.insert_chord(progression, index, chord))
        return chord

    def regenerate_chord(self, progression_id: str, index: int) -> Chord:
        """Re-roll one chord's quality and voicing, keeping root and duration."""
        progression, old_chord, prev_chord = self._locate(progression_id, index)
        chord = generate_single_chord(
            old_chord, prev_chord, self.key, self._settings.genre, rng=self.rng
        )
        self._commit(edits.replace_chord(progression, index, chord))
        return chord

    def update_chord_duration(
        self, progression_id: str, index: int, duration_beats: float
    ) -> Chord:
        """Set a chord's duration (clamped to 0.5-8 beats)."""
        progression = self.get_progression(progression_id)
        updated = edits.update_chord_duration(progression, index, duration_beats)
        self._commit(updated)
        return updated.chords[index]

    def list_borrowable(self) -> list[BorrowableChord]:
        """Borrowed chords available in the current key."""
        return get_borrowable_chords(self.key)

    def apply_modal_interchange(self, progression_id: str, index: int) -> Chord:
        """Replace a chord with a randomly chosen borrowed chord."""
        progression, old_chord, prev_chord = self._locate(progression_id, index)
        chord = generate_modal_interchange_chord(
            old_chord, prev_chord, self.key, self._settings.genre, rng=self.rng
        )
        self._commit(edits.replace_chord(progression, index, chord))
        return chord

    def apply_borrowed_chord(
        self, progression_id: str, index: int, borrowable_index: int
    ) -> Chord:
        """
        Replace a chord with a specific borrowed chord.

        Args:
            progression_id: Progression to edit
            index: Chord position
            borrowable_index: Position in ``list_borrowable()``
        """
        options = self.list_borrowable()
        if not 0 <= borrowable_index < len(options):
            raise ValueError(
                f"Borrowed chord index {borrowable_index} out of range (0-{len(options) - 1})."
            )

        progression, old_chord, prev_chord = self._locate(progression_id, index)
        chord = create_borrowed_chord(
            options[borrowable_index], old_chord, prev_chord, self._settings.genre
        )
        self._commit(edits.replace_chord(progression, index, chord))
        return chord

    def shift_chord_degree(self, progression_id: str, index: int, direction: int) -> Chord:
        """Move a chord one diatonic step up (1) or down (-1)."""
        progression, old_chord, prev_chord = self._locate(progression_id, index)
        chord = create_shifted_degree_chord(
            old_chord, prev_chord, self.key, self._settings.genre, direction
        )
        self._commit(edits.replace_chord(progression, index, chord))
        return chord

    def extend_progression(self, progression_id: str) -> list[Chord]:
        """
        Append up to four chords (a progression never exceeds eight).

        Returns:
            The chords added; empty when the progression is already full
        """
        progression = self.get_progression(progression_id)
        settings = self._settings
        added = generate_extension_chords(
            progression.chords,
            self.key,
            settings.genre,
            settings.mood,
            rng=self.rng,
            bank=self.bank,
        )
        if added:
            self._commit(edits.append_chords(progression, added))
        return added

    def _locate(
        self, progression_id: str, index: int
    ) -> tuple[ChordProgression, Chord, Chord | None]:
        """Progression, the chord at ``index`` and the chord before it."""
        progression = self.get_progression(progression_id)
        if not 0 <= index < len(progression.chords):
            raise ValueError(
                ErrorMessages.CHORD_INDEX_OUT_OF_RANGE.format(index=index, label=progression.label)
            )
        prev_chord = progression.chords[index - 1] if index > 0 else None
        return progression, progression.chords[index], prev_chord
