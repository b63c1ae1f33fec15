"""
Dictionary store: learned words with their review state.

The in-memory map is the source of truth while the process runs. Every
mutating call writes the whole entry list back through the backend.
"""

import json
import logging
from datetime import datetime
from typing import Iterable

from wordloop.core.entry import (
    DictionaryEntry,
    ReviewStats,
    now_ms,
    upgrade_record,
)
from wordloop.core.scheduler import SRSState


logger = logging.getLogger(__name__)


class UnknownWordError(KeyError):
    """Raised when a review result targets a word that is not stored."""


class InvalidImportError(ValueError):
    """Raised when an import payload cannot be read."""


def end_of_day_ms(as_of: int) -> int:
    """Last millisecond of the local calendar day containing as_of."""
    day = datetime.fromtimestamp(as_of / 1000)
    end = day.replace(hour=23, minute=59, second=59, microsecond=999000)
    return round(end.timestamp() * 1000)


class DictionaryStore:
    def __init__(self, backend, now: int | None = None):
        self.backend = backend
        self.entries: dict[str, DictionaryEntry] = {}
        # Stored records that could not be read, written back untouched
        self.unreadable: list = []
        self._load(now if now is not None else now_ms())

    # === Persistence ===

    def _load(self, now: int) -> None:
        raw = self.backend.load()
        if not raw:
            return

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Stored dictionary is not valid JSON, starting empty: %s", e)
            return

        if not isinstance(records, list):
            logger.warning("Stored dictionary is not a list, starting empty")
            return

        migrated = 0
        for raw_record in records:
            if not isinstance(raw_record, dict):
                logger.error("Keeping unreadable dictionary record: %r", raw_record)
                self.unreadable.append(raw_record)
                continue
            try:
                record, upgraded = upgrade_record(raw_record, now)
                entry = DictionaryEntry.from_dict(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.error("Keeping unreadable dictionary record %r: %s", raw_record, e)
                self.unreadable.append(raw_record)
                continue

            self.entries[entry.word] = entry
            if upgraded:
                migrated += 1

        if migrated:
            logger.info("Upgraded %d dictionary entries to the current format", migrated)
            self._save()

    def _save(self) -> None:
        records = [e.to_dict() for e in self.entries.values()]
        payload = json.dumps(records + self.unreadable, ensure_ascii=False)
        self.backend.save(payload)

    # === Reads ===

    def lookup(self, word: str) -> DictionaryEntry | None:
        return self.entries.get(word)

    def __contains__(self, word: str) -> bool:
        return word in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def all_entries(self) -> list[DictionaryEntry]:
        return list(self.entries.values())

    def due_entries(self, as_of: int | None = None) -> list[DictionaryEntry]:
        """Entries due at as_of, oldest due first."""
        as_of = as_of if as_of is not None else now_ms()
        due = [e for e in self.entries.values() if e.is_due(as_of)]
        due.sort(key=lambda e: (e.next_review_at, e.word))
        return due

    def stats(self, as_of: int | None = None) -> ReviewStats:
        as_of = as_of if as_of is not None else now_ms()
        end_of_day = end_of_day_ms(as_of)

        entries = self.entries.values()
        return ReviewStats(
            due_now=sum(1 for e in entries if e.next_review_at <= as_of),
            due_today=sum(1 for e in entries if e.next_review_at <= end_of_day),
            total=len(self.entries),
        )

    def summary(self) -> dict:
        return {
            "total_words": len(self.entries),
            "total_meanings": sum(len(e.meanings) for e in self.entries.values()),
        }

    # === Writes ===

    def _upsert(self, word: str, romanization: str, meaning: str, now: int) -> DictionaryEntry:
        existing = self.entries.get(word)

        if existing is None:
            entry = DictionaryEntry.new(word, romanization, meaning, now)
            self.entries[word] = entry
            return entry

        existing.usage_count += 1
        if meaning not in existing.meanings:
            existing.meanings.append(meaning)
        if existing.romanization != romanization:
            existing.romanization = romanization
        return existing

    def upsert(
        self,
        word: str,
        romanization: str,
        meaning: str,
        now: int | None = None,
    ) -> DictionaryEntry:
        """
        Record an encounter with a word.

        Creates the entry on first sight. Afterwards bumps usage, appends a
        new meaning and takes the latest romanization. Review state of an
        existing entry is left alone.
        """
        if not word:
            raise ValueError("word must not be empty")
        if not meaning:
            raise ValueError(f"meaning for {word!r} must not be empty")

        entry = self._upsert(word, romanization, meaning, now if now is not None else now_ms())
        self._save()
        return entry

    def upsert_many(
        self,
        items: Iterable[tuple[str, str, str]],
        now: int | None = None,
    ) -> int:
        """Bulk upsert of (word, romanization, meaning). Saves once."""
        now = now if now is not None else now_ms()
        items = list(items)
        for word, _, meaning in items:
            if not word or not meaning:
                raise ValueError(f"word and meaning are required, got {word!r}: {meaning!r}")

        for word, romanization, meaning in items:
            self._upsert(word, romanization, meaning, now)

        if items:
            self._save()
        return len(items)

    def record_usage(self, words: Iterable[str]) -> None:
        """Count an encounter for words that were matched from the dictionary."""
        changed = False
        for word in words:
            entry = self.entries.get(word)
            if entry is not None:
                entry.usage_count += 1
                changed = True

        if changed:
            self._save()

    def apply_review_result(self, word: str, state: SRSState) -> DictionaryEntry:
        entry = self.entries.get(word)
        if entry is None:
            raise UnknownWordError(word)

        entry.next_review_at = state.next_review_at
        entry.interval_days = state.interval_days
        entry.ease_factor = state.ease_factor
        entry.review_count = state.review_count
        entry.last_reviewed_at = state.last_reviewed_at

        self._save()
        return entry

    def clear(self) -> None:
        self.entries = {}
        self.unreadable = []
        self.backend.clear()

    # === Import / export ===

    def export_json(self) -> str:
        return json.dumps(
            [e.to_dict() for e in self.entries.values()],
            ensure_ascii=False,
            indent=2,
        )

    def import_json(self, text: str, now: int | None = None) -> int:
        """
        Replay exported records as encounters.

        Each meaning of each record goes through upsert, so unseen words
        start with fresh review state and usage counts re-accumulate.
        Returns the number of upserts performed.
        """
        try:
            records = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidImportError(f"Invalid dictionary format: {e}") from e

        if not isinstance(records, list):
            raise InvalidImportError("Invalid dictionary format: expected a list")

        items = []
        for record in records:
            if not _valid_record(record):
                raise InvalidImportError(f"Invalid dictionary record: {record!r}")

            romanization = str(record.get("romanization", record.get("pinyin", "")) or "")
            for meaning in record["meanings"]:
                items.append((record["word"], romanization, meaning))

        return self.upsert_many(items, now=now)


def _valid_record(record) -> bool:
    if not isinstance(record, dict):
        return False
    word, meanings = record.get("word"), record.get("meanings")
    if not isinstance(word, str) or not word:
        return False
    if not isinstance(meanings, list) or not meanings:
        return False
    return all(isinstance(m, str) and m for m in meanings)

