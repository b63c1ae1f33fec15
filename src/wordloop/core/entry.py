"""
Dictionary entries and their stored record format.

A record on disk (or in Redis) is a plain dict. Current records carry
"schema": 2. Older exports have no schema key, use camelCase names and may
lack the review fields entirely; upgrade_record() turns them into current
records.
"""

import time
from dataclasses import dataclass


SCHEMA_VERSION = 2

DEFAULT_EASE = 2.5
MIN_EASE = 1.3

DAY_MS = 24 * 60 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class DictionaryEntry:
    word: str
    romanization: str
    meanings: list[str]
    added_at: int
    usage_count: int = 1

    # Review state
    next_review_at: int = 0
    interval_days: float = 0.0
    ease_factor: float = DEFAULT_EASE
    review_count: int = 0
    last_reviewed_at: int = 0

    @classmethod
    def new(cls, word: str, romanization: str, meaning: str, now: int) -> "DictionaryEntry":
        """A fresh entry, due for review immediately."""
        return cls(
            word=word,
            romanization=romanization,
            meanings=[meaning],
            added_at=now,
            usage_count=1,
            next_review_at=now,
        )

    @property
    def primary_meaning(self) -> str:
        return self.meanings[0]

    def is_due(self, as_of: int) -> bool:
        return self.next_review_at <= as_of

    def to_dict(self) -> dict:
        return {
            "schema": SCHEMA_VERSION,
            "word": self.word,
            "romanization": self.romanization,
            "meanings": list(self.meanings),
            "added_at": self.added_at,
            "usage_count": self.usage_count,
            "next_review_at": self.next_review_at,
            "interval_days": self.interval_days,
            "ease_factor": self.ease_factor,
            "review_count": self.review_count,
            "last_reviewed_at": self.last_reviewed_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DictionaryEntry":
        meanings = [str(m) for m in data["meanings"]]
        if not meanings:
            raise ValueError(f"entry {data['word']!r} has no meanings")

        return cls(
            word=str(data["word"]),
            romanization=str(data.get("romanization", "")),
            meanings=meanings,
            added_at=int(data["added_at"]),
            usage_count=int(data.get("usage_count", 1)),
            next_review_at=int(data["next_review_at"]),
            interval_days=float(data["interval_days"]),
            ease_factor=max(MIN_EASE, float(data["ease_factor"])),
            review_count=int(data["review_count"]),
            last_reviewed_at=int(data["last_reviewed_at"]),
        )


# Legacy camelCase name -> current name
LEGACY_FIELDS = {
    "pinyin": "romanization",
    "addedAt": "added_at",
    "usageCount": "usage_count",
    "nextReview": "next_review_at",
    "interval": "interval_days",
    "easeFactor": "ease_factor",
    "reviewCount": "review_count",
    "lastReviewed": "last_reviewed_at",
}


def upgrade_record(raw: dict, now: int) -> tuple[dict, bool]:
    """
    Bring a stored record up to the current schema.

    Returns (record, upgraded). Missing review fields get the defaults of a
    brand-new entry, so an upgraded word is due right away.
    """
    if raw.get("schema") == SCHEMA_VERSION:
        return raw, False

    record = {}
    for key, value in raw.items():
        if value is not None:
            record[LEGACY_FIELDS.get(key, key)] = value

    record.setdefault("romanization", "")
    record.setdefault("added_at", now)
    record.setdefault("usage_count", 1)
    record.setdefault("next_review_at", now)
    record.setdefault("interval_days", 0.0)
    record.setdefault("ease_factor", DEFAULT_EASE)
    record.setdefault("review_count", 0)
    record.setdefault("last_reviewed_at", 0)
    record["schema"] = SCHEMA_VERSION

    return record, True


@dataclass(frozen=True)
class ReviewStats:
    due_now: int
    due_today: int
    total: int

    def to_dict(self) -> dict:
        return {"due_now": self.due_now, "due_today": self.due_today, "total": self.total}

