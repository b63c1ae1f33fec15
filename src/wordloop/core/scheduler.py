"""
Review scheduling (an SM-2 variant).

schedule() is pure: it reads an entry and returns the new review state.
Persisting the result is up to the caller.

Grades are 1, 3, 4, 5. There is no 2.
"""

import math
from dataclasses import dataclass
from enum import IntEnum

from wordloop.core.entry import DAY_MS, MIN_EASE


MAX_EASE = 2.5  # only enforced by EASY
AGAIN_INTERVAL = 10 / (24 * 60)  # ten minutes, in days


class Quality(IntEnum):
    AGAIN = 1
    HARD = 3
    GOOD = 4
    EASY = 5


@dataclass(frozen=True)
class SRSState:
    next_review_at: int
    interval_days: float
    ease_factor: float
    review_count: int
    last_reviewed_at: int

    def to_dict(self) -> dict:
        return {
            "next_review_at": self.next_review_at,
            "interval_days": self.interval_days,
            "ease_factor": self.ease_factor,
            "review_count": self.review_count,
            "last_reviewed_at": self.last_reviewed_at,
        }


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _next(interval: float, ease: float, review_count: int, quality: Quality) -> tuple[float, float, int]:
    """Returns (interval_days, ease_factor, review_count) after grading."""
    was_new = review_count == 0
    was_learning = review_count == 1

    if quality == Quality.AGAIN:
        return AGAIN_INTERVAL, max(MIN_EASE, ease), 0

    if quality == Quality.HARD:
        if was_new:
            interval, review_count = 0.5, 1
        elif was_learning:
            interval, review_count = 1, 2
        else:
            interval, review_count = max(1, interval * 1.2), review_count + 1
        return interval, max(MIN_EASE, ease - 0.15), review_count

    if quality == Quality.GOOD:
        review_count += 1
        if review_count == 1:
            interval = 1
        elif review_count == 2:
            interval = 6
        else:
            interval = round_half_up(interval * ease)
        return interval, max(MIN_EASE, ease + 0.02), review_count

    if quality == Quality.EASY:
        review_count += 1
        if review_count == 1:
            interval = 4
        elif review_count == 2:
            interval = 10
        else:
            interval = round_half_up(interval * ease * 1.3)
        return interval, max(MIN_EASE, min(MAX_EASE, ease + 0.15)), review_count

    raise ValueError(f"Unknown quality: {quality!r}")


def schedule(entry, quality: Quality | int, now: int) -> SRSState:
    """
    Compute the review state after grading entry with quality at time now.

    entry only needs interval_days, ease_factor and review_count.
    """
    quality = Quality(quality)
    interval, ease, review_count = _next(
        entry.interval_days, entry.ease_factor, entry.review_count, quality
    )

    return SRSState(
        next_review_at=now + round_half_up(interval * DAY_MS),
        interval_days=float(interval),
        ease_factor=ease,
        review_count=review_count,
        last_reviewed_at=now,
    )


def preview(entry) -> dict[Quality, float]:
    """Interval (days) each grade would give, for labelling answer buttons."""
    return {
        q: float(_next(entry.interval_days, entry.ease_factor, entry.review_count, q)[0])
        for q in Quality
    }
