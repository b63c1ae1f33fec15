"""
Flashcard review session.

Walks the entries that were due when the session started (or was last
reloaded). Each graded card is written to the store straight away, so
dropping a session loses nothing that was already graded.
"""

import random
from enum import Enum

from wordloop.core.dictionary import DictionaryStore
from wordloop.core.entry import DictionaryEntry, ReviewStats, now_ms
from wordloop.core.scheduler import Quality, preview, schedule


class ReviewStateError(RuntimeError):
    """A session transition was requested in the wrong state."""


class SessionState(str, Enum):
    PRESENTING = "presenting"
    EMPTY = "empty"
    COMPLETE = "complete"


class ReviewSession:
    def __init__(
        self,
        store: DictionaryStore,
        shuffle: bool = False,
        rng: random.Random | None = None,
        clock=now_ms,
    ):
        self.store = store
        self.shuffle = shuffle
        self.rng = rng or random.Random()
        self.clock = clock

        self.cards: list[DictionaryEntry] = []
        self.index = 0
        self.revealed = False
        self.reviewed = 0
        self.state = SessionState.EMPTY

        self._fetch(initial=True)

    def _fetch(self, initial: bool = False) -> None:
        cards = self.store.due_entries(self.clock())
        if self.shuffle:
            # Only within this batch; the batch itself is the oldest due
            self.rng.shuffle(cards)

        self.cards = cards
        self.index = 0
        self.revealed = False

        if cards:
            self.state = SessionState.PRESENTING
        elif initial:
            self.state = SessionState.EMPTY
        else:
            self.state = SessionState.COMPLETE

    def reload(self) -> None:
        """Fetch due entries again and start over."""
        self._fetch(initial=True)

    @property
    def current(self) -> DictionaryEntry | None:
        if self.state != SessionState.PRESENTING:
            return None
        return self.cards[self.index]

    def reveal(self) -> None:
        if self.state == SessionState.PRESENTING and not self.revealed:
            self.revealed = True

    def grade(self, quality: Quality | int) -> DictionaryEntry:
        """Grade the revealed card and move on. Returns the updated entry."""
        if self.state != SessionState.PRESENTING:
            raise ReviewStateError(f"No card to grade (session is {self.state.value})")
        if not self.revealed:
            raise ReviewStateError("Card must be revealed before grading")

        quality = Quality(quality)
        card = self.cards[self.index]

        state = schedule(card, quality, self.clock())
        updated = self.store.apply_review_result(card.word, state)
        self.reviewed += 1

        if self.index + 1 < len(self.cards):
            self.index += 1
            self.revealed = False
        else:
            # Catch anything that became due while reviewing
            self._fetch()

        return updated

    def progress(self) -> tuple[int, int, int]:
        """(position, total, percent) of the current batch."""
        total = len(self.cards)
        if self.state != SessionState.PRESENTING or total == 0:
            return 0, total, 0
        position = self.index + 1
        return position, total, round(position / total * 100)

    def stats(self) -> ReviewStats:
        return self.store.stats(self.clock())

    def preview(self) -> dict[Quality, float]:
        card = self.current
        if card is None:
            return {}
        return preview(card)

    def snapshot(self) -> dict:
        card = self.current
        position, total, percent = self.progress()

        data = {
            "state": self.state.value,
            "revealed": self.revealed,
            "position": position,
            "total": total,
            "percent": percent,
            "reviewed": self.reviewed,
            "stats": self.stats().to_dict(),
            "card": None,
        }

        if card is not None:
            data["card"] = {"word": card.word}
            if self.revealed:
                data["card"]["romanization"] = card.romanization
                data["card"]["meanings"] = list(card.meanings)
                data["intervals"] = {q.name.lower(): days for q, days in self.preview().items()}

        return data
