"""
Segment Chinese text into words.

Two paths share one matching window:

  segment()   learning path. A sentence unit is either covered entirely by
              known words, or the whole unit goes to the LLM and every word
              it returns is stored for next time.
  annotate()  display path. Known words are matched where possible, the rest
              falls back to single characters. Never calls the LLM and never
              writes to the dictionary.
"""

import logging
import re
from dataclasses import dataclass

from wordloop.core.dictionary import DictionaryStore
from wordloop.core.romanize import contains_han, romanize


logger = logging.getLogger(__name__)


MAX_WORD_LENGTH = 4

FAILED_TRANSLATION = "[Translation failed]"

UNIT_SPLIT_RE = re.compile(r"[。！？；;!?\n]+")


@dataclass
class Segment:
    word: str
    romanization: str
    translation: str | None
    source: str  # dictionary | ai | fallback | unknown

    @property
    def failed(self) -> bool:
        return self.source == "fallback"

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "romanization": self.romanization,
            "translation": self.translation,
            "source": self.source,
        }


def split_units(text: str) -> list[str]:
    """Split on sentence punctuation and newlines, dropping blank pieces."""
    return [u.strip() for u in UNIT_SPLIT_RE.split(text) if u.strip()]


def _longest_match(text: str, start: int, store: DictionaryStore):
    for length in range(min(MAX_WORD_LENGTH, len(text) - start), 0, -1):
        entry = store.lookup(text[start:start + length])
        if entry is not None:
            return entry
    return None


def segment_from_dictionary(unit: str, store: DictionaryStore) -> list[Segment] | None:
    """
    Greedy longest match over known words.

    Returns None as soon as one position has no match at any length.
    """
    segments = []
    i = 0
    while i < len(unit):
        entry = _longest_match(unit, i, store)
        if entry is None:
            return None

        segments.append(Segment(
            word=entry.word,
            romanization=entry.romanization,
            translation=entry.primary_meaning,
            source="dictionary",
        ))
        i += len(entry.word)

    return segments


class Segmenter:
    def __init__(self, store: DictionaryStore, ai, romanizer=romanize):
        self.store = store
        self.ai = ai
        self.romanizer = romanizer

    def segment(self, text: str, prompt: str | None = None) -> list[Segment]:
        """
        Segment text unit by unit.

        Units are handled one after another so a later unit can reuse words
        learned from an earlier one.
        """
        results = []
        for unit in split_units(text):
            results.extend(self._segment_unit(unit, prompt))
        return results

    def _segment_unit(self, unit: str, prompt: str | None) -> list[Segment]:
        known = segment_from_dictionary(unit, self.store)
        if known:
            self.store.record_usage(s.word for s in known)
            return known

        try:
            raw_segments = self.ai.segment(unit, prompt)
        except Exception as e:
            logger.warning("Segmentation failed for %r: %s", unit, e)
            return [self._fallback(unit)]

        segments = []
        for raw in raw_segments:
            if not raw.get("word"):
                continue
            seg = Segment(
                word=raw["word"],
                romanization=raw.get("romanization") or self.romanizer(raw["word"]),
                translation=raw.get("translation"),
                source="ai",
            )
            if seg.translation:
                self.store.upsert(seg.word, seg.romanization, seg.translation)
            segments.append(seg)

        if not segments:
            logger.warning("Segmentation returned no words for %r", unit)
            return [self._fallback(unit)]
        return segments

    def _fallback(self, unit: str) -> Segment:
        return Segment(
            word=unit,
            romanization=self.romanizer(unit),
            translation=FAILED_TRANSLATION,
            source="fallback",
        )

    def annotate(self, text: str) -> list[Segment]:
        """Inline annotation from known words only, one character at worst."""
        segments = []
        i = 0
        while i < len(text):
            entry = _longest_match(text, i, self.store)
            if entry is not None:
                segments.append(Segment(
                    word=entry.word,
                    romanization=entry.romanization,
                    translation=entry.primary_meaning,
                    source="dictionary",
                ))
                i += len(entry.word)
                continue

            char = text[i]
            segments.append(Segment(
                word=char,
                romanization=self.romanizer(char) if contains_han(char) else "",
                translation=None,
                source="unknown",
            ))
            i += 1

        return segments
