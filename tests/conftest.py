"""Shared fixtures: an in-memory store and a scripted LLM segmenter."""

import pytest

from wordloop.core.ai_segment import SegmentationError
from wordloop.core.backend import MemoryBackend
from wordloop.core.dictionary import DictionaryStore


NOW = 1_700_000_000_000


class FakeAI:
    """Answers segmentation requests from a dict of unit -> segments."""

    def __init__(self, replies: dict | None = None):
        self.replies = replies or {}
        self.calls = []

    def segment(self, unit: str, prompt: str | None = None) -> list[dict]:
        self.calls.append((unit, prompt))
        reply = self.replies.get(unit)
        if reply is None:
            raise SegmentationError(f"no reply scripted for {unit!r}")
        return reply


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return DictionaryStore(backend, now=NOW)


@pytest.fixture
def fake_ai():
    return FakeAI()
