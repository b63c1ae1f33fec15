"""
HTTP client for the wordloop API.
"""

import httpx

from wordloop import config

BASE_URL = config.API_URL


# === Words ===

def list_words(due: bool = False) -> list[dict]:
    r = httpx.get(f"{BASE_URL}/words", params={"due": due})
    r.raise_for_status()
    return r.json()["words"]


def get_word(word: str) -> dict:
    r = httpx.get(f"{BASE_URL}/words/entry/{word}")
    r.raise_for_status()
    return r.json()


def add_words(words: list[dict]) -> dict:
    r = httpx.post(f"{BASE_URL}/words", json={"words": words})
    r.raise_for_status()
    return r.json()


def clear_words() -> dict:
    r = httpx.delete(f"{BASE_URL}/words")
    r.raise_for_status()
    return r.json()


def word_stats() -> dict:
    r = httpx.get(f"{BASE_URL}/words/stats")
    r.raise_for_status()
    return r.json()


def export_words() -> str:
    r = httpx.get(f"{BASE_URL}/words/export")
    r.raise_for_status()
    return r.json()["data"]


def import_words(data: str) -> dict:
    r = httpx.post(f"{BASE_URL}/words/import", json={"data": data}, timeout=60)
    r.raise_for_status()
    return r.json()


# === Segmentation ===

def segment(text: str, prompt: str | None = None) -> dict:
    payload = {"text": text}
    if prompt:
        payload["prompt"] = prompt
    r = httpx.post(f"{BASE_URL}/segment", json=payload, timeout=120)
    r.raise_for_status()
    return r.json()


def annotate(text: str) -> dict:
    r = httpx.post(f"{BASE_URL}/annotate", json={"text": text})
    r.raise_for_status()
    return r.json()


# === Reviews ===

def start_review(shuffle: bool = False) -> dict:
    r = httpx.post(f"{BASE_URL}/reviews", json={"shuffle": shuffle})
    r.raise_for_status()
    return r.json()


def reveal(session_id: str) -> dict:
    r = httpx.post(f"{BASE_URL}/reviews/{session_id}/reveal")
    r.raise_for_status()
    return r.json()


def grade(session_id: str, quality: int) -> dict:
    r = httpx.post(f"{BASE_URL}/reviews/{session_id}/grade", json={"quality": quality})
    r.raise_for_status()
    return r.json()


def end_review(session_id: str) -> dict:
    r = httpx.delete(f"{BASE_URL}/reviews/{session_id}")
    r.raise_for_status()
    return r.json()
