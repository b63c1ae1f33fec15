"""
Persistence backends for the dictionary.

The dictionary is loaded and saved as one JSON document. A backend only
moves that document around; it knows nothing about entries.
"""

from pathlib import Path

import redis


class RedisBackend:
    """Stores the dictionary document under a single Redis key."""

    def __init__(self, client: redis.Redis, key: str = "wordloop:dictionary"):
        self.client = client
        self.key = key

    def load(self) -> str | None:
        data = self.client.get(self.key)
        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data

    def save(self, payload: str) -> None:
        self.client.set(self.key, payload)

    def clear(self) -> None:
        self.client.delete(self.key)


class JsonFileBackend:
    """Stores the dictionary document in a file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(payload, encoding="utf-8")
        tmp.replace(self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryBackend:
    """Keeps the document in memory. Useful for tests."""

    def __init__(self, payload: str | None = None):
        self.payload = payload
        self.saves = 0

    def load(self) -> str | None:
        return self.payload

    def save(self, payload: str) -> None:
        self.payload = payload
        self.saves += 1

    def clear(self) -> None:
        self.payload = None
