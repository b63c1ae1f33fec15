"""
Shared dependencies for routes.

One dictionary store per Redis database lives on app.state for the lifetime
of the process, so every request sees the same in-memory entries.
"""

import redis
from fastapi import FastAPI

from wordloop import config
from wordloop.core.ai_segment import AISegmenter
from wordloop.core.backend import RedisBackend
from wordloop.core.dictionary import DictionaryStore
from wordloop.core.segmenter import Segmenter


def get_redis(db: int = config.REDIS_DB):
    return redis.Redis(host=config.REDIS_HOST, port=config.REDIS_PORT, db=db)


def get_dictionary(app: FastAPI, db: int = config.REDIS_DB) -> DictionaryStore:
    stores = app.state.dictionaries
    if db not in stores:
        backend = RedisBackend(get_redis(db), key=config.DICTIONARY_KEY)
        stores[db] = DictionaryStore(backend)
    return stores[db]


def get_ai_segmenter(app: FastAPI):
    if app.state.ai_segmenter is None:
        app.state.ai_segmenter = AISegmenter()
    return app.state.ai_segmenter


def get_segmenter(app: FastAPI, db: int = config.REDIS_DB) -> Segmenter:
    return Segmenter(get_dictionary(app, db), get_ai_segmenter(app))
