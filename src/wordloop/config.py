"""
Runtime configuration.

Everything can be overridden from the environment. The OpenAI key is read by
the openai client itself (OPENAI_API_KEY).
"""

import os

# --- Redis ---
REDIS_HOST = os.environ.get("WORDLOOP_REDIS_HOST", "localhost")
REDIS_PORT = int(os.environ.get("WORDLOOP_REDIS_PORT", "6379"))
REDIS_DB = int(os.environ.get("WORDLOOP_REDIS_DB", "0"))

# Key holding the whole dictionary document
DICTIONARY_KEY = os.environ.get("WORDLOOP_DICTIONARY_KEY", "wordloop:dictionary")

# --- LLM ---
SEGMENT_MODEL = os.environ.get("WORDLOOP_SEGMENT_MODEL", "gpt-4o-mini")

# --- CLI ---
API_URL = os.environ.get("WORDLOOP_API_URL", "http://localhost:8000/api")
