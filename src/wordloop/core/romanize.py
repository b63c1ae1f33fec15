"""
Best-effort pinyin for text the dictionary and the LLM know nothing about.
"""

import re

from pypinyin import lazy_pinyin, Style


HAN_RE = re.compile(r"[\u3400-\u9fff]")


def contains_han(text: str) -> bool:
    return bool(HAN_RE.search(text))


def romanize(text: str) -> str:
    """
    Tone-marked pinyin, one syllable per character, space separated.

    "你好" -> "nǐ hǎo". Runs without Chinese characters come back unchanged.
    """
    if not text:
        return ""
    syllables = [s for s in lazy_pinyin(text, style=Style.TONE) if s.strip()]
    return " ".join(s.strip() for s in syllables)
