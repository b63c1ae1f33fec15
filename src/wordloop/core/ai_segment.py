"""
Word segmentation via LLM.

Sends one sentence unit and gets back a list of words with pinyin and an
English gloss.
"""

import json
import logging
import re

import openai
from openai import OpenAI

from wordloop import config
from wordloop.core.romanize import romanize


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are a Chinese language expert.
Always respond with valid JSON only, no markdown or additional text."""


DEFAULT_SEGMENT_PROMPT = """Segment the following Chinese text into words and provide English translations.

Reply with JSON:
{
  "segments": [
    {"word": "中国", "pinyin": "zhōngguó", "translation": "China"},
    {"word": "菜", "pinyin": "cài", "translation": "food; dish"}
  ]
}

Include every character of the text, in order.

Text to segment:"""


JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


class SegmentationError(RuntimeError):
    """The LLM call failed or its reply could not be read."""


def build_prompt(unit: str, prompt: str | None = None) -> str:
    return f"{(prompt or DEFAULT_SEGMENT_PROMPT).strip()}\n\n{unit}"


def parse_segments(content: str, romanizer=romanize) -> list[dict]:
    """
    Read the model reply into [{"word", "romanization", "translation"}].

    Tolerates code fences and chatter around the JSON object. Missing pinyin
    is generated locally.
    """
    match = JSON_OBJECT_RE.search(content or "")
    if not match:
        raise SegmentationError("No JSON object found in response")

    try:
        data = json.loads(match.group())
    except json.JSONDecodeError as e:
        raise SegmentationError(f"Invalid JSON in response: {e}") from e

    raw_segments = data.get("segments") if isinstance(data, dict) else None
    if not isinstance(raw_segments, list):
        raise SegmentationError("Response has no 'segments' list")

    segments = []
    for seg in raw_segments:
        if not isinstance(seg, dict):
            raise SegmentationError(f"Malformed segment: {seg!r}")

        word = str(seg.get("word") or "").strip()
        if not word:
            continue

        romanization = seg.get("romanization") or seg.get("pinyin") or romanizer(word)
        translation = seg.get("translation")

        segments.append({
            "word": word,
            "romanization": str(romanization).strip(),
            "translation": str(translation).strip() if translation else None,
        })

    return segments


class AISegmenter:
    def __init__(
        self,
        client: OpenAI | None = None,
        model: str = config.SEGMENT_MODEL,
        temperature: float = 0.3,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature

    def segment(self, unit: str, prompt: str | None = None) -> list[dict]:
        try:
            # Created on first use so a missing key only affects segmentation
            if self.client is None:
                self.client = OpenAI()

            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(unit, prompt)},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
            )
        except openai.OpenAIError as e:
            raise SegmentationError(f"Segmentation request failed: {e}") from e

        if not response.choices:
            raise SegmentationError("Segmentation response had no choices")
        content = response.choices[0].message.content
        segments = parse_segments(content)
        logger.debug("LLM segmented %r into %d words", unit, len(segments))
        return segments
