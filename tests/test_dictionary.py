# tests/test_dictionary.py
"""Tests for the dictionary store."""

import json

import pytest

from wordloop.core.backend import MemoryBackend
from wordloop.core.dictionary import (
    DictionaryStore,
    InvalidImportError,
    UnknownWordError,
    end_of_day_ms,
)
from wordloop.core.entry import DAY_MS, SCHEMA_VERSION
from wordloop.core.scheduler import Quality, schedule

from conftest import NOW


# === upsert ===

def test_upsert_creates_entry(store):
    entry = store.upsert("你好", "nǐ hǎo", "hello", now=NOW)

    assert entry.word == "你好"
    assert entry.romanization == "nǐ hǎo"
    assert entry.meanings == ["hello"]
    assert entry.usage_count == 1
    assert entry.added_at == NOW
    assert entry.next_review_at == NOW
    assert entry.interval_days == 0
    assert entry.ease_factor == 2.5
    assert entry.review_count == 0
    assert entry.last_reviewed_at == 0


def test_upsert_duplicate_meaning_does_not_grow(store):
    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)
    entry = store.upsert("你好", "nǐ hǎo", "hello", now=NOW)

    assert entry.meanings == ["hello"]
    assert entry.usage_count == 2


def test_upsert_new_meaning_appends(store):
    store.upsert("行", "xíng", "OK", now=NOW)
    store.upsert("行", "xíng", "to walk", now=NOW)
    entry = store.upsert("行", "háng", "row", now=NOW)

    assert entry.meanings == ["OK", "to walk", "row"]
    assert entry.primary_meaning == "OK"
    assert entry.usage_count == 3


def test_upsert_takes_latest_romanization(store):
    store.upsert("行", "xíng", "OK", now=NOW)
    entry = store.upsert("行", "háng", "OK", now=NOW)

    assert entry.romanization == "háng"


def test_upsert_leaves_review_state_alone(store):
    entry = store.upsert("你好", "nǐ hǎo", "hello", now=NOW)
    store.apply_review_result("你好", schedule(entry, Quality.GOOD, NOW))

    entry = store.upsert("你好", "nǐ hǎo", "hi", now=NOW + 5000)

    assert entry.review_count == 1
    assert entry.interval_days == 1
    assert entry.next_review_at == NOW + DAY_MS
    assert entry.added_at == NOW


def test_upsert_requires_meaning(store):
    with pytest.raises(ValueError):
        store.upsert("你好", "nǐ hǎo", "", now=NOW)


def test_upsert_persists(backend, store):
    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)
    assert backend.saves == 1

    reloaded = DictionaryStore(backend, now=NOW)
    assert reloaded.lookup("你好") == store.lookup("你好")
    # Current-format data needs no rewrite
    assert backend.saves == 1


def test_upsert_many_saves_once(backend, store):
    count = store.upsert_many([
        ("你好", "nǐ hǎo", "hello"),
        ("谢谢", "xiè xie", "thanks"),
        ("你好", "nǐ hǎo", "hi"),
    ], now=NOW)

    assert count == 3
    assert backend.saves == 1
    assert len(store) == 2
    assert store.lookup("你好").meanings == ["hello", "hi"]


def test_record_usage(store):
    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)

    store.record_usage(["你好", "你好", "unknown"])

    assert store.lookup("你好").usage_count == 3
    assert store.lookup("unknown") is None


# === lookup / due ===

def test_lookup_not_found(store):
    assert store.lookup("没有") is None
    assert "没有" not in store


def test_due_entries_sorted_and_filtered(store):
    store.upsert("b", "", "b", now=NOW - 1000)
    store.upsert("a", "", "a", now=NOW - 1000)
    store.upsert("c", "", "c", now=NOW - 5000)
    store.upsert("later", "", "later", now=NOW + 1000)

    due = store.due_entries(NOW)

    assert [e.word for e in due] == ["c", "a", "b"]
    assert all(e.next_review_at <= NOW for e in due)


def test_apply_review_result(store):
    entry = store.upsert("你好", "nǐ hǎo", "hello", now=NOW)
    state = schedule(entry, Quality.EASY, NOW)

    updated = store.apply_review_result("你好", state)

    assert updated.review_count == 1
    assert updated.interval_days == 4
    assert updated.next_review_at == NOW + 4 * DAY_MS
    assert store.due_entries(NOW) == []


def test_apply_review_result_unknown_word(store):
    entry = store.upsert("你好", "nǐ hǎo", "hello", now=NOW)
    state = schedule(entry, Quality.GOOD, NOW)

    with pytest.raises(UnknownWordError):
        store.apply_review_result("再见", state)


def test_stats(store):
    end_of_day = end_of_day_ms(NOW)
    store.upsert("now", "", "x", now=NOW - 1)
    store.upsert("tonight", "", "x", now=end_of_day)
    store.upsert("tomorrow", "", "x", now=end_of_day + 1)

    stats = store.stats(NOW)

    assert stats.due_now == 1
    assert stats.due_today == 2
    assert stats.total == 3


def test_summary(store):
    store.upsert("行", "xíng", "OK", now=NOW)
    store.upsert("行", "xíng", "to walk", now=NOW)
    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)

    assert store.summary() == {"total_words": 2, "total_meanings": 3}


def test_clear(backend, store):
    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)

    store.clear()

    assert len(store) == 0
    assert backend.payload is None


# === loading and migration ===

LEGACY = [
    {"word": "你好", "pinyin": "nǐ hǎo", "meanings": ["hello"], "addedAt": 1000, "usageCount": 3},
    {"word": "谢谢", "pinyin": "xiè xie", "meanings": ["thanks"], "addedAt": 2000, "usageCount": 1,
     "nextReview": 5000, "interval": 6, "easeFactor": 2.2, "reviewCount": 2, "lastReviewed": 4000},
]


def test_legacy_entries_get_review_defaults():
    backend = MemoryBackend(json.dumps(LEGACY, ensure_ascii=False))

    store = DictionaryStore(backend, now=NOW)

    entry = store.lookup("你好")
    assert entry.romanization == "nǐ hǎo"
    assert entry.added_at == 1000
    assert entry.usage_count == 3
    assert entry.next_review_at == NOW
    assert entry.interval_days == 0
    assert entry.ease_factor == 2.5
    assert entry.review_count == 0
    assert entry.last_reviewed_at == 0

    reviewed = store.lookup("谢谢")
    assert reviewed.next_review_at == 5000
    assert reviewed.interval_days == 6
    assert reviewed.ease_factor == 2.2
    assert reviewed.review_count == 2


def test_migration_saves_once():
    backend = MemoryBackend(json.dumps(LEGACY, ensure_ascii=False))

    DictionaryStore(backend, now=NOW)
    assert backend.saves == 1
    assert all(r["schema"] == SCHEMA_VERSION for r in json.loads(backend.payload))

    store = DictionaryStore(backend, now=NOW + 99999)
    assert backend.saves == 1
    # Backfilled once, not refreshed on the second load
    assert store.lookup("你好").next_review_at == NOW


def test_invalid_json_loads_empty():
    backend = MemoryBackend("{not json")

    store = DictionaryStore(backend, now=NOW)

    assert len(store) == 0
    assert backend.saves == 0
    assert backend.payload == "{not json"


def test_non_list_loads_empty():
    store = DictionaryStore(MemoryBackend('{"word": "你好"}'), now=NOW)
    assert len(store) == 0


def test_malformed_records_are_skipped():
    records = [
        {"word": "你好", "pinyin": "nǐ hǎo", "meanings": ["hello"]},
        {"pinyin": "no word"},
        {"word": "空", "meanings": []},
        "garbage",
    ]
    store = DictionaryStore(MemoryBackend(json.dumps(records)), now=NOW)

    assert [e.word for e in store.all_entries()] == ["你好"]


def test_unreadable_records_survive_the_next_save():
    broken = {"schema": SCHEMA_VERSION, "word": "坏", "meanings": ["broken"]}
    backend = MemoryBackend(json.dumps([broken, "garbage"], ensure_ascii=False))
    store = DictionaryStore(backend, now=NOW)
    assert len(store) == 0

    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)

    saved = json.loads(backend.payload)
    assert saved[0]["word"] == "你好"
    assert saved[1:] == [broken, "garbage"]


def test_clear_drops_unreadable_records():
    backend = MemoryBackend(json.dumps(["garbage"]))
    store = DictionaryStore(backend, now=NOW)

    store.clear()
    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)

    assert [r["word"] for r in json.loads(backend.payload)] == ["你好"]



# === import / export ===

def test_export_import_round_trip(store):
    store.upsert("行", "xíng", "OK", now=NOW)
    store.upsert("行", "xíng", "to walk", now=NOW)
    store.upsert("你好", "nǐ hǎo", "hello", now=NOW)
    exported = store.export_json()

    fresh = DictionaryStore(MemoryBackend(), now=NOW)
    count = fresh.import_json(exported, now=NOW + 10)

    assert count == 3
    assert {e.word for e in fresh.all_entries()} == {"行", "你好"}
    assert fresh.lookup("行").meanings == ["OK", "to walk"]
    assert fresh.lookup("行").romanization == "xíng"
    # Usage re-accumulates once per imported meaning, review state starts fresh
    assert fresh.lookup("行").usage_count == 2
    assert fresh.lookup("行").next_review_at == NOW + 10


def test_import_legacy_format(store):
    count = store.import_json(json.dumps(LEGACY, ensure_ascii=False), now=NOW)

    assert count == 2
    assert store.lookup("谢谢").romanization == "xiè xie"


def test_import_rejects_bad_payload(store):
    with pytest.raises(InvalidImportError):
        store.import_json("not json")
    with pytest.raises(InvalidImportError):
        store.import_json('{"word": "x"}')
    with pytest.raises(InvalidImportError):
        store.import_json('[{"word": "x", "meanings": []}]')
    assert len(store) == 0


def test_import_rejects_wrongly_typed_records(store):
    bad_records = [
        '[{"word": "猫", "meanings": "cat"}]',
        '[{"word": 7, "meanings": ["seven"]}]',
        '[{"word": "猫", "meanings": ["cat", 3]}]',
        '[{"word": "猫", "meanings": ["cat", ""]}]',
    ]
    for payload in bad_records:
        with pytest.raises(InvalidImportError):
            store.import_json(payload)

    assert store.lookup("猫") is None
