from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from headline_tracker.engine import RecordStore, TrackedArticle


@pytest.fixture
def article(now: datetime):
    def _builder(identifier: str, category: str, title: str = "T", age_hours: int = 0) -> TrackedArticle:
        return TrackedArticle(
            identifier=identifier,
            category=category,
            title=title,
            published_at=now - timedelta(hours=age_hours),
        )

    return _builder


def test_insert_and_find_by_identity_key(store: RecordStore, article) -> None:
    record = article("a1", "Tech")
    store.insert(record)
    assert store.find("a1", "Tech") == record
    assert store.find("a1", "Politiek") is None
    assert store.find("missing", "Tech") is None


def test_replace_keeps_one_record_per_key(store: RecordStore, article) -> None:
    old = article("a1", "Tech", "Old")
    store.insert(old)
    store.replace(old, article("a1", "Tech", "New"))
    assert store.count() == 1
    assert store.find("a1", "Tech").title == "New"


def test_same_identifier_in_two_categories_is_two_records(store: RecordStore, article) -> None:
    store.insert(article("a1", "Tech"))
    store.insert(article("a1", "Economie"))
    assert store.count() == 2
    assert store.count_by_category("Tech") == 1
    assert store.count_by_category("Economie") == 1
    assert store.categories() == ["Economie", "Tech"]


def test_identity_uniqueness_over_mixed_operations(store: RecordStore, article) -> None:
    for round_number in range(3):
        for identifier in ("a", "b", "c"):
            existing = store.find(identifier, "Tech")
            fresh = article(identifier, "Tech", f"title-{round_number}")
            if existing is None:
                store.insert(fresh)
            else:
                store.replace(existing, fresh)
    keys = [record.key for record in store.snapshot()]
    assert len(keys) == len(set(keys)) == 3
    assert {record.title for record in store.snapshot()} == {"title-2"}


def test_retain_where_reports_removed_count(store: RecordStore, article, now: datetime) -> None:
    store.insert(article("fresh", "Tech", age_hours=1))
    store.insert(article("old", "Tech", age_hours=72))
    store.insert(article("older", "Binnenland", age_hours=96))
    removed = store.retain_where(lambda record: record.published_at > now - timedelta(hours=48))
    assert removed == 2
    assert [record.identifier for record in store.snapshot()] == ["fresh"]


def test_empty_store_operations(store: RecordStore) -> None:
    assert store.count() == 0
    assert len(store) == 0
    assert store.count_by_category("Tech") == 0
    assert store.retain_where(lambda record: False) == 0
    store.clear()
    assert store.snapshot() == []
