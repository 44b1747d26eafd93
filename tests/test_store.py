#!/usr/bin/env python3
"""Tests for the SQL-backed advisory store."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from carservice import ServiceArea
from carservice.advisory import AdvisoryRecord, SqlAdvisoryStore
from carservice.advisory.store import AdvisoryCacheEntry
from carservice.db import init_db, make_engine, make_session_factory

T0 = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'cache.db'}")
    init_db(engine)
    return make_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return SqlAdvisoryStore(session_factory)


def count_rows(session_factory) -> int:
    with session_factory() as session:
        return session.scalar(select(func.count()).select_from(AdvisoryCacheEntry))


class TestSqlAdvisoryStore:
    """Tests for find and upsert."""

    def test_find_missing(self, store):
        assert store.find(7, ServiceArea.ENGINE_OIL) is None

    def test_insert_and_find(self, store):
        store.upsert(7, ServiceArea.ENGINE_OIL, '{"summary": "a"}', T0, T0 + timedelta(days=7))

        record = store.find(7, ServiceArea.ENGINE_OIL)

        assert record == AdvisoryRecord(
            vehicle_id=7,
            area=ServiceArea.ENGINE_OIL,
            payload='{"summary": "a"}',
            created_at=T0,
            expires_at=T0 + timedelta(days=7),
        )

    def test_timestamps_are_utc_aware(self, store):
        store.upsert(7, ServiceArea.ENGINE_OIL, "{}", T0, T0 + timedelta(days=7))
        record = store.find(7, ServiceArea.ENGINE_OIL)
        assert record.created_at.tzinfo is not None
        assert record.expires_at > T0

    def test_upsert_twice_keeps_one_row(self, store, session_factory):
        store.upsert(7, ServiceArea.ENGINE_OIL, '{"summary": "old"}', T0, T0 + timedelta(days=7))
        later = T0 + timedelta(days=8)
        store.upsert(7, ServiceArea.ENGINE_OIL, '{"summary": "new"}', later, later + timedelta(days=7))

        assert count_rows(session_factory) == 1
        record = store.find(7, ServiceArea.ENGINE_OIL)
        assert record.payload == '{"summary": "new"}'
        assert record.created_at == later

    def test_keys_are_independent(self, store, session_factory):
        store.upsert(7, ServiceArea.ENGINE_OIL, "oil", T0, T0 + timedelta(days=7))
        store.upsert(7, ServiceArea.BRAKES, "brakes", T0, T0 + timedelta(days=7))
        store.upsert(8, ServiceArea.ENGINE_OIL, "other car", T0, T0 + timedelta(days=7))

        assert count_rows(session_factory) == 3
        assert store.find(7, ServiceArea.BRAKES).payload == "brakes"
        assert store.find(8, ServiceArea.ENGINE_OIL).payload == "other car"
