import asyncio
import sqlite3

import pytest

from hifumi.datatypes import ActivityKind, PrefixEntry
from hifumi.errors import ExternalServiceError
from hifumi.memory import store


@pytest.fixture
def memory_store():
    store.init(":memory:")
    return store._conn


def test_insert_prefix_is_last_write_wins(memory_store):
    async def run():
        await store.insert_prefix(PrefixEntry("10", "h!"))
        await store.insert_prefix(PrefixEntry("10", "x?"))
        await store.insert_prefix(PrefixEntry("11", "h!"))
        return await store.find_all_prefixes()

    entries = asyncio.run(run())
    assert sorted(entries, key=lambda e: e.guild_id) == [
        PrefixEntry("10", "x?"),
        PrefixEntry("11", "h!"),
    ]


def test_find_all_statuses_maps_kinds(memory_store):
    with memory_store:
        memory_store.executemany(
            "INSERT INTO statuses(type, status) VALUES (?, ?)",
            [("WATCHING", "anime"), ("listening", "music"), ("EATING", "pizza")],
        )

    entries = asyncio.run(store.find_all_statuses())

    assert [(e.kind, e.text) for e in entries] == [
        (ActivityKind.WATCHING, "anime"),
        (ActivityKind.LISTENING, "music"),
        (ActivityKind.PLAYING, "pizza"),
    ]
    assert len({e.id for e in entries}) == 3


def test_empty_store_returns_no_statuses(memory_store):
    assert asyncio.run(store.find_all_statuses()) == []


def test_sqlite_errors_become_external_service_errors(memory_store, monkeypatch):
    async def broken_upsert(entry):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(store._prefix_repo, "upsert", broken_upsert)

    with pytest.raises(ExternalServiceError, match="guild 10"):
        asyncio.run(store.insert_prefix(PrefixEntry("10", "h!")))


def test_migrate_is_idempotent(memory_store):
    from hifumi.memory.store import db

    db.migrate(memory_store)
    db.migrate(memory_store)
    tables = {
        row[0]
        for row in memory_store.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    assert {"prefixes", "statuses"}.issubset(tables)
