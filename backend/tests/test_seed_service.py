"""
Tests for the seeding run against an in-memory store.
"""
import logging
import random

import pytest

from fakes import InMemoryUserStore
from seeder.core.config import Settings
from seeder.models.rating import BASE_RATINGS
from seeder.services.seed_service import RatingSeeder, run_seed


def _users():
    return [
        {"_id": "u1", "username": "alice"},
        {"_id": "u2", "username": "bob", "ranking": {"baduk": {"rating": 1, "rd": 1, "vol": 0.1}}},
        {"_id": "u3"},
    ]


def _assert_valid_ranking(ranking):
    assert 2 <= len(ranking) <= 5
    for variant, value in ranking.items():
        base = BASE_RATINGS[variant]
        assert base.rating - 100 <= value["rating"] <= base.rating + 100
        assert base.rd - 50 <= value["rd"] <= base.rd + 50
        assert base.vol - 0.01 <= value["vol"] <= base.vol + 0.01


@pytest.mark.asyncio
async def test_zero_users_completes_cleanly(test_settings, caplog):
    """An empty store logs the count and succeeds"""
    caplog.set_level(logging.INFO)
    store = InMemoryUserStore([])

    report = await run_seed(test_settings, store=store)

    assert report is not None
    assert report.users_found == 0
    assert report.users_seeded == 0
    assert "Found 0 users" in caplog.text
    assert store.disconnect_calls == 1


@pytest.mark.asyncio
async def test_single_user_gets_ratings_for_known_variants(test_settings, rng):
    store = InMemoryUserStore([{"_id": "alice-id", "username": "alice"}])

    report = await run_seed(test_settings, store=store, rng=rng)

    ranking = store.get("alice-id")["ranking"]
    _assert_valid_ranking(ranking)
    assert report.users_seeded == 1
    assert report.variants_written == len(ranking)


@pytest.mark.asyncio
async def test_users_without_username_are_untouched(test_settings, rng):
    store = InMemoryUserStore(_users())

    report = await run_seed(test_settings, store=store, rng=rng)

    assert report.users_found == 3
    assert report.users_seeded == 2
    assert report.users_skipped == 1
    assert "ranking" not in store.get("u3")
    assert store.writes == ["u1", "u2"]


@pytest.mark.asyncio
async def test_no_users_created_or_deleted(test_settings, rng):
    store = InMemoryUserStore(_users())
    before = [doc["_id"] for doc in store.documents]

    await run_seed(test_settings, store=store, rng=rng)

    assert [doc["_id"] for doc in store.documents] == before


@pytest.mark.asyncio
async def test_overwrite_mode_replaces_existing_ranking(test_settings):
    """Previously stored variants disappear unless selected again"""
    store = InMemoryUserStore(_users())
    seeder = RatingSeeder(store, rng=random.Random(3))

    async with store.session():
        await seeder.seed()

    ranking = store.get("u2")["ranking"]
    _assert_valid_ranking(ranking)
    if "baduk" in ranking:
        assert ranking["baduk"]["rating"] != 1


@pytest.mark.asyncio
async def test_merge_mode_keeps_unselected_variants(rng):
    store = InMemoryUserStore(
        [{"_id": "u1", "username": "alice", "ranking": {"legacy": {"rating": 1, "rd": 2, "vol": 0.3}}}]
    )
    seeder = RatingSeeder(store, rng=rng, merge=True)

    async with store.session():
        await seeder.seed()

    ranking = store.get("u1")["ranking"]
    assert ranking["legacy"] == {"rating": 1, "rd": 2, "vol": 0.3}
    assert 3 <= len(ranking) <= 6


@pytest.mark.asyncio
async def test_repeated_runs_differ(test_settings):
    """Unseeded runs are not expected to reproduce each other"""
    results = []
    for _ in range(2):
        store = InMemoryUserStore([{"_id": "u1", "username": "alice"}])
        await run_seed(test_settings, store=store, rng=random.Random())
        results.append(store.get("u1")["ranking"])

    assert results[0] != results[1]


@pytest.mark.asyncio
async def test_seeded_runs_are_reproducible():
    settings = Settings(RANDOM_SEED=99)
    results = []
    for _ in range(2):
        store = InMemoryUserStore(_users())
        await run_seed(settings, store=store)
        results.append([doc.get("ranking") for doc in store.documents])

    assert results[0] == results[1]


@pytest.mark.asyncio
async def test_dry_run_does_not_write(rng, caplog):
    caplog.set_level(logging.INFO)
    store = InMemoryUserStore(_users())
    seeder = RatingSeeder(store, rng=rng, dry_run=True)

    async with store.session():
        report = await seeder.seed()

    assert store.writes == []
    assert "ranking" not in store.get("u1")
    assert report.users_seeded == 2
    assert "[dry run]" in caplog.text


@pytest.mark.asyncio
async def test_write_failure_aborts_remaining_users(test_settings, rng, caplog):
    """The first failed update ends the run and the store is still released"""
    store = InMemoryUserStore(
        [
            {"_id": "u1", "username": "alice"},
            {"_id": "u2", "username": "bob"},
            {"_id": "u3", "username": "carol"},
        ],
        fail_on_user="u2",
    )

    report = await run_seed(test_settings, store=store, rng=rng)

    assert report is None
    assert store.writes == ["u1"]
    assert "ranking" not in store.get("u3")
    assert store.disconnect_calls == 1
    assert "Error adding test ratings" in caplog.text
    assert "1 of 3 users seeded" in caplog.text


@pytest.mark.asyncio
async def test_unreachable_store_logs_and_returns_none(test_settings, caplog):
    """A failed connect is reported without raising past the top level"""
    store = InMemoryUserStore(_users(), fail_connect=True)

    report = await run_seed(test_settings, store=store)

    assert report is None
    assert store.connect_calls == 1
    assert store.disconnect_calls == 1
    assert store.writes == []
    assert "connection refused" in caplog.text


@pytest.mark.asyncio
async def test_error_log_masks_credentials(test_settings, caplog):
    store = InMemoryUserStore([], fail_connect=True)

    async def failing_connect():
        from seeder.core.exceptions import StoreConnectionError

        raise StoreConnectionError("Could not connect to mongodb://admin:hunter2@db:27017")

    store.connect = failing_connect

    await run_seed(test_settings, store=store)

    assert "hunter2" not in caplog.text
    assert "***REDACTED***" in caplog.text


@pytest.mark.asyncio
async def test_malformed_user_document_is_logged_not_raised(test_settings, caplog):
    """A stored document the seeder can not read ends the run at the top level"""
    store = InMemoryUserStore([{"_id": "u1", "username": "alice"}, {"_id": "u2", "username": 42}])

    report = await run_seed(test_settings, store=store)

    assert report is None
    assert store.writes == []
    assert store.disconnect_calls == 1
    assert "Unexpected error adding test ratings: ValidationError" in caplog.text


@pytest.mark.asyncio
async def test_stale_ranking_values_are_not_read(test_settings, rng):
    """Existing rankings with null fields do not block a fresh overwrite"""
    store = InMemoryUserStore(
        [{"_id": "u1", "username": "alice", "ranking": {"baduk": {"rating": None, "rd": "x", "vol": 0.1}}}]
    )

    report = await run_seed(test_settings, store=store, rng=rng)

    assert report.users_seeded == 1
    _assert_valid_ranking(store.get("u1")["ranking"])


@pytest.mark.asyncio
async def test_failure_log_carries_progress_counts(test_settings, rng, caplog):
    store = InMemoryUserStore(
        [{"_id": "u1", "username": "alice"}, {"_id": "u2", "username": "bob"}],
        fail_on_user="u2",
    )

    await run_seed(test_settings, store=store, rng=rng)

    [record] = [r for r in caplog.records if r.levelname == "ERROR"]
    assert record.users_found == 2
    assert record.users_seeded == 1
