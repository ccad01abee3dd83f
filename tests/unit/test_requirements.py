# tests/unit/test_requirements.py
"""
Unit tests for the requirements service.

Covers grouping, filters, partial updates and category-scoped reordering
against a real SQLite store.
"""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from willowbank.errors import BadInput, NotFound
from willowbank.models.sqlite_store import SQLiteRecordStore
from willowbank.services import requirements
from willowbank.services.seed import DEFAULT_REQUIREMENTS, seed_default_requirements


@pytest_asyncio.fixture
async def store(tmp_path: Path) -> SQLiteRecordStore:
    store = SQLiteRecordStore(str(tmp_path / "requirements.db"))
    await store.initialize()
    return store


async def _create(store, category="needs", description="Fence", priority=0, **extra):
    payload = {"category": category, "description": description, "priority": priority, **extra}
    return await requirements.create_requirement(store, payload)


@pytest.mark.asyncio
async def test_create_returns_full_record(store):
    record = await _create(store, notes="along the road")

    assert record["id"] > 0
    assert record["category"] == "needs"
    assert record["completed"] is False
    assert record["notes"] == "along the road"
    assert record["created_at"] == record["updated_at"]


@pytest.mark.asyncio
async def test_create_rejects_invalid_payloads(store):
    with pytest.raises(BadInput, match="description"):
        await requirements.create_requirement(store, {"category": "needs", "description": ""})

    with pytest.raises(BadInput, match="category"):
        await requirements.create_requirement(store, {"category": "musts", "description": "x"})

    with pytest.raises(BadInput, match="owner"):
        await requirements.create_requirement(
            store, {"category": "needs", "description": "x", "owner": "me"}
        )

    with pytest.raises(BadInput):
        await requirements.create_requirement(store, ["not", "an", "object"])


@pytest.mark.asyncio
async def test_list_groups_every_category(store):
    await _create(store, "wants", "Pollinators", 2)
    await _create(store, "wants", "Raised beds", 1)

    grouped, total = await requirements.list_requirements(store)

    assert total == 2
    assert set(grouped) == {"needs", "wants", "nice-to-haves"}
    assert grouped["needs"] == []
    assert [r["description"] for r in grouped["wants"]] == ["Raised beds", "Pollinators"]


@pytest.mark.asyncio
async def test_list_filters(store):
    await _create(store, "needs", "Privacy hedge")
    done = await _create(store, "needs", "Setback survey")
    await requirements.update_requirement(store, done["id"], {"completed": True})
    await _create(store, "wants", "Hedge of roses", notes="50% shade")

    _, total = await requirements.list_requirements(store, category="needs")
    assert total == 2

    grouped, total = await requirements.list_requirements(store, completed="true")
    assert total == 1
    assert grouped["needs"][0]["id"] == done["id"]

    _, total = await requirements.list_requirements(store, search="HEDGE")
    assert total == 2

    # Wildcards in the term are matched literally
    _, total = await requirements.list_requirements(store, search="50%")
    assert total == 1
    _, total = await requirements.list_requirements(store, search="%")
    assert total == 1


@pytest.mark.asyncio
async def test_list_rejects_unknown_filter_values(store):
    with pytest.raises(BadInput, match="category"):
        await requirements.list_requirements(store, category="musts")
    with pytest.raises(BadInput, match="completed"):
        await requirements.list_requirements(store, completed="maybe")


@pytest.mark.asyncio
async def test_get_missing_raises_not_found(store):
    with pytest.raises(NotFound, match="Requirement not found"):
        await requirements.get_requirement(store, 404)


@pytest.mark.asyncio
async def test_partial_update_touches_only_sent_fields(store):
    created = await _create(store, notes="keep me", priority=3)
    await asyncio.sleep(0.01)

    updated = await requirements.update_requirement(store, created["id"], {"completed": True})

    assert updated["completed"] is True
    assert updated["notes"] == "keep me"
    assert updated["priority"] == 3
    assert updated["description"] == created["description"]
    assert updated["updated_at"] > created["updated_at"]
    assert updated["created_at"] == created["created_at"]


@pytest.mark.asyncio
async def test_update_can_clear_nullable_field(store):
    created = await _create(store, notes="temporary")
    updated = await requirements.update_requirement(store, created["id"], {"notes": None})
    assert updated["notes"] is None


@pytest.mark.asyncio
async def test_update_rejects_null_for_required_field(store):
    created = await _create(store)
    with pytest.raises(BadInput, match="description"):
        await requirements.update_requirement(store, created["id"], {"description": None})


@pytest.mark.asyncio
async def test_empty_update_rejected_before_store_access():
    store = AsyncMock()

    with pytest.raises(BadInput, match="No valid fields to update"):
        await requirements.update_requirement(store, 1, {})

    store.fetch_one.assert_not_awaited()
    store.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_missing_raises_not_found(store):
    with pytest.raises(NotFound):
        await requirements.update_requirement(store, 999, {"completed": True})


@pytest.mark.asyncio
async def test_delete(store):
    created = await _create(store)
    await requirements.delete_requirement(store, created["id"])

    with pytest.raises(NotFound):
        await requirements.get_requirement(store, created["id"])
    with pytest.raises(NotFound):
        await requirements.delete_requirement(store, created["id"])


@pytest.mark.asyncio
async def test_reorder_writes_one_based_priorities(store):
    a = await _create(store, "wants", "A", 1)
    b = await _create(store, "wants", "B", 2)
    c = await _create(store, "wants", "C", 3)

    updated = await requirements.reorder_requirements(
        store, {"category": "wants", "orderedIds": [c["id"], a["id"], b["id"]]}
    )

    assert updated == 3
    grouped, _ = await requirements.list_requirements(store, category="wants")
    assert [(r["description"], r["priority"]) for r in grouped["wants"]] == [
        ("C", 1),
        ("A", 2),
        ("B", 3),
    ]


@pytest.mark.asyncio
async def test_reorder_ignores_ids_from_other_category(store):
    need = await _create(store, "needs", "Need", 5)
    want = await _create(store, "wants", "Want", 1)

    updated = await requirements.reorder_requirements(
        store, {"category": "wants", "orderedIds": [need["id"], want["id"]]}
    )

    assert updated == 1
    assert (await requirements.get_requirement(store, need["id"]))["priority"] == 5
    assert (await requirements.get_requirement(store, want["id"]))["priority"] == 2


@pytest.mark.asyncio
async def test_reorder_validates_shape(store):
    with pytest.raises(BadInput, match="orderedIds"):
        await requirements.reorder_requirements(store, {"category": "wants", "orderedIds": "1,2"})
    with pytest.raises(BadInput, match="category"):
        await requirements.reorder_requirements(store, {"orderedIds": [1]})


@pytest.mark.asyncio
async def test_seed_default_requirements_only_when_empty(store):
    assert await seed_default_requirements(store) == len(DEFAULT_REQUIREMENTS)
    assert await seed_default_requirements(store) == 0

    grouped, total = await requirements.list_requirements(store)
    assert total == len(DEFAULT_REQUIREMENTS)
    assert all(len(items) == 4 for items in grouped.values())
