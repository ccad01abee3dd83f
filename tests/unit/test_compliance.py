# tests/unit/test_compliance.py
"""Unit tests for the compliance service."""

from pathlib import Path

import pytest
import pytest_asyncio

from willowbank.errors import BadInput, NotFound
from willowbank.models.sqlite_store import SQLiteRecordStore
from willowbank.services import compliance


@pytest_asyncio.fixture
async def store(tmp_path: Path) -> SQLiteRecordStore:
    store = SQLiteRecordStore(str(tmp_path / "compliance.db"))
    await store.initialize()
    return store


async def _rule(store, title, requirement_type="setback", **extra):
    payload = {
        "title": title,
        "description": f"{title} rule",
        "requirement_type": requirement_type,
        **extra,
    }
    return await compliance.create_compliance(store, payload)


@pytest.mark.asyncio
async def test_create_applies_defaults(store):
    rule = await _rule(store, "Front setback", measurement="20 ft")

    assert rule["jurisdiction"] == "Yolo County"
    assert rule["status"] == "active"
    assert rule["measurement"] == "20 ft"
    assert rule["code_reference"] is None


@pytest.mark.asyncio
async def test_create_validation(store):
    with pytest.raises(BadInput, match="requirement_type"):
        await _rule(store, "Odd", requirement_type="zoning")
    with pytest.raises(BadInput, match="description"):
        await compliance.create_compliance(
            store, {"title": "No description", "requirement_type": "fence"}
        )


@pytest.mark.asyncio
async def test_list_groups_by_type_and_filters(store):
    await _rule(store, "Front setback")
    await _rule(store, "MWELO budget", "water", jurisdiction="State of California")
    await _rule(store, "Old fence height", "fence", status="deprecated")

    grouped, total = await compliance.list_compliance(store)
    assert total == 3
    assert set(grouped) == {"setback", "water", "fence", "plant", "permit"}
    assert grouped["plant"] == []

    grouped, total = await compliance.list_compliance(store, requirement_type="water")
    assert total == 1
    assert grouped["water"][0]["title"] == "MWELO budget"

    _, total = await compliance.list_compliance(store, status="deprecated")
    assert total == 1

    _, total = await compliance.list_compliance(store, jurisdiction="yolo county")
    assert total == 2

    with pytest.raises(BadInput, match="type"):
        await compliance.list_compliance(store, requirement_type="zoning")


@pytest.mark.asyncio
async def test_update_get_delete(store):
    rule = await _rule(store, "Fence height", "fence")

    updated = await compliance.update_compliance(store, rule["id"], {"status": "pending"})
    assert updated["status"] == "pending"
    assert updated["title"] == "Fence height"

    with pytest.raises(BadInput, match="status"):
        await compliance.update_compliance(store, rule["id"], {"status": None})

    await compliance.delete_compliance(store, rule["id"])
    with pytest.raises(NotFound, match="Compliance requirement not found"):
        await compliance.get_compliance(store, rule["id"])
