# tests/unit/test_plants.py
"""Unit tests for the plant catalogue service: filters, flags and seeding."""

from pathlib import Path

import pytest
import pytest_asyncio

from willowbank.errors import BadInput, NotFound
from willowbank.models.sqlite_store import SQLiteRecordStore
from willowbank.services import plants
from willowbank.services.seed import DEFAULT_PLANTS


@pytest_asyncio.fixture
async def store(tmp_path: Path) -> SQLiteRecordStore:
    store = SQLiteRecordStore(str(tmp_path / "plants.db"))
    await store.initialize()
    return store


async def _plant(store, common_name, category="trees", **extra):
    return await plants.create_plant(
        store, {"common_name": common_name, "category": category, **extra}
    )


@pytest.mark.asyncio
async def test_create_plant_defaults(store):
    plant = await _plant(store, "Valley Oak", scientific_name="Quercus lobata")

    assert plant["native"] is False
    assert plant["drought_tolerant"] is False
    assert plant["recommended"] is False
    assert plant["foliage_type"] is None
    assert plant["scientific_name"] == "Quercus lobata"


@pytest.mark.asyncio
async def test_create_plant_validation(store):
    with pytest.raises(BadInput, match="water_needs"):
        await _plant(store, "Oak", water_needs="lots")
    with pytest.raises(BadInput, match="care_instructions"):
        await _plant(store, "Oak", care_instructions="x" * 1501)
    with pytest.raises(BadInput, match="common_name"):
        await plants.create_plant(store, {"category": "trees"})


@pytest.mark.asyncio
async def test_filters_are_anded(store):
    await _plant(store, "Valley Oak", native=True)
    await _plant(store, "Olive", native=False)
    await _plant(store, "Poppy", "pollinators", native=True)

    grouped, total = await plants.list_plants(store, category="trees", native="true")

    assert total == 1
    assert [p["common_name"] for p in grouped["trees"]] == ["Valley Oak"]
    assert grouped["pollinators"] == []
    assert set(grouped) == set(plants.FILTER_OPTIONS["categories"])


@pytest.mark.asyncio
async def test_list_sorted_by_category_then_name(store):
    await _plant(store, "Redbud")
    await _plant(store, "Coast Live Oak")

    grouped, _ = await plants.list_plants(store)
    assert [p["common_name"] for p in grouped["trees"]] == ["Coast Live Oak", "Redbud"]


@pytest.mark.asyncio
async def test_search_and_flag_filters(store):
    await _plant(store, "Toyon", "privacy", scientific_name="Heteromeles arbutifolia",
                 drought_tolerant=True, foliage_type="evergreen", sun_requirements="full-sun")
    await _plant(store, "Hosta", "groundcover", sun_requirements="shade")

    _, total = await plants.list_plants(store, search="heteromeles")
    assert total == 1
    _, total = await plants.list_plants(store, drought_tolerant="1")
    assert total == 1
    _, total = await plants.list_plants(store, foliage_type="evergreen")
    assert total == 1
    _, total = await plants.list_plants(store, sun_requirements="shade")
    assert total == 1
    _, total = await plants.list_plants(store, native="false")
    assert total == 2


@pytest.mark.asyncio
async def test_unknown_filter_values_rejected(store):
    with pytest.raises(BadInput, match="sun_requirements"):
        await plants.list_plants(store, sun_requirements="moonlight")
    with pytest.raises(BadInput, match="native"):
        await plants.list_plants(store, native="sometimes")


@pytest.mark.asyncio
async def test_list_flagged(store):
    await _plant(store, "Oak", native=True, recommended=True)
    await _plant(store, "Olive", recommended=True)
    await _plant(store, "Eucalyptus")

    recommended = await plants.list_flagged(store, "recommended")
    native = await plants.list_flagged(store, "native")

    assert [p["common_name"] for p in recommended] == ["Oak", "Olive"]
    assert [p["common_name"] for p in native] == ["Oak"]

    with pytest.raises(ValueError):
        await plants.list_flagged(store, "category")


@pytest.mark.asyncio
async def test_update_and_delete(store):
    plant = await _plant(store, "Oak", notes="big")

    updated = await plants.update_plant(store, plant["id"], {"recommended": True, "bloom_color": "none"})
    assert updated["recommended"] is True
    assert updated["notes"] == "big"
    assert updated["bloom_color"] == "none"

    with pytest.raises(BadInput):
        await plants.update_plant(store, plant["id"], {"id": 3})

    await plants.delete_plant(store, plant["id"])
    with pytest.raises(NotFound, match="Plant not found"):
        await plants.get_plant(store, plant["id"])


@pytest.mark.asyncio
async def test_seed_requires_empty_catalogue(store):
    assert await plants.seed_plants(store) == len(DEFAULT_PLANTS)

    with pytest.raises(BadInput, match="seed/force"):
        await plants.seed_plants(store)

    grouped, total = await plants.list_plants(store, category="trees", native="true")
    assert total == 2


@pytest.mark.asyncio
async def test_force_seed_replaces_catalogue(store):
    await _plant(store, "Custom plant")

    assert await plants.seed_plants(store, force=True) == len(DEFAULT_PLANTS)
    _, total = await plants.list_plants(store, search="Custom")
    assert total == 0
    assert len(await plants.list_flagged(store, "native")) == 7
