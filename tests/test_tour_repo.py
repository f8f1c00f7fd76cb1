"""Saved-tour persistence adapters."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from conftest import make_sight
from tourguide.db.repositories.tour_repo import (
    InMemoryTourRepository,
    JsonFileTourRepository,
    RedisTourRepository,
    build_tour_repository,
)
from tourguide.schemas.settings import DetailLevel, TourWizardSettings
from tourguide.modules.planning.tour_assembler import TourAssembler
from tourguide.schemas.tour import Tour


def _tour(name: str = "Old Town Walk") -> Tour:
    route = [
        make_sight("a", 0.0, 0.003, tier=1),
        make_sight(7, 0.002, 0.006, tier=3),
        make_sight("c", 0.004, 0.004),
    ]
    settings = TourWizardSettings(detail_level_per_sight=DetailLevel.BRIEF)
    return TourAssembler().assemble(route, settings, name=name)


def test_json_file_round_trip(tmp_path):
    repository = JsonFileTourRepository(tmp_path / "nested" / "tours.json")
    assert repository.load() == []

    tour = _tour()
    repository.save([tour])
    loaded = repository.load()

    assert loaded == [tour]
    assert loaded[0].dwell_minutes == 5
    assert loaded[0].estimated_duration == tour.estimated_duration

    raw = json.loads((tmp_path / "nested" / "tours.json").read_text(encoding="utf-8"))
    assert raw[0]["name"] == "Old Town Walk"
    assert [s["order"] for s in raw[0]["sights"]] == [1, 2, 3]
    assert raw[0]["sights"][-1]["distance_to_next"] is None


def test_json_file_save_replaces_whole_collection(tmp_path):
    repository = JsonFileTourRepository(tmp_path / "tours.json")
    repository.save([_tour("one"), _tour("two")])
    repository.save([_tour("three")])
    assert [t.name for t in repository.load()] == ["three"]
    assert list(tmp_path.iterdir()) == [tmp_path / "tours.json"]


@pytest.mark.parametrize("content", ["{not json", '{"tours": []}', '[{"name": "no id"}]'])
def test_json_file_unreadable_content_is_moved_aside(tmp_path, content):
    path = tmp_path / "tours.json"
    path.write_text(content, encoding="utf-8")
    repository = JsonFileTourRepository(path)

    assert repository.load() == []
    assert not path.exists()
    assert (tmp_path / "tours.json.corrupt").read_text(encoding="utf-8") == content

    repository.save([_tour()])
    assert [t.name for t in repository.load()] == ["Old Town Walk"]


def test_in_memory_repository_returns_copies():
    repository = InMemoryTourRepository()
    tour = _tour()
    repository.save([tour])
    assert repository.load() == [tour]
    assert repository.load() is not repository.load()


def test_redis_repository_stores_one_json_value():
    backing: dict[str, str] = {}
    client = MagicMock()
    client.get.side_effect = backing.get
    client.set.side_effect = backing.__setitem__

    repository = RedisTourRepository(key="test:tours", client=client)
    assert repository.load() == []

    tour = _tour()
    repository.save([tour])
    assert list(backing) == ["test:tours"]
    assert repository.load() == [tour]


def test_stored_aggregates_are_recomputed():
    data = _tour().to_dict()
    data["total_distance"] = 999.0
    data["estimated_duration"] = 1
    tour = Tour.from_dict(data)
    assert tour.total_distance != 999.0
    assert tour.estimated_duration == _tour().estimated_duration


def test_build_repository_by_name():
    assert isinstance(build_tour_repository("memory"), InMemoryTourRepository)
    assert isinstance(build_tour_repository("json"), JsonFileTourRepository)
    with pytest.raises(ValueError):
        build_tour_repository("floppy")
