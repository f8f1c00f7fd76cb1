"""Haversine distance, travel-time rates and dwell times."""

from __future__ import annotations

import math

from tourguide.schemas.settings import DetailLevel, TransportMode
from tourguide.modules.tool_usage.distance_tool import (
    DistanceTool,
    dwell_minutes,
    haversine_km,
    minutes_per_km,
    travel_minutes,
)

BERLIN = (52.5200, 13.4050)
PARIS = (48.8566, 2.3522)


def test_distance_is_symmetric():
    pairs = [(BERLIN, PARIS), ((0.0, 0.0), (10.0, -20.0)), ((-33.9, 18.4), (35.7, 139.7))]
    for a, b in pairs:
        assert haversine_km(*a, *b) == haversine_km(*b, *a)


def test_distance_to_self_is_zero():
    for point in [BERLIN, PARIS, (0.0, 0.0), (90.0, 180.0)]:
        assert haversine_km(*point, *point) == 0.0


def test_berlin_to_paris():
    assert abs(haversine_km(*BERLIN, *PARIS) - 878) <= 5


def test_antipodal_and_boundary_inputs():
    half_circumference = math.pi * 6371.0
    assert math.isclose(haversine_km(0.0, 0.0, 0.0, 180.0), half_circumference, rel_tol=1e-9)
    assert math.isclose(haversine_km(90.0, 0.0, -90.0, 0.0), half_circumference, rel_tol=1e-9)
    # -180 and 180 are the same meridian
    assert haversine_km(10.0, -180.0, 10.0, 180.0) < 1e-6


def test_minutes_per_km_by_mode():
    assert minutes_per_km(TransportMode.WALK) == 12
    assert minutes_per_km(TransportMode.TAXI) == 3
    assert minutes_per_km(TransportMode.PUBLIC) == 6
    assert minutes_per_km(TransportMode.MIX) == 8
    assert minutes_per_km("taxi") == 3
    assert minutes_per_km(None) == 12


def test_travel_minutes_rounds_up():
    assert travel_minutes(1.01, TransportMode.WALK) == 13
    assert travel_minutes(0.5, TransportMode.TAXI) == 2
    assert travel_minutes(2.0, TransportMode.PUBLIC) == 12
    assert travel_minutes(0.0, TransportMode.WALK) == 0


def test_dwell_minutes_by_detail_level():
    assert dwell_minutes(DetailLevel.BRIEF) == 5
    assert dwell_minutes(DetailLevel.MEDIUM) == 15
    assert dwell_minutes(DetailLevel.EXPERT) == 25
    assert dwell_minutes(None) == 15


def test_distance_tool_uses_its_mode():
    tool = DistanceTool(TransportMode.TAXI)
    km = tool.calculate(*BERLIN, *PARIS)
    assert tool.travel_time_minutes(*BERLIN, *PARIS) == math.ceil(km * 3)
    assert tool.travel_time_minutes(*BERLIN, *PARIS, mode=TransportMode.WALK) == math.ceil(km * 12)
    assert tool.travel_time_minutes(*BERLIN, *BERLIN) == 0
