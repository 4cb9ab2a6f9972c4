import logging

import pytest

from ebs_estimator.formatters import (
    bathroom_bullets,
    carpentry_bullets,
    flooring_bullets,
    format_number,
    format_room_bullets,
    kitchen_bullets,
    painting_bullets,
    plastering_bullets,
)


@pytest.mark.parametrize(("value", "expected"), [(12, "12"), (12.0, "12"), (2.5, "2.5"), ("36", "36")])
def test_format_number_drops_trailing_zero(value, expected):
    assert format_number(value) == expected


def test_kitchen_bullets():
    room = {
        "name": "Kitchen",
        "size": "medium",
        "worktop": "solid_wood",
        "electrics": ["oven", "under_cabinet"],
        "plumbing": [],
        "splashback": True,
        "floorTilingArea": 12,
    }

    assert kitchen_bullets(room) == [
        "Size: medium",
        "Worktop: solid wood",
        "Electrical alterations: oven, under cabinet",
        "Splashback tiling",
        "Floor tiling: 12 m²",
    ]


def test_kitchen_bullets_skip_zero_tiling_area():
    assert kitchen_bullets({"name": "Kitchen", "floorTilingArea": 0}) == []


def test_bathroom_bullets():
    room = {
        "name": "Bathroom",
        "size": "small",
        "fixtures": ["toilet", "basin"],
        "wallTiling": "50",
        "floorTiling": True,
        "tileSize": "large",
        "finishQuality": "high",
    }

    assert bathroom_bullets(room) == [
        "Size: small",
        "Fixtures: toilet, basin",
        "Wall tiling: 50%",
        "Floor tiling (large tiles)",
        "Finish: high",
    ]


def test_bathroom_bullets_skip_zero_wall_tiling():
    assert "Wall tiling: 0%" not in bathroom_bullets({"wallTiling": "0"})


def test_flooring_bullets():
    room = {
        "name": "Lounge",
        "type": "engineered_wood",
        "area": 18.5,
        "removeOld": True,
        "trimDoors": 2,
        "fitSkirting": False,
        "wasteRemoval": True,
    }

    assert flooring_bullets(room) == [
        "Type: engineered wood",
        "Area: 18.5 m²",
        "Remove old flooring",
        "2 door(s) trimmed",
        "Waste removal",
    ]


def test_carpentry_bullets():
    room = {"doorCount": 3, "skirtingMetres": 15, "architraveMetres": 0, "bespokeComplexity": "none"}

    assert carpentry_bullets(room) == ["3 door(s) hung", "15 m skirting"]


def test_painting_bullets():
    room = {
        "type": "hall_stairs",
        "surfaces": ["walls", "woodwork"],
        "coats": 2,
        "doors": 3,
        "windows": 0,
        "wallpaperRemoval": "none",
        "staircaseHeight": "double",
        "spindleCount": 20,
    }

    assert painting_bullets(room) == [
        "Room type: Hall + Stairs + Landing",
        "Surfaces: walls, woodwork",
        "2 coat(s)",
        "3 door(s) painted",
        "Double-height staircase",
        "20 spindle(s)",
    ]


def test_plastering_bullets():
    assert plastering_bullets({"workType": "re-skim", "area": 36, "surfaceCondition": "fair"}) == [
        "Work: Reskim",
        "Area: 36 m²",
        "Condition: fair",
    ]
    assert plastering_bullets({"workType": "patching", "patchCount": 4}) == ["Work: Patch Work", "4 patch(es)"]


def test_dispatch_by_module_name():
    assert format_room_bullets("Carpentry", {"doorCount": 1}) == ["1 door(s) hung"]


def test_malformed_room_fails_closed(caplog):
    with caplog.at_level(logging.WARNING, logger="ebs_estimator.formatters"):
        bullets = format_room_bullets("Kitchen", {"name": "Kitchen", "floorTilingArea": "lots"})

    assert bullets == []
    assert "Failed to format room bullets" in caplog.text


def test_unknown_module_yields_no_bullets(caplog):
    with caplog.at_level(logging.WARNING, logger="ebs_estimator.formatters"):
        assert format_room_bullets("Roofing", {"name": "Roof"}) == []

    assert "No room formatter" in caplog.text
