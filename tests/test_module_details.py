from pathlib import Path

from ebs_estimator.models.form import FormData
from ebs_estimator.module_details import generate_module_details

FIXTURES = Path(__file__).resolve().parent.parent / "data" / "forms"


def load_fixture(name: str) -> FormData:
    return FormData.model_validate_json((FIXTURES / f"{name}.json").read_text(encoding="utf-8"))


def details_by_module(form: FormData) -> dict:
    return {detail.module: detail.rooms for detail in generate_module_details(form)}


def test_modules_follow_service_order_and_skip_unselected():
    form = FormData.model_validate(
        {
            "selectedServices": ["painting", "kitchen"],
            "kitchen": {"areas": [{"name": "Kitchen", "size": "small"}]},
            "painting": {"rooms": [{"name": "Lounge"}]},
            "bathroom": {"rooms": [{"name": "Bathroom"}]},
        }
    )

    assert [detail.module for detail in generate_module_details(form)] == ["Kitchen", "Painting"]


def test_kitchen_detail_gates_lists_on_flags():
    details = details_by_module(load_fixture("terrace_renovation"))
    kitchen = details["Kitchen"][0]

    assert kitchen["name"] == "Kitchen"
    assert kitchen["worktop"] == "quartz"
    assert kitchen["electrics"] == ["oven", "downlights"]
    assert kitchen["plumbing"] == []
    assert kitchen["floorTilingArea"] == 12


def test_kitchen_detail_omits_tiling_area_when_not_required():
    form = FormData.model_validate(
        {
            "selectedServices": ["kitchen"],
            "kitchen": {"areas": [{"name": "Kitchen", "floorTilingArea": 20}]},
        }
    )
    kitchen = details_by_module(form)["Kitchen"][0]

    assert "floorTilingArea" not in kitchen


def test_bathroom_tile_size_only_with_floor_tiling():
    form = FormData.model_validate(
        {
            "selectedServices": ["bathroom"],
            "bathroom": {"rooms": [{"name": "WC", "floorTiling": False, "tileSize": "large"}]},
        }
    )
    assert "tileSize" not in details_by_module(form)["Bathroom"][0]

    bathroom = details_by_module(load_fixture("terrace_renovation"))["Bathroom"][0]
    assert bathroom["tileSize"] == "large"
    assert bathroom["wallTiling"] == "50"


def test_flooring_detail_keeps_rooms_the_engine_skips():
    flooring = details_by_module(load_fixture("terrace_renovation"))["Flooring"]

    assert [room["name"] for room in flooring] == ["Lounge", "Landing"]
    assert flooring[1]["type"] is None
    assert flooring[0]["trimDoors"] == 2


def test_painting_stairs_fields_only_for_stairs_rooms():
    stairs = details_by_module(load_fixture("terrace_renovation"))["Painting"][0]
    assert stairs["surfaces"] == ["walls", "ceiling"]
    assert stairs["staircaseHeight"] == "double"
    assert stairs["spindleCount"] == 20

    form = FormData.model_validate(
        {
            "selectedServices": ["painting"],
            "painting": {"rooms": [{"name": "Lounge", "type": "standard", "spindleCount": 12}]},
        }
    )
    lounge = details_by_module(form)["Painting"][0]
    assert "spindleCount" not in lounge
    assert "staircaseHeight" not in lounge


def test_plastering_uses_patch_count_or_area():
    plastering = details_by_module(load_fixture("terrace_renovation"))["Plastering"]

    assert plastering[0]["area"] == 36
    assert "patchCount" not in plastering[0]
    assert plastering[1]["patchCount"] == 4
    assert "area" not in plastering[1]


def test_empty_form_has_no_details():
    assert generate_module_details(FormData()) == []
