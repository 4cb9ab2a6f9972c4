import pytest
from pydantic import ValidationError

from ebs_estimator.models.form import FormData
from ebs_estimator.wizard import WizardState, build_steps, can_proceed, set_field


def step_ids(form: FormData) -> list[str]:
    return [step.id for step in build_steps(form)]


def test_set_field_returns_new_form():
    form = FormData()
    updated = set_field(form, "propertyType", "flat")

    assert updated.property_type == "flat"
    assert form.property_type is None


def test_set_field_validates_nested_values():
    form = set_field(FormData(), "kitchen", {"areas": [{"name": "Kitchen", "size": "small"}]})

    assert form.kitchen.areas[0].size == "small"
    with pytest.raises(ValidationError):
        set_field(form, "additionals", 3)


def test_set_field_rejects_unknown_fields():
    with pytest.raises(KeyError):
        set_field(FormData(), "roofing", {})


def test_steps_follow_fixed_service_order():
    form = FormData(selected_services=["plastering", "kitchen"])

    assert step_ids(form) == [
        "services",
        "property",
        "kitchen",
        "plastering",
        "additionals",
        "materials",
        "design",
        "quote",
    ]


def test_can_proceed_rules():
    form = FormData()

    assert not can_proceed(form, "services")
    assert not can_proceed(form, "property")
    assert can_proceed(form, "materials")

    form = set_field(set_field(form, "selectedServices", ["bathroom"]), "propertyType", "terrace")
    assert can_proceed(form, "services")
    assert can_proceed(form, "property")


def test_navigation():
    form = FormData(selected_services=["painting"], property_type="flat")
    state = WizardState()

    state = state.next_step(form).next_step(form)
    assert state.step(form).id == "painting"

    assert state.go_to_step(5) == state
    assert state.go_to_step(0).current_step == 0
    assert state.prev_step().step(form).id == "property"
    assert WizardState().prev_step().current_step == 0


def test_next_step_blocked_until_step_is_complete():
    state = WizardState()

    assert state.next_step(FormData()).current_step == 0


def test_next_step_stops_at_quote():
    form = FormData(selected_services=["painting"], property_type="flat")
    state = WizardState(current_step=6)

    assert state.is_last_step(form)
    assert state.next_step(form).current_step == 6


def test_toggle_room_is_an_accordion():
    state = WizardState().toggle_room("kitchen", 1)
    assert state.is_expanded("kitchen", 1)

    state = state.toggle_room("kitchen", 2)
    assert not state.is_expanded("kitchen", 1)
    assert state.is_expanded("kitchen", 2)

    state = state.toggle_room("kitchen", 2)
    assert state.expanded_rooms["kitchen"] == []


def test_state_serializes_with_wire_names():
    state = WizardState(current_step=2).toggle_room("painting", "a")

    assert state.model_dump(by_alias=True) == {"currentStep": 2, "expandedRooms": {"painting": ["a"]}}
