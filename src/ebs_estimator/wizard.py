"""Step sequencing and view-state for the estimator wizard.

Everything here is pure: updates return new values and never touch their
inputs, so the state can be serialized between requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .dictionaries import SERVICES
from .models.form import FormData

RoomId = int | str


@dataclass(frozen=True)
class Step:
    id: str
    title: str


BASE_STEPS: Sequence[Step] = (
    Step("services", "Services"),
    Step("property", "Property"),
)

FINAL_STEPS: Sequence[Step] = (
    Step("additionals", "Extras"),
    Step("materials", "Materials"),
    Step("design", "Design"),
    Step("quote", "Quote"),
)


def _field_name(field: str) -> str:
    if field in FormData.model_fields:
        return field
    for name, info in FormData.model_fields.items():
        if info.alias == field:
            return name
    raise KeyError(f"Unknown form field: {field}")


def set_field(form: FormData, field: str, value: Any) -> FormData:
    """Return a new FormData with one top-level field replaced.

    ``field`` may be given in snake_case or as its camelCase wire name. The new
    value is validated the same way the HTTP payload is.
    """
    data = form.model_dump()
    data[_field_name(field)] = value
    return FormData.model_validate(data)


def build_steps(form: FormData) -> list[Step]:
    service_steps = [Step(service.id, service.label) for service in SERVICES if service.id in form.selected_services]
    return [*BASE_STEPS, *service_steps, *FINAL_STEPS]


def can_proceed(form: FormData, step_id: str) -> bool:
    if step_id == "services":
        return len(form.selected_services) > 0
    if step_id == "property":
        return form.property_type is not None
    return True


class WizardState(BaseModel):
    """Current step index and the expanded room panel of each service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    current_step: int = 0
    expanded_rooms: Mapping[str, Sequence[RoomId]] = Field(default_factory=dict)

    def step(self, form: FormData) -> Step:
        steps = build_steps(form)
        return steps[min(self.current_step, len(steps) - 1)]

    def is_last_step(self, form: FormData) -> bool:
        return self.current_step >= len(build_steps(form)) - 1

    def next_step(self, form: FormData) -> WizardState:
        steps = build_steps(form)
        index = min(self.current_step, len(steps) - 1)
        if index >= len(steps) - 1 or not can_proceed(form, steps[index].id):
            return self.model_copy(update={"current_step": index})
        return self.model_copy(update={"current_step": index + 1})

    def prev_step(self) -> WizardState:
        if self.current_step <= 0:
            return self
        return self.model_copy(update={"current_step": self.current_step - 1})

    def go_to_step(self, index: int) -> WizardState:
        # Steps ahead of the current one are locked.
        if index < 0 or index > self.current_step:
            return self
        return self.model_copy(update={"current_step": index})

    def toggle_room(self, service_id: str, room_id: RoomId) -> WizardState:
        expanded = dict(self.expanded_rooms)
        current = expanded.get(service_id, ())
        if room_id in current:
            expanded[service_id] = [item for item in current if item != room_id]
        else:
            expanded[service_id] = [room_id]
        return self.model_copy(update={"expanded_rooms": expanded})

    def is_expanded(self, service_id: str, room_id: RoomId) -> bool:
        return room_id in self.expanded_rooms.get(service_id, ())


__all__ = [
    "BASE_STEPS",
    "FINAL_STEPS",
    "Step",
    "WizardState",
    "build_steps",
    "can_proceed",
    "set_field",
]
