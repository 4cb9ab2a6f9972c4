from __future__ import annotations

from typing import Literal, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticUndefined

ServiceId = Literal["kitchen", "bathroom", "flooring", "carpentry", "painting", "plastering"]


class FormModel(BaseModel):
    """Base for wizard payloads: camelCase on the wire, immutable in memory."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_defaults(cls, value, info):
        # The wizard sends null for inputs it has not touched yet.
        field = cls.model_fields.get(info.field_name)
        if value is not None or field is None:
            return value
        if field.default_factory is not None:
            return field.default_factory()
        if field.default is not PydanticUndefined:
            return field.default
        return value


class Room(FormModel):
    id: int | str | None = None
    name: str = "Room"


class KitchenRoom(Room):
    size: str | None = None
    worktop: str | None = None
    require_electrical_alterations: bool | None = None
    electrics: Sequence[str] = Field(default_factory=list)
    require_plumbing_alterations: bool | None = None
    plumbing: Sequence[str] = Field(default_factory=list)
    splashback: bool = False
    require_floor_tiling: bool = False
    floor_tiling_area: float | None = None


class BathroomRoom(Room):
    size: str | None = None
    layout: str | None = None
    fixtures: Sequence[str] = Field(default_factory=list)
    wall_tiling: str | None = None
    floor_tiling: bool = False
    tile_size: str | None = None
    require_electrical_alterations: bool | None = None
    electrics: Sequence[str] = Field(default_factory=list)
    require_plumbing_alterations: bool | None = None
    plumbing: Sequence[str] = Field(default_factory=list)
    finish_quality: str | None = None
    access: str | None = None

    @field_validator("wall_tiling", mode="before")
    @classmethod
    def _coverage_key(cls, value):
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)):
            return str(int(value))
        return value


class FlooringRoom(Room):
    type: str | None = None
    area: float | None = None
    subfloor: str | None = None
    layout: str | None = None
    pattern: str | None = None
    finish_quality: str | None = None
    remove_old: bool = False
    trim_doors: float | None = None
    fit_skirting: bool = False
    waste_removal: bool = False


class CarpentryRoom(Room):
    door_count: float | None = None
    skirting_metres: float | None = None
    architrave_metres: float | None = None
    wardrobe_metres: float | None = None
    finish_type: str | None = None
    bespoke_complexity: str | None = None


class PaintingSurfaces(FormModel):
    walls: bool = False
    ceiling: bool = False
    woodwork: bool = False

    def selected(self) -> list[str]:
        return [name for name in ("walls", "ceiling", "woodwork") if getattr(self, name)]


class PaintingRoom(Room):
    type: str | None = None
    size: str | None = None
    surfaces: PaintingSurfaces = Field(default_factory=PaintingSurfaces)
    coats: float | None = None
    colours: float | None = None
    minor_repairs: bool = False
    wallpaper_removal: str | None = None
    doors: float | None = None
    windows: float | None = None
    staircase_height: str | None = None
    spindle_count: float | None = None
    handrails_stringers: bool = False


class PlasteringRoom(Room):
    work_type: str | None = None
    area: float | None = None
    patch_count: float | None = None
    surface_condition: str | None = None
    finish_level: str | None = None
    access: str | None = None


class KitchenData(FormModel):
    areas: Sequence[KitchenRoom] = Field(default_factory=list)


class BathroomData(FormModel):
    rooms: Sequence[BathroomRoom] = Field(default_factory=list)


class FlooringData(FormModel):
    areas: Sequence[FlooringRoom] = Field(default_factory=list)


class CarpentryData(FormModel):
    areas: Sequence[CarpentryRoom] = Field(default_factory=list)


class PaintingData(FormModel):
    rooms: Sequence[PaintingRoom] = Field(default_factory=list)


class PlasteringData(FormModel):
    areas: Sequence[PlasteringRoom] = Field(default_factory=list)


class AdditionalItem(FormModel):
    id: str
    quantity: float | None = None
    price: float | None = None


class MaterialSelection(FormModel):
    quality: str | None = None
    quantity: float | None = None


class CustomMaterial(FormModel):
    id: int | str | None = None
    name: str = "Custom Item"
    amount: float | None = None


class MaterialsData(FormModel):
    mode: str | None = None
    include_in_total: bool = False
    selected: Mapping[str, MaterialSelection] = Field(default_factory=dict)
    custom: Sequence[CustomMaterial] = Field(default_factory=list)
    contingency: float | None = None


class FormData(FormModel):
    property_type: str | None = None
    selected_services: Sequence[str] = Field(default_factory=list)
    kitchen: KitchenData | None = None
    bathroom: BathroomData | None = None
    flooring: FlooringData | None = None
    carpentry: CarpentryData | None = None
    painting: PaintingData | None = None
    plastering: PlasteringData | None = None
    additionals: Sequence[AdditionalItem] = Field(default_factory=list)
    materials: MaterialsData | None = None
    design_management: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "propertyType": "terrace",
                "selectedServices": ["kitchen", "flooring"],
                "kitchen": {
                    "areas": [
                        {
                            "id": 1,
                            "name": "Kitchen",
                            "size": "medium",
                            "worktop": "quartz",
                            "requireElectricalAlterations": True,
                            "electrics": ["oven", "downlights"],
                            "splashback": True,
                        }
                    ]
                },
                "flooring": {
                    "areas": [
                        {
                            "id": 2,
                            "name": "Lounge",
                            "type": "laminate",
                            "area": 18,
                            "subfloor": "good",
                            "wasteRemoval": True,
                        }
                    ]
                },
                "additionals": [{"id": "skip", "quantity": 1, "price": 260}],
                "materials": {"mode": "custom", "includeInTotal": True, "custom": [{"name": "Tiles", "amount": 450}]},
                "designManagement": "procurement",
            }
        }
    )

    def rooms_for(self, service_id: str, rooms_field: str) -> Sequence[Room]:
        """Rooms of a selected service; empty when the service is not selected."""
        if service_id not in self.selected_services:
            return ()
        container = getattr(self, service_id, None)
        if container is None:
            return ()
        return getattr(container, rooms_field, None) or ()


__all__ = [
    "AdditionalItem",
    "BathroomData",
    "BathroomRoom",
    "CarpentryData",
    "CarpentryRoom",
    "CustomMaterial",
    "FlooringData",
    "FlooringRoom",
    "FormData",
    "KitchenData",
    "KitchenRoom",
    "MaterialSelection",
    "MaterialsData",
    "PaintingData",
    "PaintingRoom",
    "PaintingSurfaces",
    "PlasteringData",
    "PlasteringRoom",
    "Room",
    "ServiceId",
]
