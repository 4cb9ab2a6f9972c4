from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from .calculator import normalise_work_type
from .dictionaries import PAINTING_STAIRS_TYPES, SERVICES, ServiceDefinition
from .models.form import (
    BathroomRoom,
    CarpentryRoom,
    FlooringRoom,
    FormData,
    KitchenRoom,
    PaintingRoom,
    PlasteringRoom,
    Room,
)
from .models.quote import ModuleDetail


def _enabled(flag: bool | None, items: Sequence[str]) -> list[str]:
    return [] if flag is False else list(items)


def _kitchen(room: KitchenRoom) -> dict[str, Any]:
    detail: dict[str, Any] = {
        "id": room.id,
        "name": room.name,
        "size": room.size,
        "worktop": room.worktop,
        "electrics": _enabled(room.require_electrical_alterations, room.electrics),
        "plumbing": _enabled(room.require_plumbing_alterations, room.plumbing),
        "splashback": room.splashback,
    }
    if room.require_floor_tiling:
        detail["floorTilingArea"] = room.floor_tiling_area or 0
    return detail


def _bathroom(room: BathroomRoom) -> dict[str, Any]:
    detail: dict[str, Any] = {
        "id": room.id,
        "name": room.name,
        "size": room.size,
        "layout": room.layout,
        "fixtures": list(room.fixtures),
        "wallTiling": room.wall_tiling,
        "floorTiling": room.floor_tiling,
    }
    if room.floor_tiling:
        detail["tileSize"] = room.tile_size
    detail["electrics"] = _enabled(room.require_electrical_alterations, room.electrics)
    detail["plumbing"] = _enabled(room.require_plumbing_alterations, room.plumbing)
    detail["finishQuality"] = room.finish_quality
    detail["access"] = room.access
    return detail


def _flooring(room: FlooringRoom) -> dict[str, Any]:
    return {
        "id": room.id,
        "name": room.name,
        "type": room.type,
        "area": room.area or 0,
        "subfloor": room.subfloor,
        "layout": room.layout,
        "pattern": room.pattern,
        "finishQuality": room.finish_quality,
        "removeOld": room.remove_old,
        "trimDoors": room.trim_doors or 0,
        "fitSkirting": room.fit_skirting,
        "wasteRemoval": room.waste_removal,
    }


def _carpentry(room: CarpentryRoom) -> dict[str, Any]:
    return {
        "id": room.id,
        "name": room.name,
        "doorCount": room.door_count or 0,
        "skirtingMetres": room.skirting_metres or 0,
        "architraveMetres": room.architrave_metres or 0,
        "wardrobeMetres": room.wardrobe_metres or 0,
        "finishType": room.finish_type,
        "bespokeComplexity": room.bespoke_complexity,
    }


def _painting(room: PaintingRoom) -> dict[str, Any]:
    detail: dict[str, Any] = {
        "id": room.id,
        "name": room.name,
        "type": room.type,
        "size": room.size,
        "surfaces": room.surfaces.selected(),
        "coats": room.coats or 0,
        "colours": room.colours or 0,
        "minorRepairs": room.minor_repairs,
        "wallpaperRemoval": room.wallpaper_removal,
        "doors": room.doors or 0,
        "windows": room.windows or 0,
    }
    if room.type in PAINTING_STAIRS_TYPES:
        detail["staircaseHeight"] = room.staircase_height
        detail["spindleCount"] = room.spindle_count or 0
        detail["handrailsStringers"] = room.handrails_stringers
    return detail


def _plastering(room: PlasteringRoom) -> dict[str, Any]:
    detail: dict[str, Any] = {"id": room.id, "name": room.name, "workType": room.work_type}
    if normalise_work_type(room.work_type) == "patch":
        detail["patchCount"] = room.patch_count or 0
    else:
        detail["area"] = room.area or 0
    detail["surfaceCondition"] = room.surface_condition
    detail["finishLevel"] = room.finish_level
    detail["access"] = room.access
    return detail


ROOM_EXTRACTORS: Mapping[str, Callable[[Room], dict[str, Any]]] = {
    "kitchen": _kitchen,
    "bathroom": _bathroom,
    "flooring": _flooring,
    "carpentry": _carpentry,
    "painting": _painting,
    "plastering": _plastering,
}


def generate_module_details(
    form: FormData,
    *,
    services: Sequence[ServiceDefinition] = SERVICES,
) -> list[ModuleDetail]:
    """Per-service display attributes, ordered like the quote's services.

    Consumers pair these with ``ServiceResult``s by ``module`` == ``name``; the
    two lists are not index-aligned.
    """
    details: list[ModuleDetail] = []
    for service in services:
        rooms = form.rooms_for(service.id, service.rooms_field)
        if not rooms:
            continue
        extract = ROOM_EXTRACTORS[service.id]
        details.append(ModuleDetail(module=service.label, rooms=[extract(room) for room in rooms]))
    return details


__all__ = ["generate_module_details", "ROOM_EXTRACTORS"]
