"""Human-readable summary lines for a single room.

Each formatter takes one room entry produced by ``generate_module_details`` and
returns short lines such as ``"Worktop: quartz"`` or ``"3 door(s) painted"``.
A line is only emitted when its field is present, truthy and non-zero. The
on-screen breakdown and both email bodies render these lines unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .calculator import normalise_work_type
from .dictionaries import PAINTING_ROOM_TYPE_LABELS, PLASTERING_WORK_TYPE_LABELS

logger = logging.getLogger(__name__)

RoomDetail = Mapping[str, Any]


def format_number(value: Any) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return f"{number:g}"


def _label(value: Any) -> str:
    return str(value).replace("_", " ")


def _count(room: RoomDetail, key: str) -> float:
    value = room.get(key)
    return float(value) if value else 0.0


def _items(room: RoomDetail, key: str) -> str:
    return ", ".join(_label(item) for item in room.get(key) or ())


def kitchen_bullets(room: RoomDetail) -> list[str]:
    lines: list[str] = []
    if room.get("size"):
        lines.append(f"Size: {_label(room['size'])}")
    if room.get("worktop"):
        lines.append(f"Worktop: {_label(room['worktop'])}")
    if room.get("electrics"):
        lines.append(f"Electrical alterations: {_items(room, 'electrics')}")
    if room.get("plumbing"):
        lines.append(f"Plumbing alterations: {_items(room, 'plumbing')}")
    if room.get("splashback"):
        lines.append("Splashback tiling")
    if _count(room, "floorTilingArea") > 0:
        lines.append(f"Floor tiling: {format_number(room['floorTilingArea'])} m²")
    return lines


def bathroom_bullets(room: RoomDetail) -> list[str]:
    lines: list[str] = []
    if room.get("size"):
        lines.append(f"Size: {_label(room['size'])}")
    if room.get("layout"):
        lines.append(f"Layout: {_label(room['layout'])}")
    if room.get("fixtures"):
        lines.append(f"Fixtures: {_items(room, 'fixtures')}")
    if room.get("wallTiling") and str(room["wallTiling"]) != "0":
        lines.append(f"Wall tiling: {room['wallTiling']}%")
    if room.get("floorTiling"):
        if room.get("tileSize"):
            lines.append(f"Floor tiling ({_label(room['tileSize'])} tiles)")
        else:
            lines.append("Floor tiling")
    if room.get("electrics"):
        lines.append(f"Electrical alterations: {_items(room, 'electrics')}")
    if room.get("plumbing"):
        lines.append(f"Plumbing alterations: {_items(room, 'plumbing')}")
    if room.get("finishQuality"):
        lines.append(f"Finish: {_label(room['finishQuality'])}")
    if room.get("access"):
        lines.append(f"Access: {_label(room['access'])}")
    return lines


def flooring_bullets(room: RoomDetail) -> list[str]:
    lines: list[str] = []
    if room.get("type"):
        lines.append(f"Type: {_label(room['type'])}")
    if _count(room, "area") > 0:
        lines.append(f"Area: {format_number(room['area'])} m²")
    if room.get("subfloor"):
        lines.append(f"Subfloor: {_label(room['subfloor'])}")
    if room.get("layout"):
        lines.append(f"Layout: {_label(room['layout'])}")
    if room.get("pattern"):
        lines.append(f"Pattern: {_label(room['pattern'])}")
    if room.get("finishQuality"):
        lines.append(f"Finish: {_label(room['finishQuality'])}")
    if room.get("removeOld"):
        lines.append("Remove old flooring")
    if _count(room, "trimDoors") > 0:
        lines.append(f"{format_number(room['trimDoors'])} door(s) trimmed")
    if room.get("fitSkirting"):
        lines.append("Fit new skirting")
    if room.get("wasteRemoval"):
        lines.append("Waste removal")
    return lines


def carpentry_bullets(room: RoomDetail) -> list[str]:
    lines: list[str] = []
    if _count(room, "doorCount") > 0:
        lines.append(f"{format_number(room['doorCount'])} door(s) hung")
    if _count(room, "skirtingMetres") > 0:
        lines.append(f"{format_number(room['skirtingMetres'])} m skirting")
    if _count(room, "architraveMetres") > 0:
        lines.append(f"{format_number(room['architraveMetres'])} m architrave")
    if _count(room, "wardrobeMetres") > 0:
        lines.append(f"{format_number(room['wardrobeMetres'])} m wardrobes / storage")
    if room.get("finishType"):
        lines.append(f"Finish: {_label(room['finishType'])}")
    if room.get("bespokeComplexity") and room["bespokeComplexity"] != "none":
        lines.append(f"Bespoke work: {_label(room['bespokeComplexity'])}")
    return lines


def painting_bullets(room: RoomDetail) -> list[str]:
    lines: list[str] = []
    if room.get("type"):
        lines.append(f"Room type: {PAINTING_ROOM_TYPE_LABELS.get(room['type'], _label(room['type']))}")
    if room.get("size"):
        lines.append(f"Size: {_label(room['size'])}")
    if room.get("surfaces"):
        lines.append(f"Surfaces: {_items(room, 'surfaces')}")
    if _count(room, "coats") > 0:
        lines.append(f"{format_number(room['coats'])} coat(s)")
    if _count(room, "colours") > 0:
        lines.append(f"{format_number(room['colours'])} colour(s)")
    if room.get("minorRepairs"):
        lines.append("Minor repairs")
    if room.get("wallpaperRemoval") and room["wallpaperRemoval"] != "none":
        lines.append(f"Wallpaper removal: {_label(room['wallpaperRemoval'])}")
    if _count(room, "doors") > 0:
        lines.append(f"{format_number(room['doors'])} door(s) painted")
    if _count(room, "windows") > 0:
        lines.append(f"{format_number(room['windows'])} window(s) painted")
    if room.get("staircaseHeight") == "double":
        lines.append("Double-height staircase")
    if _count(room, "spindleCount") > 0:
        lines.append(f"{format_number(room['spindleCount'])} spindle(s)")
    if room.get("handrailsStringers"):
        lines.append("Handrails & stringers")
    return lines


def plastering_bullets(room: RoomDetail) -> list[str]:
    lines: list[str] = []
    work_type = normalise_work_type(room.get("workType"))
    if work_type:
        lines.append(f"Work: {PLASTERING_WORK_TYPE_LABELS.get(work_type, _label(work_type))}")
    if _count(room, "patchCount") > 0:
        lines.append(f"{format_number(room['patchCount'])} patch(es)")
    if _count(room, "area") > 0:
        lines.append(f"Area: {format_number(room['area'])} m²")
    if room.get("surfaceCondition"):
        lines.append(f"Condition: {_label(room['surfaceCondition'])}")
    if room.get("finishLevel"):
        lines.append(f"Finish: {_label(room['finishLevel'])}")
    if room.get("access"):
        lines.append(f"Access: {_label(room['access'])}")
    return lines


ROOM_FORMATTERS: Mapping[str, Callable[[RoomDetail], list[str]]] = {
    "Kitchen": kitchen_bullets,
    "Bathroom": bathroom_bullets,
    "Flooring": flooring_bullets,
    "Carpentry": carpentry_bullets,
    "Painting": painting_bullets,
    "Plastering": plastering_bullets,
}


def format_room_bullets(module: str, room: RoomDetail) -> list[str]:
    """Bullet lines for one room; an empty list if the room cannot be formatted."""
    formatter = ROOM_FORMATTERS.get(module)
    if formatter is None:
        logger.warning("No room formatter for module", extra={"module_name": module})
        return []
    try:
        return formatter(room)
    except (AttributeError, KeyError, TypeError, ValueError):
        logger.warning(
            "Failed to format room bullets",
            extra={"module_name": module, "room_name": _safe_name(room)},
            exc_info=True,
        )
        return []


def _safe_name(room: Any) -> str | None:
    try:
        return str(room.get("name"))
    except AttributeError:
        return None


__all__ = [
    "ROOM_FORMATTERS",
    "bathroom_bullets",
    "carpentry_bullets",
    "flooring_bullets",
    "format_number",
    "format_room_bullets",
    "kitchen_bullets",
    "painting_bullets",
    "plastering_bullets",
]
