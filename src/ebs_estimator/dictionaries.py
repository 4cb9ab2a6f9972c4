from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence


@dataclass(frozen=True)
class MultiplierTable:
    """Lookup table with an explicit fallback arm for unknown or missing keys."""

    name: str
    values: Mapping[str, float]
    default: float = 1.0

    def resolve(self, key: object) -> float:
        if key is None:
            return self.default
        return self.values.get(str(key), self.default)


@dataclass(frozen=True)
class RateTier:
    name: str
    daily_rate: float
    efficiency: float


@dataclass(frozen=True)
class DayRange:
    low: float
    high: float


@dataclass(frozen=True)
class ServiceDefinition:
    id: str
    label: str
    rooms_field: str
    tier: RateTier
    # Service cost is the sum of rounded room costs rather than one conversion of the day range.
    bottom_up_costs: bool = False


@dataclass(frozen=True)
class AdditionalOption:
    id: str
    label: str
    price: float
    unit: str


@dataclass(frozen=True)
class DesignManagementOption:
    id: str
    label: str
    description: str
    percentage: float


@dataclass(frozen=True)
class MaterialItem:
    id: str
    label: str
    unit: str
    prices: Mapping[str, tuple[float, float]]


@dataclass(frozen=True)
class MaterialModule:
    id: str
    title: str
    items: Sequence[MaterialItem] = field(default_factory=tuple)


PROPERTY_MULTIPLIERS = MultiplierTable(
    name="property",
    values={
        "detached": 1.25,
        "semi-detached": 1.15,
        "end-terrace": 1.10,
        "terrace": 1.00,
        "bungalow": 1.10,
        "flat": 0.85,
    },
)

PROPERTY_TYPE_LABELS: Mapping[str, str] = {
    "detached": "Detached",
    "semi-detached": "Semi-Detached",
    "end-terrace": "End Terrace",
    "terrace": "Terrace",
    "bungalow": "Bungalow",
    "flat": "Flat",
}


ECONOMY = RateTier(name="economy", daily_rate=200.0, efficiency=1.0)
STANDARD = RateTier(name="standard", daily_rate=250.0, efficiency=0.9)


SERVICES: Sequence[ServiceDefinition] = (
    ServiceDefinition(id="kitchen", label="Kitchen", rooms_field="areas", tier=STANDARD),
    ServiceDefinition(id="bathroom", label="Bathroom", rooms_field="rooms", tier=STANDARD),
    ServiceDefinition(id="flooring", label="Flooring", rooms_field="areas", tier=STANDARD, bottom_up_costs=True),
    ServiceDefinition(id="carpentry", label="Carpentry", rooms_field="areas", tier=STANDARD),
    ServiceDefinition(id="painting", label="Painting", rooms_field="rooms", tier=ECONOMY),
    ServiceDefinition(id="plastering", label="Plastering", rooms_field="areas", tier=STANDARD),
)



# Shared quality / access tables
FINISH_QUALITY = MultiplierTable(
    name="finish_quality",
    values={"standard": 1.0, "high": 1.08, "premium": 1.15},
)
ACCESS = MultiplierTable(
    name="access",
    values={"easy": 1.0, "stairs": 1.07, "no_parking": 1.1},
)


# Kitchen
KITCHEN_BASE_DAYS: Mapping[str, DayRange] = {
    "small": DayRange(3, 5),
    "medium": DayRange(5, 8),
    "large": DayRange(8, 12),
}
KITCHEN_WORKTOPS = MultiplierTable(
    name="worktop",
    values={
        "laminate": 1.00,
        "solid_wood": 1.10,
        "quartz": 1.15,
        "granite": 1.20,
        "marble": 1.25,
    },
)
KITCHEN_ELECTRIC_DAYS = 0.15
KITCHEN_PLUMBING_DAYS = 0.12
KITCHEN_SPLASHBACK_DAYS = 0.5
KITCHEN_TILING_MAX_DAYS = 2.0
KITCHEN_TILING_M2_PER_DAY = 12.0


# Bathroom
BATHROOM_BASE_DAYS: Mapping[str, DayRange] = {
    "small": DayRange(5, 8),
    "medium": DayRange(8, 12),
    "large": DayRange(12, 18),
}
BATHROOM_LAYOUT = MultiplierTable(
    name="bathroom_layout",
    values={"keep": 1.0, "minor": 1.1, "major": 1.25},
)
BATHROOM_WALL_TILING_DAYS: Mapping[str, float] = {
    "0": 0.0,
    "25": 0.5,
    "50": 1.0,
    "75": 1.5,
    "100": 2.0,
}
BATHROOM_TILE_SIZE = MultiplierTable(
    name="tile_size",
    values={"small": 1.1, "standard": 1.0, "large": 1.1, "slab": 1.25},
)
BATHROOM_PLUMBING_COMPLEXITY = MultiplierTable(
    name="plumbing_complexity",
    values={"light": 1.0, "moderate": 1.1, "heavy": 1.2},
)
BATHROOM_FIXTURE_DAYS = 0.2
BATHROOM_SHOWER_DAYS = 0.15
BATHROOM_FLOOR_TILING = DayRange(0.6, 0.8)
BATHROOM_ELECTRIC_DAYS = 0.15
BATHROOM_WALL_TILING_LOW_FACTOR = 0.8


# Flooring
FLOORING_SPEEDS = MultiplierTable(
    name="flooring_speed",
    values={
        "laminate": 18,
        "lvt": 10,
        "engineered_wood": 12,
        "solid_wood": 8,
        "carpet": 25,
        "tiles": 8,
    },
    default=15,
)
FLOORING_SUBFLOOR = MultiplierTable(
    name="subfloor",
    values={"good": 1.0, "uneven": 1.2, "poor": 1.35},
)
FLOORING_LAYOUT = MultiplierTable(
    name="flooring_layout",
    values={"simple": 1.0, "complex": 1.15, "multiple": 1.25},
)
FLOORING_PATTERN = MultiplierTable(
    name="pattern",
    values={"straight": 1.0, "diagonal": 1.15, "herringbone": 1.35},
)
FLOORING_REMOVE_OLD_DAYS = 0.5
FLOORING_TRIM_DOOR_DAYS = 0.1
FLOORING_SKIRTING_DAYS = 0.5
FLOORING_SPREAD = DayRange(0.85, 1.15)
FLOORING_WASTE_REMOVAL_FEE = 100


# Carpentry
CARPENTRY_FINISH = MultiplierTable(
    name="carpentry_finish",
    values={"standard": 1.0, "premium": 1.15, "sprayed": 1.2},
)
CARPENTRY_BESPOKE = MultiplierTable(
    name="bespoke_complexity",
    values={"none": 1.0, "simple": 1.0, "moderate": 1.15, "complex": 1.3},
)
CARPENTRY_DOOR_DAYS = 0.4
CARPENTRY_DOOR_EXTRA_DAYS = 0.05
CARPENTRY_SKIRTING_M_PER_DAY = 15.0
CARPENTRY_ARCHITRAVE_M_PER_DAY = 15.0
CARPENTRY_WARDROBE_DAYS_PER_M = 0.6


# Painting
PAINTING_SURFACE_DAYS: Mapping[str, Mapping[str, float]] = {
    "small": {"walls": 0.6, "ceiling": 0.25, "woodwork": 0.5},
    "medium": {"walls": 0.8, "ceiling": 0.3, "woodwork": 0.6},
    "large": {"walls": 1.2, "ceiling": 0.4, "woodwork": 0.8},
}
PAINTING_ROOM_TYPE = MultiplierTable(
    name="painting_room_type",
    values={
        "standard": 1.0,
        "hallway": 1.15,
        "stairs": 1.35,
        "hall_stairs": 1.5,
        "kitchen": 1.1,
        "bathroom": 0.85,
    },
)
PAINTING_STAIRS_TYPES = frozenset({"stairs", "hall_stairs"})
PAINTING_DOUBLE_HEIGHT_DAYS = 0.4
PAINTING_SPINDLE_DAYS = 0.02
PAINTING_HANDRAIL_DAYS = 0.1
PAINTING_EXTRA_COAT_FACTOR = 0.5
PAINTING_EXTRA_COLOUR_FACTOR = 0.05
PAINTING_MINOR_REPAIR_DAYS = 0.2
PAINTING_WALLPAPER_BASE_DAYS: Mapping[str, float] = {"small": 0.5, "medium": 0.6, "large": 0.9}
PAINTING_WALLPAPER_DIFFICULTY = MultiplierTable(
    name="wallpaper_difficulty",
    values={"standard": 1.0, "heavy-duty": 1.35, "painted-over": 1.5},
)
PAINTING_DOOR_DAYS = 0.1
PAINTING_WINDOW_DAYS = 0.08
PAINTING_ROOM_TYPE_LABELS: Mapping[str, str] = {
    "standard": "Standard Room",
    "hallway": "Hallway",
    "stairs": "Stairs & Landing",
    "hall_stairs": "Hall + Stairs + Landing",
    "kitchen": "Kitchen / Diner",
    "bathroom": "Bathroom / WC",
}


# Plastering
PLASTERING_WORK_TYPES: Mapping[str, str] = {
    "patch": "patch",
    "patches": "patch",
    "patching": "patch",
    "patch_work": "patch",
    "patch work": "patch",
    "patch_repair": "patch",
    "repair": "patch",
    "repairs": "patch",
    "reskim": "reskim",
    "re-skim": "reskim",
    "re_skim": "reskim",
    "skim": "reskim",
    "skimming": "reskim",
    "skim_coat": "reskim",
    "full_skim": "reskim",
    "reboard": "reboard",
    "re-board": "reboard",
    "re_board": "reboard",
    "reboard_skim": "reboard",
    "reboard & skim": "reboard",
    "reboard and skim": "reboard",
    "boarding": "reboard",
    "plasterboard": "reboard",
    "artex": "artex",
    "artex_removal": "artex",
    "artex removal": "artex",
    "artex_cover": "artex",
    "textured_ceiling": "artex",
}
PLASTERING_WORK_TYPE_LABELS: Mapping[str, str] = {
    "reskim": "Reskim",
    "patch": "Patch Work",
    "reboard": "Reboard & Skim",
    "artex": "Artex Removal",
}
PLASTERING_PATCH_DAYS = 0.4
PLASTERING_RESKIM_M2_PER_DAY = 27.5
PLASTERING_REBOARD_M2_PER_DAY = 10.0
PLASTERING_ARTEX_FACTOR = 1.4
PLASTERING_CONDITION = MultiplierTable(
    name="surface_condition",
    values={"good": 1.0, "fair": 1.1, "poor": 1.25},
)


# Low / high spread applied to single-base services
STANDARD_SPREAD = DayRange(0.9, 1.1)


ADDITIONAL_OPTIONS: Mapping[str, AdditionalOption] = {
    option.id: option
    for option in (
        AdditionalOption(id="socket", label="Add Socket", price=65, unit="each"),
        AdditionalOption(id="radiator", label="Move Radiator", price=120, unit="each"),
        AdditionalOption(id="skip", label="Skip Hire (8 yd³)", price=260, unit="once"),
        AdditionalOption(id="toilet", label="Builder's Toilet", price=40, unit="per week"),
        AdditionalOption(id="protection", label="Site Protection", price=90, unit="average"),
        AdditionalOption(id="cleaning", label="Deep Cleaning", price=115, unit="average"),
    )
}


DESIGN_MANAGEMENT_OPTIONS: Mapping[str, DesignManagementOption] = {
    option.id: option
    for option in (
        DesignManagementOption(
            id="none",
            label="None",
            description="No additional services",
            percentage=0,
        ),
        DesignManagementOption(
            id="procurement",
            label="Procurement",
            description="Organise materials supply",
            percentage=7,
        ),
        DesignManagementOption(
            id="management_procurement",
            label="Management & Procurement",
            description="Manage sub-contractors + organise materials supply",
            percentage=11,
        ),
        DesignManagementOption(
            id="full",
            label="Design, Management & Procurement",
            description="Design and manage all aspects of the workflow",
            percentage=12,
        ),
    )
}


def _item(item_id: str, label: str, unit: str, basic, standard, premium) -> MaterialItem:
    return MaterialItem(
        id=item_id,
        label=label,
        unit=unit,
        prices={"basic": basic, "standard": standard, "premium": premium},
    )


MATERIAL_MODULES: Sequence[MaterialModule] = (
    MaterialModule(
        id="kitchen",
        title="Kitchen Materials",
        items=(
            _item("cabinets", "Kitchen Cabinets", "set", (1000, 2000), (2000, 3500), (3500, 6000)),
            _item("worktops", "Worktops", "lm", (40, 80), (80, 140), (220, 380)),
            _item("appliances", "Appliances Set", "set", (900, 1400), (1400, 2200), (2200, 3500)),
            _item("sink", "Sink & Tap", "set", (120, 250), (250, 450), (450, 800)),
            _item("kitchen_tiles", "Tiles (Splashback)", "m²", (18, 28), (28, 45), (45, 75)),
            _item("kitchen_hardware", "Hardware & Handles", "set", (40, 80), (80, 150), (150, 280)),
        ),
    ),
    MaterialModule(
        id="bathroom",
        title="Bathroom Materials",
        items=(
            _item("bathroom_suite", "Bathroom Suite", "set", (500, 900), (900, 1600), (1600, 3000)),
            _item("bathroom_tiles", "Tiles & Adhesives", "m²", (18, 28), (28, 45), (45, 75)),
            _item("radiator", "Radiator / Towel Rail", "each", (90, 150), (150, 250), (250, 450)),
            _item("bathroom_lighting", "Lighting Fixtures", "point", (20, 40), (40, 80), (80, 150)),
            _item("bathroom_hardware", "Hardware & Fittings", "set", (40, 80), (80, 150), (150, 280)),
        ),
    ),
    MaterialModule(
        id="flooring",
        title="Flooring Materials",
        items=(
            _item("flooring", "Flooring Materials", "m²", (12, 25), (20, 40), (30, 60)),
            _item("underlay", "Underlay", "m²", (3, 5), (5, 8), (8, 12)),
            _item("adhesive", "Adhesives & Grout", "set", (30, 50), (50, 80), (80, 120)),
            _item("beading", "Skirting/Beading", "lm", (3, 6), (6, 10), (10, 18)),
        ),
    ),
    MaterialModule(
        id="painting",
        title="Painting Materials",
        items=(
            _item("paint", "Paint & Sundries", "room", (25, 40), (40, 70), (70, 120)),
            _item("filler", "Filler & Caulk", "set", (15, 25), (25, 40), (40, 60)),
            _item("protection", "Protection Materials", "set", (20, 35), (35, 55), (55, 80)),
        ),
    ),
    MaterialModule(
        id="carpentry",
        title="Joinery & Carpentry Materials",
        items=(
            _item("timber", "Timber", "lm", (5, 10), (10, 18), (18, 30)),
            _item("boards", "Boards (MDF/Ply)", "m²", (8, 15), (15, 25), (25, 40)),
            _item("joinery_hardware", "Hardware & Fixings", "set", (30, 50), (50, 90), (90, 150)),
            _item("finishes", "Finishes & Stains", "set", (20, 35), (35, 60), (60, 100)),
        ),
    ),
    MaterialModule(
        id="plastering",
        title="Plastering Materials",
        items=(
            _item("plaster", "Plaster (bags)", "bag", (6, 10), (10, 15), (15, 22)),
            _item("plasterboards", "Plasterboards", "m²", (5, 8), (8, 12), (12, 18)),
            _item("beads_tape", "Beads & Tape", "lm", (2, 4), (4, 7), (7, 12)),
        ),
    ),
    MaterialModule(
        id="common",
        title="Common Materials",
        items=(
            _item("lighting", "Lighting Fixtures", "point", (20, 40), (40, 80), (80, 150)),
            _item("electrical", "Electrical Supplies", "set", (50, 80), (80, 140), (140, 250)),
            _item("common_hardware", "General Hardware", "set", (40, 70), (70, 120), (120, 200)),
        ),
    ),
)

def _build_catalog(modules: Sequence[MaterialModule]) -> dict[str, MaterialItem]:
    # First module wins when an id appears twice.
    catalog: dict[str, MaterialItem] = {}
    for module in modules:
        for material in module.items:
            catalog.setdefault(material.id, material)
    return catalog


MATERIAL_CATALOG: Mapping[str, MaterialItem] = _build_catalog(MATERIAL_MODULES)


__all__ = [
    "ACCESS",
    "ADDITIONAL_OPTIONS",
    "DESIGN_MANAGEMENT_OPTIONS",
    "DayRange",
    "FINISH_QUALITY",
    "MATERIAL_CATALOG",
    "MATERIAL_MODULES",
    "MultiplierTable",
    "PROPERTY_MULTIPLIERS",
    "PROPERTY_TYPE_LABELS",
    "RateTier",
    "SERVICES",
    "ServiceDefinition",
]
