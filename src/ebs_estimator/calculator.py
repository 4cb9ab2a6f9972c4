from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from . import dictionaries as d
from .dictionaries import (
    ADDITIONAL_OPTIONS,
    DESIGN_MANAGEMENT_OPTIONS,
    MATERIAL_CATALOG,
    PROPERTY_MULTIPLIERS,
    SERVICES,
    AdditionalOption,
    DayRange,
    DesignManagementOption,
    MaterialItem,
    MultiplierTable,
    ServiceDefinition,
)
from .models.form import (
    BathroomRoom,
    CarpentryRoom,
    FlooringRoom,
    FormData,
    KitchenRoom,
    MaterialsData,
    PaintingRoom,
    PlasteringRoom,
    Room,
)
from .models.quote import DesignManagementResult, LineItem, Quote, RoomResult, ServiceResult

logger = logging.getLogger(__name__)

_NO_DAYS = DayRange(0.0, 0.0)


def round_to_nearest_5(value: float) -> int:
    """Round half away from zero to the nearest multiple of 5."""
    # Trim float noise so 112.5 does not land on 112.49999...
    scaled = round(abs(value) / 5, 9)
    rounded = int(math.floor(scaled + 0.5)) * 5
    return -rounded if value < 0 else rounded


def _number(value: float | None) -> float:
    return float(value) if value else 0.0


def _ceil(value: float) -> int:
    return math.ceil(round(value, 6))


def _alterations(flag: bool | None, items: Sequence[str]) -> Sequence[str]:
    # Items stay in the form after the flag is switched off; they no longer count.
    return () if flag is False else items


def plumbing_complexity(count: int) -> str:
    if count <= 0:
        return "light"
    if count <= 2:
        return "moderate"
    return "heavy"


def normalise_work_type(work_type: str | None) -> str | None:
    """Collapse plastering work-type synonyms; unknown types are returned lower-cased."""
    if not work_type or not work_type.strip():
        return None
    key = " ".join(work_type.strip().lower().split())
    return d.PLASTERING_WORK_TYPES.get(key, key)


@dataclass
class RoomEstimate:
    title: str
    low: float
    high: float
    fixed_fee: int = 0
    room_id: int | str | None = None


@dataclass
class MaterialsTotals:
    low: int = 0
    high: int = 0
    mid: int = 0
    included: bool = False


class QuoteCalculator:
    def __init__(
        self,
        *,
        services: Sequence[ServiceDefinition] = SERVICES,
        property_multipliers: MultiplierTable = PROPERTY_MULTIPLIERS,
        additional_options: Mapping[str, AdditionalOption] = ADDITIONAL_OPTIONS,
        design_management_options: Mapping[str, DesignManagementOption] = DESIGN_MANAGEMENT_OPTIONS,
        material_catalog: Mapping[str, MaterialItem] = MATERIAL_CATALOG,
    ) -> None:
        self._services = tuple(services)
        self._property_multipliers = property_multipliers
        self._additional_options = additional_options
        self._design_management_options = design_management_options
        self._material_catalog = material_catalog
        self._room_estimators: Mapping[str, Callable[[Room], RoomEstimate | None]] = {
            "kitchen": self._kitchen_room,
            "bathroom": self._bathroom_room,
            "flooring": self._flooring_room,
            "carpentry": self._carpentry_room,
            "painting": self._painting_room,
            "plastering": self._plastering_room,
        }

    def calculate(self, form: FormData) -> Quote:
        multiplier = self._property_multipliers.resolve(form.property_type)

        services: list[ServiceResult] = []
        for service in self._services:
            rooms = form.rooms_for(service.id, service.rooms_field)
            if not rooms:
                continue
            estimator = self._room_estimators[service.id]
            estimates = [estimate for room in rooms if (estimate := estimator(room)) is not None]
            services.append(self._build_service(service, estimates, multiplier))

        services_low = sum(result.cost_low for result in services)
        services_high = sum(result.cost_high for result in services)
        additionals = self._build_additionals(form)
        additionals_total = sum(item.total for item in additionals)
        materials = self._build_materials(form.materials)
        design_management = self._build_design_management(
            form.design_management, services_low, services_high, materials
        )

        total_low = services_low + additionals_total
        total_high = services_high + additionals_total
        if materials.included:
            total_low += materials.low
            total_high += materials.high
        if design_management is not None:
            total_low += design_management.amount
            total_high += design_management.amount

        total_days_low = sum(result.days_low for result in services)
        total_days_high = sum(result.days_high for result in services)

        quote = Quote(
            services=services,
            additionals=additionals,
            additionals_total=additionals_total,
            services_low=services_low,
            services_high=services_high,
            materials_low=materials.low,
            materials_high=materials.high,
            materials_mid=materials.mid,
            materials_included=materials.included,
            design_management=design_management,
            total_days_low=total_days_low,
            total_days_high=total_days_high,
            total_low=total_low,
            total_high=total_high,
            duration_days=_ceil(total_days_high),
            project_weeks=_ceil(total_days_high / 5),
        )
        logger.debug(
            "Calculated quote",
            extra={
                "services": [result.name for result in services],
                "total_low": total_low,
                "total_high": total_high,
                "property_multiplier": multiplier,
            },
        )
        return quote

    def _build_service(
        self,
        service: ServiceDefinition,
        estimates: Sequence[RoomEstimate],
        property_multiplier: float,
    ) -> ServiceResult:
        tier = service.tier
        factor = tier.efficiency * property_multiplier

        rooms: list[RoomResult] = []
        for estimate in estimates:
            days_low = estimate.low * factor
            days_high = estimate.high * factor
            rooms.append(
                RoomResult(
                    id=estimate.room_id,
                    title=estimate.title,
                    days_low=days_low,
                    days_high=days_high,
                    cost_low=round_to_nearest_5(days_low * tier.daily_rate) + estimate.fixed_fee,
                    cost_high=round_to_nearest_5(days_high * tier.daily_rate) + estimate.fixed_fee,
                )
            )

        days_low = sum(estimate.low for estimate in estimates) * factor
        days_high = sum(estimate.high for estimate in estimates) * factor
        if service.bottom_up_costs:
            cost_low = sum(room.cost_low for room in rooms)
            cost_high = sum(room.cost_high for room in rooms)
        else:
            cost_low = round_to_nearest_5(days_low * tier.daily_rate)
            cost_high = round_to_nearest_5(days_high * tier.daily_rate)

        return ServiceResult(
            name=service.label,
            days_low=days_low,
            days_high=days_high,
            cost_low=cost_low,
            cost_high=cost_high,
            rooms=rooms,
        )

    def _kitchen_room(self, room: KitchenRoom) -> RoomEstimate:
        base = d.KITCHEN_BASE_DAYS.get(room.size or "", _NO_DAYS)
        low, high = base.low, base.high

        extras = d.KITCHEN_ELECTRIC_DAYS * len(_alterations(room.require_electrical_alterations, room.electrics))
        extras += d.KITCHEN_PLUMBING_DAYS * len(_alterations(room.require_plumbing_alterations, room.plumbing))
        if room.splashback:
            extras += d.KITCHEN_SPLASHBACK_DAYS
        low += extras
        high += extras

        tiling_area = _number(room.floor_tiling_area)
        if room.require_floor_tiling and tiling_area > 0:
            tiling_days = min(1 + tiling_area / d.KITCHEN_TILING_M2_PER_DAY, d.KITCHEN_TILING_MAX_DAYS)
            low += 0.8 * tiling_days
            high += tiling_days

        worktop = d.KITCHEN_WORKTOPS.resolve(room.worktop)
        return RoomEstimate(title=room.name, low=low * worktop, high=high * worktop, room_id=room.id)

    def _bathroom_room(self, room: BathroomRoom) -> RoomEstimate:
        base = d.BATHROOM_BASE_DAYS.get(room.size or "", _NO_DAYS)
        layout = d.BATHROOM_LAYOUT.resolve(room.layout)
        low, high = base.low * layout, base.high * layout

        fixtures = d.BATHROOM_FIXTURE_DAYS * len(room.fixtures)
        if "shower" in room.fixtures:
            fixtures += d.BATHROOM_SHOWER_DAYS
        low += fixtures
        high += fixtures

        wall_tiling = d.BATHROOM_WALL_TILING_DAYS.get(room.wall_tiling or "0", 0.0)
        low += wall_tiling * d.BATHROOM_WALL_TILING_LOW_FACTOR
        high += wall_tiling

        if room.floor_tiling:
            low += d.BATHROOM_FLOOR_TILING.low
            high += d.BATHROOM_FLOOR_TILING.high

        tile_size = d.BATHROOM_TILE_SIZE.resolve(room.tile_size)
        low *= tile_size
        high *= tile_size

        electrics = d.BATHROOM_ELECTRIC_DAYS * len(_alterations(room.require_electrical_alterations, room.electrics))
        low += electrics
        high += electrics

        plumbing = _alterations(room.require_plumbing_alterations, room.plumbing)
        multiplier = (
            d.BATHROOM_PLUMBING_COMPLEXITY.resolve(plumbing_complexity(len(plumbing)))
            * d.FINISH_QUALITY.resolve(room.finish_quality)
            * d.ACCESS.resolve(room.access)
        )
        return RoomEstimate(title=room.name, low=low * multiplier, high=high * multiplier, room_id=room.id)

    def _flooring_room(self, room: FlooringRoom) -> RoomEstimate | None:
        area = _number(room.area)
        if not room.type or area <= 0:
            return None

        days = area / d.FLOORING_SPEEDS.resolve(room.type)
        days *= d.FLOORING_SUBFLOOR.resolve(room.subfloor)
        days *= d.FLOORING_LAYOUT.resolve(room.layout)
        days *= d.FLOORING_PATTERN.resolve(room.pattern)
        days *= d.FINISH_QUALITY.resolve(room.finish_quality)
        if room.remove_old:
            days += d.FLOORING_REMOVE_OLD_DAYS
        days += d.FLOORING_TRIM_DOOR_DAYS * _number(room.trim_doors)
        if room.fit_skirting:
            days += d.FLOORING_SKIRTING_DAYS

        return RoomEstimate(
            title=room.name,
            low=days * d.FLOORING_SPREAD.low,
            high=days * d.FLOORING_SPREAD.high,
            fixed_fee=d.FLOORING_WASTE_REMOVAL_FEE if room.waste_removal else 0,
            room_id=room.id,
        )

    def _carpentry_room(self, room: CarpentryRoom) -> RoomEstimate:
        doors = _number(room.door_count)
        days = (
            doors * d.CARPENTRY_DOOR_DAYS
            + _number(room.skirting_metres) / d.CARPENTRY_SKIRTING_M_PER_DAY
            + _number(room.architrave_metres) / d.CARPENTRY_ARCHITRAVE_M_PER_DAY
            + _number(room.wardrobe_metres) * d.CARPENTRY_WARDROBE_DAYS_PER_M
            + doors * d.CARPENTRY_DOOR_EXTRA_DAYS
        )
        days *= d.CARPENTRY_FINISH.resolve(room.finish_type)
        days *= d.CARPENTRY_BESPOKE.resolve(room.bespoke_complexity)
        return self._spread(room, days)

    def _painting_room(self, room: PaintingRoom) -> RoomEstimate:
        surface_days = d.PAINTING_SURFACE_DAYS.get(room.size or "", {})
        days = sum(surface_days.get(surface, 0.0) for surface in room.surfaces.selected())
        days *= d.PAINTING_ROOM_TYPE.resolve(room.type)

        if room.type in d.PAINTING_STAIRS_TYPES:
            if room.staircase_height == "double":
                days += d.PAINTING_DOUBLE_HEIGHT_DAYS
            days += d.PAINTING_SPINDLE_DAYS * _number(room.spindle_count)
            if room.handrails_stringers:
                days += d.PAINTING_HANDRAIL_DAYS

        coats = _number(room.coats)
        if coats > 1:
            days *= 1 + d.PAINTING_EXTRA_COAT_FACTOR * (coats - 1)
        colours = _number(room.colours)
        if colours > 1:
            days *= 1 + d.PAINTING_EXTRA_COLOUR_FACTOR * (colours - 1)

        if room.minor_repairs:
            days += d.PAINTING_MINOR_REPAIR_DAYS
        if room.wallpaper_removal and room.wallpaper_removal != "none" and room.surfaces.walls:
            days += d.PAINTING_WALLPAPER_BASE_DAYS.get(room.size or "", 0.0) * d.PAINTING_WALLPAPER_DIFFICULTY.resolve(
                room.wallpaper_removal
            )
        days += d.PAINTING_DOOR_DAYS * _number(room.doors)
        days += d.PAINTING_WINDOW_DAYS * _number(room.windows)
        return self._spread(room, days)

    def _plastering_room(self, room: PlasteringRoom) -> RoomEstimate:
        work_type = normalise_work_type(room.work_type)
        area = _number(room.area)
        if work_type == "patch":
            days = _number(room.patch_count) * d.PLASTERING_PATCH_DAYS
        elif work_type == "reboard":
            days = area / d.PLASTERING_REBOARD_M2_PER_DAY
        elif work_type == "artex":
            days = area / d.PLASTERING_RESKIM_M2_PER_DAY * d.PLASTERING_ARTEX_FACTOR
        elif work_type is not None and area > 0:
            # reskim, and the fallback for work types we do not recognise
            days = area / d.PLASTERING_RESKIM_M2_PER_DAY
        else:
            days = 0.0

        days *= d.PLASTERING_CONDITION.resolve(room.surface_condition)
        days *= d.FINISH_QUALITY.resolve(room.finish_level)
        days *= d.ACCESS.resolve(room.access)
        return self._spread(room, days)

    def _spread(self, room: Room, days: float) -> RoomEstimate:
        return RoomEstimate(
            title=room.name,
            low=days * d.STANDARD_SPREAD.low,
            high=days * d.STANDARD_SPREAD.high,
            room_id=room.id,
        )

    def _build_additionals(self, form: FormData) -> list[LineItem]:
        items: list[LineItem] = []
        for additional in form.additionals:
            option = self._additional_options.get(additional.id)
            quantity = _number(additional.quantity)
            price = _number(additional.price)
            items.append(
                LineItem(
                    id=additional.id,
                    label=option.label if option else additional.id,
                    quantity=quantity,
                    unit_price=price,
                    total=round_to_nearest_5(price * quantity),
                )
            )
        return items

    def _build_materials(self, materials: MaterialsData | None) -> MaterialsTotals:
        if materials is None:
            return MaterialsTotals()

        if materials.mode == "custom":
            total = round_to_nearest_5(sum(_number(item.amount) for item in materials.custom))
            return MaterialsTotals(low=total, high=total, mid=total, included=materials.include_in_total)

        low = high = 0.0
        for item_id, selection in materials.selected.items():
            item = self._material_catalog.get(item_id)
            if item is None:
                continue
            prices = item.prices.get(selection.quality or "standard")
            if prices is None:
                continue
            quantity = _number(selection.quantity) or 1
            low += prices[0] * quantity
            high += prices[1] * quantity

        contingency = 1 + _number(materials.contingency) / 100
        low_total = round_to_nearest_5(low * contingency)
        high_total = round_to_nearest_5(high * contingency)
        return MaterialsTotals(
            low=low_total,
            high=high_total,
            mid=round_to_nearest_5((low_total + high_total) / 2),
            included=materials.include_in_total,
        )

    def _build_design_management(
        self,
        option_id: str | None,
        services_low: int,
        services_high: int,
        materials: MaterialsTotals,
    ) -> DesignManagementResult | None:
        option = self._design_management_options.get(option_id or "none")
        if option is None or option.percentage <= 0:
            return None
        base = (services_low + services_high) / 2
        if not materials.included:
            base += materials.mid
        return DesignManagementResult(
            id=option.id,
            label=option.label,
            percentage=option.percentage,
            amount=round_to_nearest_5(base * option.percentage / 100),
        )


_default_calculator = QuoteCalculator()


def calculate_quote(form: FormData) -> Quote:
    return _default_calculator.calculate(form)


__all__ = [
    "QuoteCalculator",
    "calculate_quote",
    "normalise_work_type",
    "plumbing_complexity",
    "round_to_nearest_5",
]
