from __future__ import annotations

from collections import defaultdict, deque
from typing import Any, Mapping, Sequence

from pydantic import Field

from .formatters import format_room_bullets
from .models.quote import ModuleDetail, Quote, QuoteModel


class RoomBreakdown(QuoteModel):
    title: str
    days_low: float
    days_high: float
    cost_low: int
    cost_high: int
    bullets: Sequence[str] = Field(default_factory=list)


class ServiceBreakdown(QuoteModel):
    name: str
    days_low: float
    days_high: float
    cost_low: int
    cost_high: int
    rooms: Sequence[RoomBreakdown] = Field(default_factory=list)


def format_currency(amount: float) -> str:
    return f"£{amount:,.0f}"


def format_cost_range(low: float, high: float) -> str:
    if low == high:
        return format_currency(low)
    return f"{format_currency(low)} – {format_currency(high)}"


def format_days(days: float) -> str:
    return f"{round(days, 1):.1f}"


def format_days_range(low: float, high: float) -> str:
    return f"{format_days(low)}–{format_days(high)} days"


def _room_key(room_id: Any, name: Any) -> tuple[str, str]:
    if room_id is not None:
        return ("id", str(room_id))
    return ("name", str(name))


def build_breakdown(quote: Quote, details: Sequence[ModuleDetail]) -> list[ServiceBreakdown]:
    """Join priced services with their display details by service name.

    Rooms are paired by id. Rooms without an id fall back to pairing by title
    in order. A flooring room skipped for missing type or area has no priced
    row, so its detail entry is never used.
    """
    details_by_module: Mapping[str, ModuleDetail] = {detail.module: detail for detail in details}
    breakdown: list[ServiceBreakdown] = []
    for service in quote.services:
        detail = details_by_module.get(service.name)
        pending: dict[tuple[str, str], deque[Mapping[str, Any]]] = defaultdict(deque)
        if detail is not None:
            for room in detail.rooms:
                pending[_room_key(room.get("id"), room.get("name"))].append(room)

        rooms: list[RoomBreakdown] = []
        for result in service.rooms:
            queue = pending.get(_room_key(result.id, result.title))
            bullets = format_room_bullets(service.name, queue.popleft()) if queue else []
            rooms.append(
                RoomBreakdown(
                    title=result.title,
                    days_low=round(result.days_low, 1),
                    days_high=round(result.days_high, 1),
                    cost_low=result.cost_low,
                    cost_high=result.cost_high,
                    bullets=bullets,
                )
            )
        breakdown.append(
            ServiceBreakdown(
                name=service.name,
                days_low=round(service.days_low, 1),
                days_high=round(service.days_high, 1),
                cost_low=service.cost_low,
                cost_high=service.cost_high,
                rooms=rooms,
            )
        )
    return breakdown


__all__ = [
    "RoomBreakdown",
    "ServiceBreakdown",
    "build_breakdown",
    "format_cost_range",
    "format_currency",
    "format_days",
    "format_days_range",
]
