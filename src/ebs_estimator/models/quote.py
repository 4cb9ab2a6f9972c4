from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class QuoteModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoomResult(QuoteModel):
    id: int | str | None = None
    title: str
    days_low: float
    days_high: float
    cost_low: int
    cost_high: int


class ServiceResult(QuoteModel):
    name: str
    days_low: float
    days_high: float
    cost_low: int
    cost_high: int
    rooms: Sequence[RoomResult] = Field(default_factory=list)


class LineItem(QuoteModel):
    id: str
    label: str
    quantity: float
    unit_price: float
    total: int


class DesignManagementResult(QuoteModel):
    id: str
    label: str
    percentage: float
    amount: int


class Quote(QuoteModel):
    services: Sequence[ServiceResult] = Field(default_factory=list)
    additionals: Sequence[LineItem] = Field(default_factory=list)
    additionals_total: int = 0
    services_low: int = 0
    services_high: int = 0
    materials_low: int = 0
    materials_high: int = 0
    materials_mid: int = 0
    materials_included: bool = False
    design_management: DesignManagementResult | None = None
    total_days_low: float = 0.0
    total_days_high: float = 0.0
    total_low: int = 0
    total_high: int = 0
    duration_days: int = 0
    project_weeks: int = 0
    currency: str = "GBP"

    def service(self, name: str) -> ServiceResult | None:
        for result in self.services:
            if result.name == name:
                return result
        return None


class ModuleDetail(QuoteModel):
    """Display-only attributes of each room in one service."""

    module: str
    rooms: Sequence[Mapping[str, Any]] = Field(default_factory=list)


__all__ = [
    "DesignManagementResult",
    "LineItem",
    "ModuleDetail",
    "Quote",
    "RoomResult",
    "ServiceResult",
]
