"""Part schemas for request/response validation."""
from datetime import datetime
from typing import List, Optional

from pydantic import computed_field, field_validator

from motorsports.models.part import DEFAULT_LOW_STOCK_THRESHOLD, PartCategory, PartUnit
from motorsports.schemas.common import (
    ApiResponse, CamelModel, NonEmptyStr, RequestModel, check_choice, check_non_negative, check_optional_choice,
)
from motorsports.schemas.vehicle import VehicleBrief


class PartBase(RequestModel):
    part_number: Optional[str] = None
    cost: Optional[float] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    vehicle_id: Optional[str] = None

    @field_validator("cost")
    @classmethod
    def non_negative_cost(cls, v: Optional[float]) -> Optional[float]:
        return check_non_negative(v, "cost")


class PartCreate(PartBase):
    """Schema for creating a part."""
    name: NonEmptyStr
    category: str
    quantity: int = 0
    unit: str = PartUnit.PCS.value
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD

    @field_validator("category")
    @classmethod
    def valid_category(cls, v: str) -> str:
        return check_choice(v, PartCategory, "category")

    @field_validator("unit")
    @classmethod
    def valid_unit(cls, v: str) -> str:
        return check_choice(v, PartUnit, "unit")

    @field_validator("quantity")
    @classmethod
    def non_negative_quantity(cls, v: int) -> int:
        return check_non_negative(v, "quantity")

    @field_validator("low_stock_threshold")
    @classmethod
    def non_negative_threshold(cls, v: int) -> int:
        return check_non_negative(v, "lowStockThreshold")


class PartUpdate(PartBase):
    """Schema for updating a part. An explicit null vehicleId unlinks the part."""
    name: Optional[NonEmptyStr] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    unit: Optional[str] = None
    low_stock_threshold: Optional[int] = None

    @field_validator("category")
    @classmethod
    def valid_category(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, PartCategory, "category")

    @field_validator("unit")
    @classmethod
    def valid_unit(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, PartUnit, "unit")

    @field_validator("quantity")
    @classmethod
    def non_negative_quantity(cls, v: Optional[int]) -> Optional[int]:
        return check_non_negative(v, "quantity")

    @field_validator("low_stock_threshold")
    @classmethod
    def non_negative_threshold(cls, v: Optional[int]) -> Optional[int]:
        return check_non_negative(v, "lowStockThreshold")


class AdjustRequest(RequestModel):
    """Relative stock movement: positive to add, negative to remove."""
    adjustment: int
    notes: Optional[str] = None

    @field_validator("adjustment")
    @classmethod
    def non_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("adjustment must be a non-zero number (positive to add, negative to remove)")
        return v


class PartResponse(CamelModel):
    """Schema for part response."""
    id: str
    name: str
    part_number: Optional[str] = None
    category: str
    quantity: int
    unit: str
    cost: Optional[float] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    low_stock_threshold: int
    notes: Optional[str] = None
    vehicle_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    vehicle: Optional[VehicleBrief] = None

    @computed_field(alias="isLowStock")
    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.low_stock_threshold


class PartListResponse(ApiResponse[List[PartResponse]]):
    low_stock_count: Optional[int] = None


# Inventory summary
class LowStockPart(CamelModel):
    id: str
    name: str
    category: str
    quantity: int
    low_stock_threshold: int
    unit: str


class CategoryBreakdown(CamelModel):
    category: str
    count: int
    total_items: int
    total_value: float


class InventorySummary(CamelModel):
    total_parts: int
    total_items: int
    total_value: float
    low_stock_count: int
    low_stock_parts: List[LowStockPart] = []
    by_category: List[CategoryBreakdown] = []
