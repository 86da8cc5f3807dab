"""Vehicle schemas for request/response validation."""
from datetime import date, datetime
from typing import Optional

from pydantic import AfterValidator
from typing_extensions import Annotated

from motorsports.models.vehicle import MIN_VEHICLE_YEAR
from motorsports.schemas.common import BlankAsNone, CamelModel, NonEmptyStr, RequestModel


def validate_year(year: int) -> int:
    """Model years run from 1900 to next year's models."""
    max_year = date.today().year + 1
    if year < MIN_VEHICLE_YEAR or year > max_year:
        raise ValueError(f"Invalid year. Must be between {MIN_VEHICLE_YEAR} and {max_year}")
    return year


ModelYear = Annotated[int, AfterValidator(validate_year)]


class VehicleCreate(RequestModel):
    """Schema for creating a vehicle."""
    make: NonEmptyStr
    model: NonEmptyStr
    year: ModelYear
    category: NonEmptyStr
    number: Optional[str] = None
    vin: BlankAsNone = None
    notes: Optional[str] = None


class VehicleUpdate(RequestModel):
    """Schema for updating a vehicle."""
    make: Optional[NonEmptyStr] = None
    model: Optional[NonEmptyStr] = None
    year: Optional[ModelYear] = None
    category: Optional[NonEmptyStr] = None
    number: Optional[str] = None
    vin: BlankAsNone = None
    notes: Optional[str] = None


class VehicleBrief(CamelModel):
    id: str
    make: str
    model: str
    year: int
    number: Optional[str] = None


class VehicleSummary(VehicleBrief):
    category: str


class VehicleResponse(VehicleSummary):
    """Schema for vehicle response."""
    vin: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
