"""Lap time and analytics schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import computed_field, field_validator

from motorsports.models.lap_time import LapSessionType
from motorsports.schemas.common import CamelModel, RequestModel, check_choice, check_optional_choice
from motorsports.schemas.event import EventBrief
from motorsports.schemas.user_brief import UserBrief
from motorsports.schemas.vehicle import VehicleSummary
from motorsports.services.analytics import format_lap_time


def _positive_lap_number(v: Optional[int]) -> Optional[int]:
    if v is not None and v < 1:
        raise ValueError("lapNumber must be a positive integer")
    return v


def _positive_ms(v: Optional[int], field: str) -> Optional[int]:
    if v is not None and v <= 0:
        raise ValueError(f"{field} must be a positive integer (milliseconds)")
    return v


class LapTimeFields(RequestModel):
    sector1_ms: Optional[int] = None
    sector2_ms: Optional[int] = None
    sector3_ms: Optional[int] = None
    is_valid: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("sector1_ms", "sector2_ms", "sector3_ms")
    @classmethod
    def positive_sectors(cls, v: Optional[int], info) -> Optional[int]:
        return _positive_ms(v, info.field_name.replace("_ms", "Ms"))


class LapTimeCreate(LapTimeFields):
    """Schema for recording a lap."""
    driver_id: str
    vehicle_id: str
    event_id: str
    lap_number: int
    lap_time_ms: int
    session_type: str

    @field_validator("lap_number")
    @classmethod
    def valid_lap_number(cls, v: int) -> int:
        return _positive_lap_number(v)

    @field_validator("lap_time_ms")
    @classmethod
    def valid_lap_time(cls, v: int) -> int:
        return _positive_ms(v, "lapTimeMs")

    @field_validator("session_type")
    @classmethod
    def valid_session_type(cls, v: str) -> str:
        return check_choice(v, LapSessionType, "sessionType")


class LapTimeUpdate(LapTimeFields):
    lap_number: Optional[int] = None
    lap_time_ms: Optional[int] = None
    session_type: Optional[str] = None

    @field_validator("lap_number")
    @classmethod
    def valid_lap_number(cls, v: Optional[int]) -> Optional[int]:
        return _positive_lap_number(v)

    @field_validator("lap_time_ms")
    @classmethod
    def valid_lap_time(cls, v: Optional[int]) -> Optional[int]:
        return _positive_ms(v, "lapTimeMs")

    @field_validator("session_type")
    @classmethod
    def valid_session_type(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, LapSessionType, "sessionType")


class LapDriver(CamelModel):
    id: str
    user_id: str
    user: UserBrief


class LapTimeResponse(CamelModel):
    id: str
    driver_id: str
    vehicle_id: str
    event_id: str
    lap_number: int
    lap_time_ms: int
    session_type: str
    sector1_ms: Optional[int] = None
    sector2_ms: Optional[int] = None
    sector3_ms: Optional[int] = None
    is_valid: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    driver: LapDriver
    vehicle: VehicleSummary
    event: EventBrief

    @computed_field(alias="lapTimeFormatted")
    @property
    def lap_time_formatted(self) -> str:
        return format_lap_time(self.lap_time_ms)

    @computed_field(alias="sector1Formatted")
    @property
    def sector1_formatted(self) -> Optional[str]:
        return format_lap_time(self.sector1_ms) if self.sector1_ms else None

    @computed_field(alias="sector2Formatted")
    @property
    def sector2_formatted(self) -> Optional[str]:
        return format_lap_time(self.sector2_ms) if self.sector2_ms else None

    @computed_field(alias="sector3Formatted")
    @property
    def sector3_formatted(self) -> Optional[str]:
        return format_lap_time(self.sector3_ms) if self.sector3_ms else None


# Analytics summary
class BestLapByDriver(CamelModel):
    driver_id: str
    driver_name: str
    lap_time_ms: int
    lap_time_formatted: str
    vehicle_name: str
    event_name: str


class BestLapByVehicle(CamelModel):
    vehicle_id: str
    vehicle_name: str
    lap_time_ms: int
    lap_time_formatted: str
    driver_name: str
    event_name: str


class TrendPoint(CamelModel):
    lap_number: int
    lap_time_ms: int
    lap_time_formatted: str


class DriverLapTrend(CamelModel):
    driver_id: str
    driver_name: str
    laps: List[TrendPoint] = []


class AnalyticsSummary(CamelModel):
    total_laps: int
    best_laps_by_driver: List[BestLapByDriver] = []
    best_laps_by_vehicle: List[BestLapByVehicle] = []
    lap_trends_by_driver: List[DriverLapTrend] = []
