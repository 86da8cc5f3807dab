"""Setup sheet schemas for request/response validation."""
from datetime import datetime
from typing import Optional

from pydantic import field_validator

from motorsports.models.setup_sheet import DownforceLevel, SessionType
from motorsports.schemas.common import CamelModel, RequestModel, check_optional_choice
from motorsports.schemas.event import EventSummary
from motorsports.schemas.user_brief import UserBrief
from motorsports.schemas.vehicle import VehicleSummary


class SetupFields(RequestModel):
    """Tuning fields shared by create and update."""
    session_number: Optional[int] = None

    # Tyres
    tyre_front_left: Optional[str] = None
    tyre_front_right: Optional[str] = None
    tyre_rear_left: Optional[str] = None
    tyre_rear_right: Optional[str] = None
    tyre_pressure_front_left: Optional[float] = None
    tyre_pressure_front_right: Optional[float] = None
    tyre_pressure_rear_left: Optional[float] = None
    tyre_pressure_rear_right: Optional[float] = None

    # Suspension
    ride_height_front: Optional[float] = None
    ride_height_rear: Optional[float] = None
    spring_rate_front: Optional[float] = None
    spring_rate_rear: Optional[float] = None
    damper_front: Optional[str] = None
    damper_rear: Optional[str] = None
    camber_front: Optional[float] = None
    camber_rear: Optional[float] = None
    toe_in_front: Optional[float] = None
    toe_in_rear: Optional[float] = None

    # Aero
    front_wing_angle: Optional[float] = None
    rear_wing_angle: Optional[float] = None
    downforce_level: Optional[str] = None

    # Brakes
    brake_bias: Optional[float] = None
    brake_compound: Optional[str] = None

    # Engine / drivetrain
    engine_map: Optional[str] = None
    differential_entry: Optional[float] = None
    differential_mid: Optional[float] = None
    differential_exit: Optional[float] = None

    fuel_load: Optional[float] = None
    notes: Optional[str] = None
    driver_feedback: Optional[str] = None

    @field_validator("downforce_level")
    @classmethod
    def valid_downforce(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, DownforceLevel, "downforceLevel")


class SetupSheetCreate(SetupFields):
    """Schema for creating a setup sheet."""
    vehicle_id: str
    event_id: str
    session_type: str

    @field_validator("session_type")
    @classmethod
    def valid_session_type(cls, v: str) -> str:
        return check_optional_choice(v, SessionType, "sessionType")


class SetupSheetUpdate(SetupFields):
    """Schema for updating a setup sheet."""
    vehicle_id: Optional[str] = None
    event_id: Optional[str] = None
    session_type: Optional[str] = None

    @field_validator("session_type")
    @classmethod
    def valid_session_type(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, SessionType, "sessionType")


class SetupSheetResponse(CamelModel):
    """Schema for setup sheet response."""
    id: str
    vehicle_id: str
    event_id: str
    created_by_id: str
    session_type: str
    session_number: Optional[int] = None
    tyre_front_left: Optional[str] = None
    tyre_front_right: Optional[str] = None
    tyre_rear_left: Optional[str] = None
    tyre_rear_right: Optional[str] = None
    tyre_pressure_front_left: Optional[float] = None
    tyre_pressure_front_right: Optional[float] = None
    tyre_pressure_rear_left: Optional[float] = None
    tyre_pressure_rear_right: Optional[float] = None
    ride_height_front: Optional[float] = None
    ride_height_rear: Optional[float] = None
    spring_rate_front: Optional[float] = None
    spring_rate_rear: Optional[float] = None
    damper_front: Optional[str] = None
    damper_rear: Optional[str] = None
    camber_front: Optional[float] = None
    camber_rear: Optional[float] = None
    toe_in_front: Optional[float] = None
    toe_in_rear: Optional[float] = None
    front_wing_angle: Optional[float] = None
    rear_wing_angle: Optional[float] = None
    downforce_level: Optional[str] = None
    brake_bias: Optional[float] = None
    brake_compound: Optional[str] = None
    engine_map: Optional[str] = None
    differential_entry: Optional[float] = None
    differential_mid: Optional[float] = None
    differential_exit: Optional[float] = None
    fuel_load: Optional[float] = None
    notes: Optional[str] = None
    driver_feedback: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    vehicle: VehicleSummary
    event: EventSummary
    created_by: UserBrief
