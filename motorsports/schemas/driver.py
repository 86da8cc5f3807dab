"""Driver schemas for request/response validation."""
from datetime import datetime
from typing import Optional

from motorsports.schemas.common import CamelModel, RequestModel
from motorsports.schemas.user_brief import UserSummary


class DriverFields(RequestModel):
    license_number: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    bio: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_notes: Optional[str] = None


class DriverCreate(DriverFields):
    """Schema for creating a driver profile for an existing user."""
    user_id: str


class DriverUpdate(DriverFields):
    """Schema for updating a driver profile."""
    pass


class DriverProfile(CamelModel):
    id: str
    user_id: str
    license_number: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    bio: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DriverResponse(DriverProfile):
    """Schema for driver response."""
    user: UserSummary
