"""User and authentication schemas for request/response validation."""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, StrictBool, field_validator

from motorsports.models.user import UserRole
from motorsports.schemas.common import CamelModel, RequestModel, check_choice
from motorsports.schemas.driver import DriverProfile
from motorsports.schemas.user_brief import UserBrief, UserSummary

MIN_PASSWORD_LENGTH = 8

# Administrators are promoted by another admin, never self-registered
REGISTRABLE_ROLES = (UserRole.USER, UserRole.VIEWER)


class RegisterRequest(RequestModel):
    """Schema for self-registration."""
    email: EmailStr
    password: str
    first_name: str
    last_name: str
    role: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("firstName and lastName must not be empty.")
        return v

    @field_validator("role")
    @classmethod
    def registrable_role(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return check_choice(v, REGISTRABLE_ROLES, "role")


class LoginRequest(RequestModel):
    email: str
    password: str


class AuthPayload(CamelModel):
    """Token plus the authenticated user."""
    token: str
    user: UserBrief


class DriverProfileBrief(CamelModel):
    id: str
    license_number: Optional[str] = None
    nationality: Optional[str] = None


class SetupSheetStub(CamelModel):
    id: str
    session_type: str
    created_at: Optional[datetime] = None


class UserResponse(UserSummary):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserListItem(UserResponse):
    driver: Optional[DriverProfileBrief] = None


class RoleUpdate(RequestModel):
    role: str

    @field_validator("role")
    @classmethod
    def valid_role(cls, v: str) -> str:
        return check_choice(v, UserRole, "role")


class StatusUpdate(RequestModel):
    is_active: StrictBool


class UserProfile(UserResponse):
    """Current user or admin detail view, with the full driver profile."""
    driver: Optional[DriverProfile] = None


class UserDetail(UserProfile):
    setup_sheets: List[SetupSheetStub] = []
