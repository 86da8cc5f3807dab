"""Compact user shapes embedded in other resources' responses."""
from motorsports.schemas.common import CamelModel


class UserBrief(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str


class UserSummary(UserBrief):
    """User as embedded in driver responses."""
    is_active: bool
