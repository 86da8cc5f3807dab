"""Authentication: password hashing, JWT tokens and the request gates."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from motorsports.config import Settings
from motorsports.models.user import User, UserRole
from motorsports.rbac import Permission, roles_with

BCRYPT_ROUNDS = 12

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity decoded from a verified token."""
    id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _require_secret(settings: Settings) -> str:
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error: JWT secret not set.",
        )
    return settings.JWT_SECRET


def create_access_token(user: User, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token carrying the user's id, email and role."""
    secret = _require_secret(settings)
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRES_MINUTES))
    payload = {
        "userId": user.id,
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> CurrentUser:
    secret = _require_secret(settings)
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
        return CurrentUser(id=payload["userId"], email=payload["email"], role=payload["role"])
    except (jwt.InvalidTokenError, KeyError):
        # ExpiredSignatureError is an InvalidTokenError
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """Authentication gate: verify the bearer token and return its identity."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_access_token(credentials.credentials, settings)


def require_permission(permission: Permission):
    """Role gate: allow callers whose role holds the given permission."""
    allowed_roles = roles_with(permission)

    async def role_checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=(
                    f"Access denied. Requires one of roles: {', '.join(allowed_roles)}. "
                    f"Your role: {current_user.role}."
                ),
            )
        return current_user
    return role_checker


# Convenience dependencies
require_reader = require_permission(Permission.READ)
require_writer = require_permission(Permission.WRITE)
require_admin = require_permission(Permission.MANAGE_USERS)
