"""Authentication routes."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from motorsports.auth import (
    CurrentUser,
    create_access_token,
    get_current_user,
    get_password_hash,
    get_settings,
    verify_password,
)
from motorsports.config import Settings
from motorsports.database import get_db
from motorsports.models.user import User, UserRole
from motorsports.schemas.common import ApiResponse
from motorsports.schemas.user import AuthPayload, LoginRequest, RegisterRequest, UserProfile
from motorsports.schemas.user_brief import UserBrief

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=ApiResponse[AuthPayload], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Create an account and return a token for it."""
    email = user_data.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email address already exists."
        )

    # bcrypt is deliberately slow; keep it off the event loop
    password_hash = await run_in_threadpool(get_password_hash, user_data.password)
    user = User(
        email=email,
        password_hash=password_hash,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        role=user_data.role or UserRole.USER.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    token = create_access_token(user, settings)
    return ApiResponse(
        data=AuthPayload(token=token, user=UserBrief.model_validate(user)),
        message="User registered successfully.",
    )


@router.post("/login", response_model=ApiResponse[AuthPayload])
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a token."""
    user = db.query(User).filter(User.email == credentials.email.lower()).first()
    if not user or not await run_in_threadpool(verify_password, credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated. Please contact an administrator."
        )

    token = create_access_token(user, settings)
    return ApiResponse(
        data=AuthPayload(token=token, user=UserBrief.model_validate(user)),
        message="Login successful.",
    )


@router.get("/me", response_model=ApiResponse[UserProfile])
async def get_me(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get the caller's profile, including the driver profile if any."""
    user = db.query(User).filter(User.id == current_user.id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found."
        )
    return ApiResponse(data=UserProfile.model_validate(user))
