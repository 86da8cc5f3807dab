"""User administration routes (admin only)."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_admin
from motorsports.database import get_db
from motorsports.models.setup_sheet import SetupSheet
from motorsports.models.user import User
from motorsports.schemas.common import ApiResponse
from motorsports.schemas.user import (
    RoleUpdate,
    SetupSheetStub,
    StatusUpdate,
    UserDetail,
    UserListItem,
    UserProfile,
    UserResponse,
)

router = APIRouter(prefix="/admin/users", tags=["Admin"])

RECENT_SETUP_SHEETS = 10


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found."
        )
    return user


def _reject_self(user_id: str, current_user: CurrentUser, detail: str) -> None:
    # Runs before the target lookup
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.get("", response_model=ApiResponse[List[UserListItem]])
async def list_users(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """List all users, newest first."""
    users = db.query(User).order_by(User.created_at.desc()).all()
    return ApiResponse(
        data=[UserListItem.model_validate(u) for u in users],
        count=len(users),
    )


@router.get("/{user_id}", response_model=ApiResponse[UserDetail])
async def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Get a user with driver profile and the most recent setup sheets."""
    user = _get_user_or_404(db, user_id)
    recent = (
        db.query(SetupSheet)
        .filter(SetupSheet.created_by_id == user.id)
        .order_by(SetupSheet.created_at.desc())
        .limit(RECENT_SETUP_SHEETS)
        .all()
    )
    profile = UserProfile.model_validate(user)
    detail = UserDetail(
        **profile.model_dump(),
        setup_sheets=[SetupSheetStub.model_validate(s) for s in recent],
    )
    return ApiResponse(data=detail)


@router.patch("/{user_id}/role", response_model=ApiResponse[UserResponse])
async def update_user_role(
    user_id: str,
    role_update: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Change a user's role."""
    _reject_self(user_id, current_user, "You cannot change your own role.")
    user = _get_user_or_404(db, user_id)

    user.role = role_update.role
    db.commit()
    db.refresh(user)
    return ApiResponse(
        data=UserResponse.model_validate(user),
        message=f'User role updated to "{role_update.role}".',
    )


@router.patch("/{user_id}/status", response_model=ApiResponse[UserResponse])
async def update_user_status(
    user_id: str,
    status_update: StatusUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Activate or deactivate a user account."""
    _reject_self(user_id, current_user, "You cannot change your own account status.")
    user = _get_user_or_404(db, user_id)

    user.is_active = status_update.is_active
    db.commit()
    db.refresh(user)
    state = "activated" if user.is_active else "deactivated"
    return ApiResponse(
        data=UserResponse.model_validate(user),
        message=f"User account {state}.",
    )
