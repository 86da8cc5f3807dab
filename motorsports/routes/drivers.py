"""Driver profile routes."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_reader, require_writer
from motorsports.database import get_db
from motorsports.models.driver import Driver
from motorsports.models.user import User
from motorsports.schemas.common import ApiResponse, update_fields
from motorsports.schemas.driver import DriverCreate, DriverFields, DriverResponse, DriverUpdate

router = APIRouter(prefix="/drivers", tags=["Drivers"])


def get_driver_or_404(db: Session, driver_id: str, detail: str = "Driver not found.") -> Driver:
    driver = db.query(Driver).filter(Driver.id == driver_id).first()
    if not driver:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )
    return driver


@router.get("", response_model=ApiResponse[List[DriverResponse]])
async def list_drivers(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """List all driver profiles, newest first."""
    drivers = db.query(Driver).order_by(Driver.created_at.desc()).all()
    return ApiResponse(
        data=[DriverResponse.model_validate(d) for d in drivers],
        count=len(drivers),
    )


@router.get("/{driver_id}", response_model=ApiResponse[DriverResponse])
async def get_driver(
    driver_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """Get a specific driver profile."""
    driver = get_driver_or_404(db, driver_id)
    return ApiResponse(data=DriverResponse.model_validate(driver))


@router.post("", response_model=ApiResponse[DriverResponse], status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Create the driver profile of an existing user (one per user)."""
    user = db.query(User).filter(User.id == driver_data.user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found."
        )
    if user.driver is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A driver profile already exists for this user."
        )

    driver = Driver(**driver_data.model_dump())
    db.add(driver)
    db.commit()
    db.refresh(driver)
    return ApiResponse(
        data=DriverResponse.model_validate(driver),
        message="Driver profile created successfully.",
    )


@router.put("/{driver_id}", response_model=ApiResponse[DriverResponse])
async def update_driver(
    driver_id: str,
    driver_update: DriverUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Update a driver profile."""
    driver = get_driver_or_404(db, driver_id)

    for field, value in update_fields(driver_update, clearable=DriverFields.model_fields).items():
        setattr(driver, field, value)

    db.commit()
    db.refresh(driver)
    return ApiResponse(
        data=DriverResponse.model_validate(driver),
        message="Driver profile updated successfully.",
    )


@router.delete("/{driver_id}", response_model=ApiResponse[None])
async def delete_driver(
    driver_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Delete a driver profile and its lap times. The user account stays."""
    driver = get_driver_or_404(db, driver_id)
    db.delete(driver)
    db.commit()
    return ApiResponse(message="Driver profile deleted successfully.")
