"""Setup sheet routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_reader, require_writer
from motorsports.database import get_db
from motorsports.models.setup_sheet import SetupSheet
from motorsports.routes.events import get_event_or_404
from motorsports.routes.vehicles import get_vehicle_or_404
from motorsports.schemas.common import ApiResponse, update_fields
from motorsports.schemas.setup_sheet import (
    SetupFields,
    SetupSheetCreate,
    SetupSheetResponse,
    SetupSheetUpdate,
)

router = APIRouter(prefix="/setups", tags=["Setup Sheets"])


def _get_setup_or_404(db: Session, setup_id: str) -> SetupSheet:
    setup = db.query(SetupSheet).filter(SetupSheet.id == setup_id).first()
    if not setup:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Setup sheet not found"
        )
    return setup


def _check_owner(setup: SetupSheet, current_user: CurrentUser, action: str) -> None:
    if setup.created_by_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Forbidden. You can only {action} your own setup sheets."
        )


@router.get("", response_model=ApiResponse[List[SetupSheetResponse]])
async def list_setups(
    event_id: Optional[str] = Query(None, alias="eventId"),
    vehicle_id: Optional[str] = Query(None, alias="vehicleId"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """List setup sheets, newest first, optionally for one event or vehicle."""
    query = db.query(SetupSheet)
    if event_id:
        query = query.filter(SetupSheet.event_id == event_id)
    if vehicle_id:
        query = query.filter(SetupSheet.vehicle_id == vehicle_id)
    setups = query.order_by(SetupSheet.created_at.desc()).all()
    return ApiResponse(
        data=[SetupSheetResponse.model_validate(s) for s in setups],
        count=len(setups),
    )


@router.get("/{setup_id}", response_model=ApiResponse[SetupSheetResponse])
async def get_setup(
    setup_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """Get a specific setup sheet."""
    setup = _get_setup_or_404(db, setup_id)
    return ApiResponse(data=SetupSheetResponse.model_validate(setup))


@router.post("", response_model=ApiResponse[SetupSheetResponse], status_code=status.HTTP_201_CREATED)
async def create_setup(
    setup_data: SetupSheetCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Create a setup sheet owned by the caller."""
    get_vehicle_or_404(db, setup_data.vehicle_id)
    get_event_or_404(db, setup_data.event_id)

    setup = SetupSheet(**setup_data.model_dump(), created_by_id=current_user.id)
    db.add(setup)
    db.commit()
    db.refresh(setup)
    return ApiResponse(
        data=SetupSheetResponse.model_validate(setup),
        message="Setup sheet created successfully",
    )


@router.put("/{setup_id}", response_model=ApiResponse[SetupSheetResponse])
async def update_setup(
    setup_id: str,
    setup_update: SetupSheetUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Update a setup sheet (creator or admin)."""
    setup = _get_setup_or_404(db, setup_id)
    _check_owner(setup, current_user, "update")

    update_data = update_fields(setup_update, clearable=SetupFields.model_fields)
    if "vehicle_id" in update_data:
        get_vehicle_or_404(db, update_data["vehicle_id"])
    if "event_id" in update_data:
        get_event_or_404(db, update_data["event_id"])

    for field, value in update_data.items():
        setattr(setup, field, value)

    db.commit()
    db.refresh(setup)
    return ApiResponse(
        data=SetupSheetResponse.model_validate(setup),
        message="Setup sheet updated successfully",
    )


@router.delete("/{setup_id}", response_model=ApiResponse[None])
async def delete_setup(
    setup_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Delete a setup sheet (creator or admin)."""
    setup = _get_setup_or_404(db, setup_id)
    _check_owner(setup, current_user, "delete")

    db.delete(setup)
    db.commit()
    return ApiResponse(message="Setup sheet deleted successfully")
