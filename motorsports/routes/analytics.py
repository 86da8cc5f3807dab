"""Lap-time recording and analytics routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_reader, require_writer
from motorsports.database import get_db
from motorsports.models.lap_time import LapTime
from motorsports.routes.drivers import get_driver_or_404
from motorsports.routes.events import get_event_or_404
from motorsports.routes.vehicles import get_vehicle_or_404
from motorsports.schemas.common import ApiResponse, update_fields
from motorsports.schemas.lap_time import (
    AnalyticsSummary,
    LapTimeCreate,
    LapTimeResponse,
    LapTimeUpdate,
)
from motorsports.services.analytics import summarize_laps

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def _get_lap_or_404(db: Session, lap_id: str) -> LapTime:
    lap = db.query(LapTime).filter(LapTime.id == lap_id).first()
    if not lap:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lap time not found"
        )
    return lap


@router.post("/laptimes", response_model=ApiResponse[LapTimeResponse], status_code=status.HTTP_201_CREATED)
async def record_lap_time(
    lap_data: LapTimeCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Record a lap. Driver, vehicle and event must exist, checked in that order."""
    get_driver_or_404(db, lap_data.driver_id, detail="Driver not found")
    get_vehicle_or_404(db, lap_data.vehicle_id)
    get_event_or_404(db, lap_data.event_id)

    values = lap_data.model_dump()
    if values["is_valid"] is None:
        values["is_valid"] = True
    lap = LapTime(**values)
    db.add(lap)
    db.commit()
    db.refresh(lap)
    return ApiResponse(
        data=LapTimeResponse.model_validate(lap),
        message="Lap time recorded successfully",
    )


@router.get("/laptimes", response_model=ApiResponse[List[LapTimeResponse]])
async def list_lap_times(
    event_id: Optional[str] = Query(None, alias="eventId"),
    driver_id: Optional[str] = Query(None, alias="driverId"),
    vehicle_id: Optional[str] = Query(None, alias="vehicleId"),
    session_type: Optional[str] = Query(None, alias="sessionType"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """List lap times ordered by event then lap number."""
    query = db.query(LapTime)
    if event_id:
        query = query.filter(LapTime.event_id == event_id)
    if driver_id:
        query = query.filter(LapTime.driver_id == driver_id)
    if vehicle_id:
        query = query.filter(LapTime.vehicle_id == vehicle_id)
    if session_type:
        query = query.filter(LapTime.session_type == session_type)

    laps = query.order_by(LapTime.event_id.asc(), LapTime.lap_number.asc()).all()
    return ApiResponse(
        data=[LapTimeResponse.model_validate(lap) for lap in laps],
        count=len(laps),
    )


@router.get("/laptimes/{lap_id}", response_model=ApiResponse[LapTimeResponse])
async def get_lap_time(
    lap_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    lap = _get_lap_or_404(db, lap_id)
    return ApiResponse(data=LapTimeResponse.model_validate(lap))


@router.put("/laptimes/{lap_id}", response_model=ApiResponse[LapTimeResponse])
async def update_lap_time(
    lap_id: str,
    lap_update: LapTimeUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    lap = _get_lap_or_404(db, lap_id)

    clearable = ("sector1_ms", "sector2_ms", "sector3_ms", "notes")
    for field, value in update_fields(lap_update, clearable=clearable).items():
        setattr(lap, field, value)

    db.commit()
    db.refresh(lap)
    return ApiResponse(
        data=LapTimeResponse.model_validate(lap),
        message="Lap time updated successfully",
    )


@router.delete("/laptimes/{lap_id}", response_model=ApiResponse[None])
async def delete_lap_time(
    lap_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    lap = _get_lap_or_404(db, lap_id)
    db.delete(lap)
    db.commit()
    return ApiResponse(message="Lap time deleted successfully")


@router.get("/summary", response_model=ApiResponse[AnalyticsSummary])
async def get_analytics_summary(
    event_id: Optional[str] = Query(None, alias="eventId"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """Best laps per driver and per vehicle plus lap trends, over valid laps."""
    query = db.query(LapTime).filter(LapTime.is_valid.is_(True))
    if event_id:
        query = query.filter(LapTime.event_id == event_id)
    laps = query.order_by(LapTime.lap_time_ms.asc()).all()
    return ApiResponse(data=AnalyticsSummary.model_validate(summarize_laps(laps)))
