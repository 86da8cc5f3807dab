"""Vehicle routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_reader, require_writer
from motorsports.database import get_db
from motorsports.models.vehicle import Vehicle
from motorsports.schemas.common import ApiResponse, update_fields
from motorsports.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


def get_vehicle_or_404(db: Session, vehicle_id: str, detail: str = "Vehicle not found") -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )
    return vehicle


def _check_vin_available(db: Session, vin: Optional[str], vehicle_id: Optional[str] = None) -> None:
    if not vin:
        return
    query = db.query(Vehicle).filter(Vehicle.vin == vin)
    if vehicle_id:
        query = query.filter(Vehicle.id != vehicle_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A vehicle with this VIN already exists"
        )


@router.get("", response_model=ApiResponse[List[VehicleResponse]])
async def list_vehicles(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """List all vehicles, newest first."""
    vehicles = db.query(Vehicle).order_by(Vehicle.created_at.desc()).all()
    return ApiResponse(
        data=[VehicleResponse.model_validate(v) for v in vehicles],
        count=len(vehicles),
    )


@router.get("/{vehicle_id}", response_model=ApiResponse[VehicleResponse])
async def get_vehicle(
    vehicle_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """Get a specific vehicle."""
    vehicle = get_vehicle_or_404(db, vehicle_id)
    return ApiResponse(data=VehicleResponse.model_validate(vehicle))


@router.post("", response_model=ApiResponse[VehicleResponse], status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Create a new vehicle."""
    _check_vin_available(db, vehicle_data.vin)

    vehicle = Vehicle(**vehicle_data.model_dump())
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    return ApiResponse(
        data=VehicleResponse.model_validate(vehicle),
        message="Vehicle created successfully",
    )


@router.put("/{vehicle_id}", response_model=ApiResponse[VehicleResponse])
async def update_vehicle(
    vehicle_id: str,
    vehicle_update: VehicleUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Update a vehicle."""
    vehicle = get_vehicle_or_404(db, vehicle_id)

    update_data = update_fields(vehicle_update, clearable=("number", "vin", "notes"))
    if "vin" in update_data:
        _check_vin_available(db, update_data["vin"], vehicle.id)

    for field, value in update_data.items():
        setattr(vehicle, field, value)

    db.commit()
    db.refresh(vehicle)
    return ApiResponse(
        data=VehicleResponse.model_validate(vehicle),
        message="Vehicle updated successfully",
    )


@router.delete("/{vehicle_id}", response_model=ApiResponse[None])
async def delete_vehicle(
    vehicle_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Delete a vehicle with its setup sheets, lap times and upload records.

    Parts assigned to the vehicle stay in inventory, unassigned.
    """
    vehicle = get_vehicle_or_404(db, vehicle_id)
    db.delete(vehicle)
    db.commit()
    return ApiResponse(message="Vehicle deleted successfully")
