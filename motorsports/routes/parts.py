"""Parts inventory routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_reader, require_writer
from motorsports.database import get_db
from motorsports.models.part import Part
from motorsports.routes.vehicles import get_vehicle_or_404
from motorsports.schemas.common import ApiResponse, update_fields
from motorsports.schemas.part import (
    AdjustRequest,
    InventorySummary,
    PartCreate,
    PartListResponse,
    PartResponse,
    PartUpdate,
)
from motorsports.services.inventory import summarize_inventory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parts", tags=["Parts"])


def _get_part_or_404(db: Session, part_id: str) -> Part:
    part = db.query(Part).filter(Part.id == part_id).first()
    if not part:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Part not found"
        )
    return part


@router.get("", response_model=PartListResponse)
async def list_parts(
    category: Optional[str] = None,
    vehicle_id: Optional[str] = Query(None, alias="vehicleId"),
    low_stock: Optional[str] = Query(None, alias="lowStock"),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """List parts ordered by category then name.

    ``search`` matches name, part number, supplier or location, ignoring case.
    ``lowStock=true`` keeps only parts at or below their threshold.
    """
    query = db.query(Part)
    if category:
        query = query.filter(Part.category == category)
    if vehicle_id:
        query = query.filter(Part.vehicle_id == vehicle_id)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            Part.name.ilike(pattern),
            Part.part_number.ilike(pattern),
            Part.supplier.ilike(pattern),
            Part.location.ilike(pattern),
        ))
    if low_stock == "true":
        query = query.filter(Part.quantity <= Part.low_stock_threshold)

    parts = query.order_by(Part.category.asc(), Part.name.asc()).all()
    return PartListResponse(
        data=[PartResponse.model_validate(p) for p in parts],
        count=len(parts),
        low_stock_count=sum(1 for p in parts if p.is_low_stock),
    )


@router.get("/summary", response_model=ApiResponse[InventorySummary])
async def get_inventory_summary(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """Inventory totals, low-stock parts and per-category breakdown."""
    parts = db.query(Part).all()
    return ApiResponse(data=InventorySummary.model_validate(summarize_inventory(parts)))


@router.get("/{part_id}", response_model=ApiResponse[PartResponse])
async def get_part(
    part_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """Get a specific part."""
    part = _get_part_or_404(db, part_id)
    return ApiResponse(data=PartResponse.model_validate(part))


@router.post("", response_model=ApiResponse[PartResponse], status_code=status.HTTP_201_CREATED)
async def create_part(
    part_data: PartCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Add a part to inventory."""
    if part_data.vehicle_id:
        get_vehicle_or_404(db, part_data.vehicle_id)

    part = Part(**part_data.model_dump())
    db.add(part)
    db.commit()
    db.refresh(part)
    return ApiResponse(
        data=PartResponse.model_validate(part),
        message="Part created successfully",
    )


@router.put("/{part_id}", response_model=ApiResponse[PartResponse])
async def update_part(
    part_id: str,
    part_update: PartUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Update a part. ``vehicleId: null`` unassigns it from its vehicle."""
    part = _get_part_or_404(db, part_id)

    clearable = ("part_number", "cost", "supplier", "location", "notes", "vehicle_id")
    update_data = update_fields(part_update, clearable=clearable)
    if update_data.get("vehicle_id"):
        get_vehicle_or_404(db, update_data["vehicle_id"])

    for field, value in update_data.items():
        setattr(part, field, value)

    db.commit()
    db.refresh(part)
    return ApiResponse(
        data=PartResponse.model_validate(part),
        message="Part updated successfully",
    )


@router.patch("/{part_id}/adjust", response_model=ApiResponse[PartResponse])
async def adjust_part_quantity(
    part_id: str,
    adjust: AdjustRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Add or remove stock. Quantity never goes below zero."""
    part = _get_part_or_404(db, part_id)

    new_quantity = part.quantity + adjust.adjustment
    if new_quantity < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot reduce quantity below 0. Current: {part.quantity}, adjustment: {adjust.adjustment}"
        )

    part.quantity = new_quantity
    db.commit()
    db.refresh(part)
    logger.info(
        "Stock adjusted",
        extra={"part_id": part.id, "adjustment": adjust.adjustment, "user_id": current_user.id, "notes": adjust.notes},
    )
    sign = "+" if adjust.adjustment > 0 else ""
    return ApiResponse(
        data=PartResponse.model_validate(part),
        message=f"Quantity adjusted by {sign}{adjust.adjustment}. New quantity: {new_quantity}",
    )


@router.delete("/{part_id}", response_model=ApiResponse[None])
async def delete_part(
    part_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Remove a part from inventory."""
    part = _get_part_or_404(db, part_id)
    db.delete(part)
    db.commit()
    return ApiResponse(message="Part deleted successfully")
