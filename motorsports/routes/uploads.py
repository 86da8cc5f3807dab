"""File upload routes.

Bytes go straight from the client to object storage through presigned URLs;
the API only hands out URLs and records metadata.
"""
import logging
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_reader, require_writer
from motorsports.database import get_db
from motorsports.models.upload import Upload, UploadEntityType
from motorsports.routes.events import get_event_or_404
from motorsports.routes.vehicles import get_vehicle_or_404
from motorsports.schemas.common import ApiResponse
from motorsports.schemas.upload import (
    ConfirmRequest,
    DownloadResponse,
    PresignRequest,
    PresignResponse,
    UploadListItem,
    UploadResponse,
)
from motorsports.services.storage import ObjectStorage, build_file_key, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["Uploads"])


def _check_entity_exists(db: Session, entity_type: str, entity_id: str) -> None:
    if entity_type == UploadEntityType.VEHICLE.value:
        get_vehicle_or_404(db, entity_id, detail="Vehicle not found.")
    else:
        get_event_or_404(db, entity_id, detail="Event not found.")


def _get_upload_or_404(db: Session, upload_id: str) -> Upload:
    upload = db.query(Upload).filter(Upload.id == upload_id).first()
    if not upload:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Upload record not found."
        )
    return upload


@router.post("/presign", response_model=ApiResponse[PresignResponse])
async def presign_upload(
    request_data: PresignRequest,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(require_writer)
):
    """Issue a presigned PUT URL. Nothing is recorded until /confirm."""
    _check_entity_exists(db, request_data.entity_type, request_data.entity_id)

    file_key = build_file_key(
        request_data.entity_type,
        request_data.entity_id,
        request_data.category,
        request_data.file_name,
    )
    upload_url = storage.presign_put(file_key, request_data.file_type)
    return ApiResponse(data=PresignResponse(
        upload_url=upload_url,
        file_key=file_key,
        public_url=storage.public_url(file_key),
        expires_in=storage.upload_expires_in,
    ))


@router.post("/confirm", response_model=ApiResponse[UploadResponse], status_code=status.HTTP_201_CREATED)
async def confirm_upload(
    confirm: ConfirmRequest,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(require_writer)
):
    """Record metadata for a file the client has uploaded."""
    _check_entity_exists(db, confirm.entity_type, confirm.entity_id)
    if db.query(Upload).filter(Upload.file_key == confirm.file_key).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This file has already been recorded.")

    is_vehicle = confirm.entity_type == UploadEntityType.VEHICLE.value
    upload = Upload(
        entity_type=confirm.entity_type,
        entity_id=confirm.entity_id,
        file_name=confirm.file_name,
        file_key=confirm.file_key,
        file_url=storage.public_url(confirm.file_key),
        mime_type=confirm.mime_type,
        category=confirm.category,
        size_bytes=confirm.size_bytes,
        uploaded_by_id=current_user.id,
        vehicle_id=confirm.entity_id if is_vehicle else None,
        event_id=None if is_vehicle else confirm.entity_id,
    )
    db.add(upload)
    db.commit()
    db.refresh(upload)
    return ApiResponse(data=UploadResponse.model_validate(upload))


@router.get("", response_model=ApiResponse[List[UploadListItem]])
async def list_uploads(
    entity_type: Optional[str] = Query(None, alias="entityType"),
    entity_id: Optional[str] = Query(None, alias="entityId"),
    category: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """List upload records, newest first."""
    query = db.query(Upload)
    if entity_type:
        query = query.filter(Upload.entity_type == entity_type)
    if entity_id:
        query = query.filter(Upload.entity_id == entity_id)
    if category:
        query = query.filter(Upload.category == category)

    uploads = query.order_by(Upload.created_at.desc()).all()
    return ApiResponse(
        data=[UploadListItem.model_validate(u) for u in uploads],
        count=len(uploads),
    )


@router.get("/{upload_id}/download", response_model=ApiResponse[DownloadResponse])
async def get_download_url(
    upload_id: str,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(require_reader)
):
    """Short-lived presigned GET URL for a stored file."""
    upload = _get_upload_or_404(db, upload_id)
    return ApiResponse(data=DownloadResponse(
        download_url=storage.presign_get(upload.file_key),
        expires_in=storage.download_expires_in,
    ))


@router.delete("/{upload_id}", response_model=ApiResponse[None])
async def delete_upload(
    upload_id: str,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(require_writer)
):
    """Delete the stored object, then its record (uploader or admin)."""
    upload = _get_upload_or_404(db, upload_id)
    if upload.uploaded_by_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to delete this file."
        )

    try:
        storage.delete_object(upload.file_key)
    except (BotoCoreError, ClientError) as e:
        # The record is removed even if the object lingers
        logger.warning("Object delete failed for %s, removing record anyway: %s", upload.file_key, e)

    db.delete(upload)
    db.commit()
    return ApiResponse(message="File deleted successfully.")
