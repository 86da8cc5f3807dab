"""Upload schemas: presign request, confirm request and metadata responses."""
from datetime import datetime
from typing import Optional

from pydantic import field_validator, model_validator

from motorsports.models.upload import (
    FileCategory, MAX_FILE_SIZE_BYTES, MIME_TYPES_BY_CATEGORY, UploadEntityType,
)
from motorsports.schemas.common import CamelModel, RequestModel, check_choice
from motorsports.schemas.user_brief import UserBrief
from motorsports.services.storage import file_key_prefix

ALLOWED_MIME_TYPES = tuple(t for types in MIME_TYPES_BY_CATEGORY.values() for t in types)


def check_mime_type(mime_type: str, category: str) -> str:
    """Allowed overall, then allowed for the declared category."""
    if mime_type not in ALLOWED_MIME_TYPES:
        raise ValueError("Unsupported file type.")
    if mime_type not in MIME_TYPES_BY_CATEGORY[category]:
        kind = "image" if category == FileCategory.PHOTO.value else "document"
        raise ValueError(f'For category "{category}", only {kind} MIME types are accepted.')
    return mime_type


class UploadTarget(RequestModel):
    entity_type: str
    entity_id: str
    file_name: str
    category: str

    @field_validator("entity_type")
    @classmethod
    def valid_entity_type(cls, v: str) -> str:
        return check_choice(v, UploadEntityType, "entityType")

    @field_validator("category")
    @classmethod
    def valid_category(cls, v: str) -> str:
        return check_choice(v, FileCategory, "category")


class PresignRequest(UploadTarget):
    """Ask for a presigned PUT URL before sending bytes to storage."""
    file_type: str

    @model_validator(mode="after")
    def mime_matches_category(self):
        check_mime_type(self.file_type, self.category)
        return self


class ConfirmRequest(UploadTarget):
    """Record metadata once the client has finished the direct upload."""
    file_key: str
    mime_type: str
    size_bytes: Optional[int] = None

    @field_validator("size_bytes")
    @classmethod
    def valid_size(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 0 <= v <= MAX_FILE_SIZE_BYTES:
            raise ValueError(f"sizeBytes must be between 0 and {MAX_FILE_SIZE_BYTES}")
        return v

    @model_validator(mode="after")
    def matches_upload_target(self):
        check_mime_type(self.mime_type, self.category)
        prefix = file_key_prefix(self.entity_type, self.entity_id, self.category)
        if not self.file_key.startswith(prefix) or ".." in self.file_key.split("/"):
            raise ValueError("fileKey does not belong to this entity and category.")
        return self


class PresignResponse(CamelModel):
    upload_url: str
    file_key: str
    public_url: str
    expires_in: int


class DownloadResponse(CamelModel):
    download_url: str
    expires_in: int


class UploadResponse(CamelModel):
    id: str
    entity_type: str
    entity_id: str
    file_name: str
    file_key: str
    file_url: str
    mime_type: str
    category: str
    size_bytes: Optional[int] = None
    uploaded_by_id: str
    vehicle_id: Optional[str] = None
    event_id: Optional[str] = None
    created_at: Optional[datetime] = None


class UploadListItem(UploadResponse):
    uploaded_by: UserBrief
