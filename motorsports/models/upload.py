"""Upload metadata model.

The file bytes live in object storage; this row only points at the object key.
"""
import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from motorsports.database import Base, generate_uuid

MAX_FILE_SIZE_BYTES = 50 * 1024 * 1024


class UploadEntityType(str, enum.Enum):
    VEHICLE = "vehicle"
    EVENT = "event"


class FileCategory(str, enum.Enum):
    PHOTO = "photo"
    DOCUMENT = "document"


IMAGE_MIME_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
    "image/heic",
    "image/heif",
)

DOCUMENT_MIME_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
    "text/csv",
)

MIME_TYPES_BY_CATEGORY = {
    FileCategory.PHOTO.value: IMAGE_MIME_TYPES,
    FileCategory.DOCUMENT.value: DOCUMENT_MIME_TYPES,
}


class Upload(Base):
    __tablename__ = "uploads"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    entity_type = Column(String(20), nullable=False)
    entity_id = Column(String(36), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    file_key = Column(String(512), nullable=False)
    file_url = Column(String(1024), nullable=False)
    mime_type = Column(String(150), nullable=False)
    category = Column(String(20), nullable=False)
    size_bytes = Column(Integer, nullable=True)
    uploaded_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    # Mirrors entity_id for the matching entity type so metadata follows deletes
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationships
    uploaded_by = relationship("User", back_populates="uploads")
    vehicle = relationship("Vehicle", back_populates="uploads")
    event = relationship("Event", back_populates="uploads")
