"""Event model with type and status enumerations."""
import enum
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from motorsports.database import Base, generate_uuid


class EventType(str, enum.Enum):
    RACE = "Race"
    QUALIFYING = "Qualifying"
    PRACTICE = "Practice"
    TEST_DAY = "Test Day"
    TRACK_DAY = "Track Day"
    OTHER = "Other"


class EventStatus(str, enum.Enum):
    UPCOMING = "Upcoming"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Event(Base):
    """Event model - race weekends, test days and track days."""
    __tablename__ = "events"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(200), nullable=False)
    type = Column(String(50), nullable=False)
    venue = Column(String(200), nullable=False)
    location = Column(String(255), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(50), default=EventStatus.UPCOMING.value, nullable=False)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships
    setup_sheets = relationship("SetupSheet", back_populates="event", cascade="all, delete-orphan")
    lap_times = relationship("LapTime", back_populates="event", cascade="all, delete-orphan")
    uploads = relationship("Upload", back_populates="event", cascade="all, delete-orphan")
