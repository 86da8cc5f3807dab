"""Lap time model."""
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from motorsports.database import Base, generate_uuid


class LapSessionType(str, enum.Enum):
    PRACTICE = "Practice"
    QUALIFYING = "Qualifying"
    RACE = "Race"
    TEST = "Test"


class LapTime(Base):
    """A single timed lap for a driver in a vehicle at an event."""
    __tablename__ = "lap_times"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    driver_id = Column(String(36), ForeignKey("drivers.id"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    lap_number = Column(Integer, nullable=False)
    lap_time_ms = Column(Integer, nullable=False)
    session_type = Column(String(50), nullable=False)
    sector1_ms = Column(Integer, nullable=True)
    sector2_ms = Column(Integer, nullable=True)
    sector3_ms = Column(Integer, nullable=True)
    is_valid = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships
    driver = relationship("Driver", back_populates="lap_times")
    vehicle = relationship("Vehicle", back_populates="lap_times")
    event = relationship("Event", back_populates="lap_times")
