"""Setup sheet model - car configuration recorded per session."""
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from motorsports.database import Base, generate_uuid


class SessionType(str, enum.Enum):
    PRACTICE = "Practice"
    QUALIFYING = "Qualifying"
    RACE = "Race"
    TEST = "Test"
    WARM_UP = "Warm-Up"
    OTHER = "Other"


class DownforceLevel(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class SetupSheet(Base):
    __tablename__ = "setup_sheets"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    session_type = Column(String(50), nullable=False)
    session_number = Column(Integer, nullable=True)
    
    # Tyres
    tyre_front_left = Column(String(50), nullable=True)
    tyre_front_right = Column(String(50), nullable=True)
    tyre_rear_left = Column(String(50), nullable=True)
    tyre_rear_right = Column(String(50), nullable=True)
    tyre_pressure_front_left = Column(Float, nullable=True)
    tyre_pressure_front_right = Column(Float, nullable=True)
    tyre_pressure_rear_left = Column(Float, nullable=True)
    tyre_pressure_rear_right = Column(Float, nullable=True)
    
    # Suspension
    ride_height_front = Column(Float, nullable=True)
    ride_height_rear = Column(Float, nullable=True)
    spring_rate_front = Column(Float, nullable=True)
    spring_rate_rear = Column(Float, nullable=True)
    damper_front = Column(String(50), nullable=True)
    damper_rear = Column(String(50), nullable=True)
    camber_front = Column(Float, nullable=True)
    camber_rear = Column(Float, nullable=True)
    toe_in_front = Column(Float, nullable=True)
    toe_in_rear = Column(Float, nullable=True)
    
    # Aero
    front_wing_angle = Column(Float, nullable=True)
    rear_wing_angle = Column(Float, nullable=True)
    downforce_level = Column(String(20), nullable=True)
    
    # Brakes
    brake_bias = Column(Float, nullable=True)
    brake_compound = Column(String(50), nullable=True)
    
    # Engine / drivetrain
    engine_map = Column(String(50), nullable=True)
    differential_entry = Column(Float, nullable=True)
    differential_mid = Column(Float, nullable=True)
    differential_exit = Column(Float, nullable=True)
    
    fuel_load = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    driver_feedback = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships
    vehicle = relationship("Vehicle", back_populates="setup_sheets")
    event = relationship("Event", back_populates="setup_sheets")
    created_by = relationship("User", back_populates="setup_sheets")
