"""Vehicle model."""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from motorsports.database import Base, generate_uuid

MIN_VEHICLE_YEAR = 1900


class Vehicle(Base):
    """Vehicle model - race cars in the team registry."""
    __tablename__ = "vehicles"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    category = Column(String(100), nullable=False)
    number = Column(String(20), nullable=True)
    vin = Column(String(50), unique=True, index=True, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships - parts outlive the vehicle, their link is cleared
    parts = relationship("Part", back_populates="vehicle")
    setup_sheets = relationship("SetupSheet", back_populates="vehicle", cascade="all, delete-orphan")
    lap_times = relationship("LapTime", back_populates="vehicle", cascade="all, delete-orphan")
    uploads = relationship("Upload", back_populates="vehicle", cascade="all, delete-orphan")
