"""Part model - team inventory with low-stock tracking."""
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from motorsports.database import Base, generate_uuid

DEFAULT_LOW_STOCK_THRESHOLD = 2


class PartCategory(str, enum.Enum):
    ENGINE = "Engine"
    SUSPENSION = "Suspension"
    BRAKES = "Brakes"
    TYRES = "Tyres"
    BODYWORK = "Bodywork"
    DRIVETRAIN = "Drivetrain"
    FUEL_SYSTEM = "Fuel System"
    ELECTRICAL = "Electrical"
    ELECTRONICS = "Electronics"
    SAFETY = "Safety"
    CONSUMABLES = "Consumables"
    TOOLS = "Tools"
    OTHER = "Other"


class PartUnit(str, enum.Enum):
    PCS = "pcs"
    SETS = "sets"
    PAIRS = "pairs"
    LITERS = "liters"
    KG = "kg"
    G = "g"
    M = "m"
    BOXES = "boxes"


class Part(Base):
    __tablename__ = "parts"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(200), nullable=False)
    part_number = Column(String(100), nullable=True)
    category = Column(String(50), nullable=False, index=True)
    quantity = Column(Integer, default=0, nullable=False)
    unit = Column(String(20), default=PartUnit.PCS.value, nullable=False)
    cost = Column(Float, nullable=True)
    supplier = Column(String(200), nullable=True)
    location = Column(String(200), nullable=True)
    low_stock_threshold = Column(Integer, default=DEFAULT_LOW_STOCK_THRESHOLD, nullable=False)
    notes = Column(Text, nullable=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships
    vehicle = relationship("Vehicle", back_populates="parts")

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.low_stock_threshold
