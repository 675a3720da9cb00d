from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
import enum


class PricingMode(str, enum.Enum):
    DEFAULT = "default"
    CUSTOM = "custom"


class CalculatorType(str, enum.Enum):
    CONCRETE = "concrete"
    DOORS_WINDOWS = "doors_windows"
    FENCE = "fence"
    FLOORING = "flooring"
    FOUNDATION = "foundation"
    SIDING = "siding"
    TILE = "tile"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    PAINT = "paint"
    JUNK_REMOVAL = "junk_removal"
    VENEER = "veneer"


# --- Account override catalog ---

class CustomCalculatorConfig(Base):
    """One per (account, calculator type). Owns the account's override materials."""
    __tablename__ = "custom_calculator_configs"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String, nullable=False, index=True)
    calculator_type = Column(String, nullable=False, index=True)
    is_configured = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    materials = relationship(
        "CustomMaterial", back_populates="config",
        cascade="all, delete-orphan", order_by="CustomMaterial.sort_order",
    )


class CustomMaterial(Base):
    __tablename__ = "custom_materials"

    id = Column(Integer, primary_key=True, index=True)
    config_id = Column(Integer, ForeignKey("custom_calculator_configs.id"), nullable=False)
    category = Column(String, nullable=False, default="")
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    unit = Column(String, default="each")
    unit_spec = Column(String, nullable=True)  # free text, e.g. "100 sq ft"
    is_archived = Column(Boolean, default=False)
    sort_order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    config = relationship("CustomCalculatorConfig", back_populates="materials")


# --- Saved estimates ---

class CalculatorEstimate(Base):
    """Named snapshot of a calculator's raw inputs and its last computed results."""
    __tablename__ = "calculator_estimates"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String, nullable=False, index=True)
    calculator_type = Column(String, nullable=False, index=True)
    estimate_name = Column(String, nullable=False)
    client_id = Column(String, nullable=True, index=True)
    estimate_data = Column(JSON, default=dict)
    results_data = Column(JSON, nullable=True)  # {"results": [LineItem, ...]}
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
