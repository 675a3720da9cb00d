from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any, Dict
from datetime import datetime
from .models import PricingMode


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses the snake_case names."""
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# --- Line items ---

class LineItem(CamelModel):
    label: str
    value: float
    unit: str
    cost: Optional[float] = None
    is_total: Optional[bool] = None
    is_warning: Optional[bool] = None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ValidationFailureOut(CamelModel):
    calculator_type: str
    missing: List[str] = []
    reason: str


# --- Override catalog ---

class MaterialEntry(BaseModel):
    """One override catalog entry as seen by the price resolver."""
    name: str
    category: str = ""
    price: float = Field(0.0, ge=0)
    unit_spec: Optional[str] = None
    archived: bool = False
    created_at: Optional[datetime] = None


class CustomMaterialBase(BaseModel):
    name: str
    category: str = ""
    price: float = Field(0.0, ge=0)
    unit: str = "each"
    unit_spec: Optional[str] = None
    sort_order: int = 0


class CustomMaterialCreate(CustomMaterialBase):
    pass


class CustomMaterialUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    unit_spec: Optional[str] = None
    sort_order: Optional[int] = None


class CustomMaterial(CustomMaterialBase):
    id: int
    config_id: int
    is_archived: bool
    created_at: datetime
    class Config:
        from_attributes = True


class CustomCalculatorConfig(BaseModel):
    id: int
    account_id: str
    calculator_type: str
    is_configured: bool
    materials: List[CustomMaterial] = []
    class Config:
        from_attributes = True


# --- Calculation requests ---

class CalculateRequest(CamelModel):
    inputs: Dict[str, Any] = {}
    pricing_mode: Optional[PricingMode] = None


class CalculateResponse(CamelModel):
    calculator_type: str
    ok: bool
    results: List[Dict[str, Any]] = []
    failure: Optional[ValidationFailureOut] = None
    pricing_mode: PricingMode
    pricing_error: Optional[str] = None


# --- Estimate snapshots ---

class ResultsData(BaseModel):
    results: List[LineItem] = []


class EstimateSnapshot(CamelModel):
    calculator_type: str
    estimate_name: str
    estimate_data: Dict[str, Any] = {}
    results_data: Optional[ResultsData] = None
    client_id: Optional[str] = None

    def to_dict(self) -> dict:
        data = self.model_dump(by_alias=True, exclude={"results_data"})
        if self.results_data is not None:
            data["resultsData"] = {"results": [item.to_dict() for item in self.results_data.results]}
        return data


class EstimateUpdate(CamelModel):
    estimate_name: Optional[str] = None
    estimate_data: Optional[Dict[str, Any]] = None
    results_data: Optional[ResultsData] = None
    client_id: Optional[str] = None


class EstimateSummary(CamelModel):
    id: int
    calculator_type: str
    estimate_name: str
    client_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
