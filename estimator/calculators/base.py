"""
Abstract base class for all trade calculators.

Input: a trade's measurement model, or a raw dict (e.g. a loaded snapshot)
Output: CalculationOutcome, either an ordered LineItem list or a ValidationFailure
"""

import copy
import logging
import math
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel, to_snake

from ..schemas import LineItem
from .material_lookup import PriceResolver

logger = logging.getLogger(__name__)

TOTAL_LABEL = "Total Estimated Cost"

# Measurements can be unset (None) but never negative
Dimension = Optional[Annotated[float, Field(ge=0)]]
# Purchasable or installed counts
Count = Annotated[int, Field(ge=0)]


def new_entity_id() -> str:
    return uuid.uuid4().hex


def _find_key(container: dict, key) -> Optional[str]:
    """Match an error location against a dict that may use either camelCase or snake_case keys."""
    if not isinstance(key, str):
        return None
    for candidate in (key, to_snake(key), to_camel(key)):
        if candidate in container:
            return candidate
    return None


def _prune(container, loc) -> bool:
    """Remove the innermost value at `loc` that can be removed. Returns False if nothing matched."""
    if not loc:
        return False
    head, rest = loc[0], loc[1:]
    if isinstance(container, list):
        if not isinstance(head, int) or not 0 <= head < len(container):
            return False
        if rest and isinstance(container[head], (dict, list)) and _prune(container[head], rest):
            return True
        del container[head]
        return True
    if isinstance(container, dict):
        key = _find_key(container, head)
        if key is None:
            return False
        if rest and isinstance(container[key], (dict, list)) and _prune(container[key], rest):
            return True
        del container[key]
        return True
    return False


class MeasurementInput(BaseModel):
    """
    Base for every trade's input record.

    Numeric fields use None as the "unset" sentinel. Keys are accepted in
    snake_case or camelCase, so saved snapshots load as-is.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"
        allow_inf_nan = False

    @classmethod
    def from_partial(cls, data):
        """
        Build an input from possibly stale or partial data.

        Unknown keys are ignored, invalid values are dropped one at a time
        and replaced by their defaults, missing keys take their defaults.
        The caller's data is never modified.
        """
        if isinstance(data, cls):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True)
        if not isinstance(data, dict):
            return cls()

        payload = copy.deepcopy(data)
        while True:
            try:
                return cls.model_validate(payload)
            except ValidationError as exc:
                errors = exc.errors()
                if not errors or not _prune(payload, errors[0]["loc"]):
                    logger.debug("Discarding unusable %s data: %s", cls.__name__, exc)
                    return cls()
                logger.debug("Dropped invalid %s field %s", cls.__name__, errors[0]["loc"])

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class SubEntity(MeasurementInput):
    """A repeatable record (opening, gate, circuit...). `id` is an opaque handle."""

    id: str = Field(default_factory=new_entity_id)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if value is None or value == "":
            return new_entity_id()
        return str(value)


def add_entity(entities: list, entity) -> list:
    return [*entities, entity]


def update_entity(entities: list, entity_id: str, **changes) -> list:
    """Return a new list with the matching entity replaced by an updated copy."""
    return [
        e.model_copy(update=changes) if e.id == entity_id else e
        for e in entities
    ]


def remove_entity(entities: list, entity_id: str) -> list:
    return [e for e in entities if e.id != entity_id]


@dataclass
class ValidationFailure:
    calculator_type: str
    missing: List[str]
    reason: str

    def to_dict(self) -> dict:
        return {
            "calculatorType": self.calculator_type,
            "missing": list(self.missing),
            "reason": self.reason,
        }


@dataclass
class CalculationOutcome:
    results: List[LineItem] = field(default_factory=list)
    failure: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_dicts(self) -> list:
        return [item.to_dict() for item in self.results]


class BaseCalculator(ABC):
    """All trade calculators inherit from this."""

    calculator_type: str = ""
    input_model = MeasurementInput

    @abstractmethod
    def missing_fields(self, inputs) -> list:
        """
        Names of the required fields that are unset or invalid for the
        selected option branch. Empty list means the input can be calculated.
        """
        pass

    @abstractmethod
    def compute(self, inputs, resolver: PriceResolver) -> list:
        """Build the ordered LineItem list. Only called on valid input."""
        pass

    def parse_inputs(self, inputs):
        return self.input_model.from_partial(inputs)

    def is_valid(self, inputs) -> bool:
        return not self.missing_fields(self.parse_inputs(inputs))

    def calculate(self, inputs, resolver: PriceResolver = None) -> CalculationOutcome:
        """Validate, then compute. Invalid input yields a failure, never an exception."""
        inputs = self.parse_inputs(inputs)
        missing = self.missing_fields(inputs)
        if missing:
            reason = f"Missing or invalid: {', '.join(missing)}"
            logger.debug("%s calculation skipped. %s", self.calculator_type, reason)
            return CalculationOutcome(
                failure=ValidationFailure(self.calculator_type, missing, reason)
            )
        if resolver is None:
            resolver = PriceResolver()
        return CalculationOutcome(results=self.compute(inputs, resolver))

    # --- Helper methods for all calculators ---

    def units_needed(self, quantity: float) -> int:
        """Purchasable units. Always round UP, you can't buy half a bag."""
        # 50 x 1.1 is 55.000000000000007 in floating point; that is not a 56th foot
        return math.ceil(round(quantity, 9))

    def apply_waste(self, quantity: float, waste_percent: float) -> float:
        """Apply a waste allowance given in percent (10 means +10%)."""
        return quantity * (1 + (waste_percent or 0) / 100.0)

    def inches_to_feet(self, inches: float) -> float:
        return inches / 12.0

    def line_item(self, label: str, value: float, unit: str, cost: float = None) -> LineItem:
        """Display values are rounded to 2 decimals; costs are left as computed."""
        return LineItem(label=label, value=round(value, 2), unit=unit, cost=cost)

    def warning_line(self, label: str, value: float, unit: str) -> LineItem:
        return LineItem(label=label, value=round(value, 2), unit=unit, is_warning=True)

    def total_line(self, items: list, label: str = TOTAL_LABEL) -> LineItem:
        """Sum of every preceding cost. Not rounded, so the total always matches its lines."""
        total = sum(item.cost for item in items if item.cost is not None)
        return LineItem(label=label, value=total, unit="USD", is_total=True)


def is_set(value) -> bool:
    return value is not None


def is_positive(value) -> bool:
    return value is not None and value > 0
