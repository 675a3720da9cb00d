"""
Material price lookup with a two-tier fallback chain:
1. The account's override catalog (custom pricing mode only)
2. The default price each calculator passes in

Calculators never read the catalog directly. They ask a PriceResolver,
which is built once per calculation context and injected.
"""

import logging
import re
from typing import Optional

from ..models import PricingMode
from ..schemas import MaterialEntry

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"\d[\d,]*(?:\.\d+)?|\.\d+")


def parse_unit_spec(unit_spec: Optional[str]) -> Optional[float]:
    """
    Pull the first number out of a free-text unit spec.

    "100 sq ft" -> 100, "1,000 count" -> 1000, "0.5 gal" -> 0.5.
    Returns None when there is no number or it is not positive.
    """
    if not unit_spec:
        return None
    match = _NUMBER_RE.search(str(unit_spec))
    if not match:
        return None
    try:
        value = float(match.group(0).replace(",", ""))
    except ValueError:
        return None
    return value if value > 0 else None


class PriceResolver:
    """
    Resolves prices and unit values against an override catalog.

    Only non-archived entries participate. Names match case-insensitively,
    categories match exactly when given. When several entries match, the
    most recently created one wins; entries with equal or missing timestamps
    keep catalog order.

    `error` carries a catalog fetch failure out-of-band. A resolver with an
    error always resolves to defaults.
    """

    def __init__(self, mode=PricingMode.DEFAULT, materials=None, error: Optional[str] = None):
        self.mode = PricingMode(mode)
        self.error = error
        if error:
            self.mode = PricingMode.DEFAULT
        entries = [
            m if isinstance(m, MaterialEntry) else MaterialEntry.model_validate(m)
            for m in (materials or [])
        ]
        self._by_name = {}
        self._by_name_category = {}
        ordered = sorted(
            (e for e in entries if not e.archived),
            key=lambda e: e.created_at.timestamp() if e.created_at else float("-inf"),
            reverse=True,
        )
        for entry in ordered:
            name = entry.name.strip().lower()
            self._by_name.setdefault(name, entry)
            self._by_name_category.setdefault((name, entry.category), entry)

    @property
    def is_custom(self) -> bool:
        return self.mode == PricingMode.CUSTOM

    def find_material(self, material_key: str, category: Optional[str] = None) -> Optional[MaterialEntry]:
        """The winning override entry for a key, or None. Ignores pricing mode."""
        name = (material_key or "").strip().lower()
        if category:
            return self._by_name_category.get((name, category))
        return self._by_name.get(name)

    def resolve_price(self, material_key: str, default_price: float, category: Optional[str] = None) -> float:
        if not self.is_custom:
            return default_price
        entry = self.find_material(material_key, category)
        return entry.price if entry is not None else default_price

    def resolve_unit_value(self, material_key: str, default_value: float, category: Optional[str] = None) -> float:
        if not self.is_custom:
            return default_value
        entry = self.find_material(material_key, category)
        if entry is None or not entry.unit_spec:
            return default_value
        parsed = parse_unit_spec(entry.unit_spec)
        if parsed is None:
            logger.debug("Unparseable unit spec %r for %s, using default %s",
                         entry.unit_spec, material_key, default_value)
            return default_value
        return parsed

    def material_values(self, material_key: str, default_price: float,
                        default_unit_value: Optional[float] = None,
                        category: Optional[str] = None) -> dict:
        """Price and unit value together. unit_value is None when no default was given."""
        return {
            "price": self.resolve_price(material_key, default_price, category),
            "unit_value": (
                self.resolve_unit_value(material_key, default_unit_value, category)
                if default_unit_value is not None else None
            ),
        }
