"""
Override catalog loading.

Each trade's catalog is fetched once per pricing session and cached. Loads
can overlap (the user flips pricing mode twice quickly); only the most
recently started load for a trade is allowed to land its result.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlalchemy.orm import Session

from . import models
from .calculators.material_lookup import PriceResolver
from .models import PricingMode
from .schemas import MaterialEntry

logger = logging.getLogger(__name__)


@dataclass
class CatalogState:
    entries: list = field(default_factory=list)
    error: Optional[str] = None
    loaded: bool = False


class CatalogLoader:
    """
    Per-trade catalog cache with last-write-wins loading.

    `fetch(calculator_type)` returns a list of MaterialEntry (or dicts) and
    may raise; a raised error is recorded, never propagated.
    """

    def __init__(self, fetch: Callable[[str], list]):
        self._fetch = fetch
        self._lock = threading.Lock()
        self._tickets = itertools.count(1)
        self._latest = {}
        self._states = {}

    def begin(self, calculator_type: str) -> int:
        """Start a load. Any load already in flight for this trade is superseded."""
        with self._lock:
            ticket = next(self._tickets)
            self._latest[calculator_type] = ticket
            return ticket

    def complete(self, calculator_type: str, ticket: int, entries) -> bool:
        with self._lock:
            if self._latest.get(calculator_type) != ticket:
                logger.warning("Discarding superseded catalog load for %s (ticket %s)",
                               calculator_type, ticket)
                return False
            self._states[calculator_type] = CatalogState(entries=list(entries or []), loaded=True)
        logger.info("Loaded %d override materials for %s", len(entries or []), calculator_type)
        return True

    def fail(self, calculator_type: str, ticket: int, message: str) -> bool:
        with self._lock:
            if self._latest.get(calculator_type) != ticket:
                logger.warning("Discarding superseded catalog failure for %s (ticket %s)",
                               calculator_type, ticket)
                return False
            self._states[calculator_type] = CatalogState(error=message or "Failed to load materials")
        logger.warning("Override catalog for %s unavailable: %s", calculator_type, message)
        return True

    def load(self, calculator_type: str) -> CatalogState:
        ticket = self.begin(calculator_type)
        try:
            entries = [
                e if isinstance(e, MaterialEntry) else MaterialEntry.model_validate(e)
                for e in (self._fetch(calculator_type) or [])
            ]
        except Exception as e:
            self.fail(calculator_type, ticket, str(e))
        else:
            self.complete(calculator_type, ticket, entries)
        return self.state(calculator_type)

    def state(self, calculator_type: str) -> CatalogState:
        with self._lock:
            return self._states.get(calculator_type, CatalogState())

    def invalidate(self, calculator_type: str):
        with self._lock:
            self._states.pop(calculator_type, None)
            self._latest.pop(calculator_type, None)

    def resolver(self, calculator_type: str, mode=PricingMode.DEFAULT) -> PriceResolver:
        """
        Resolver for one calculation. Custom mode loads the catalog on first use;
        a failed load degrades to default pricing with the error attached.
        """
        mode = PricingMode(mode)
        if mode == PricingMode.DEFAULT:
            return PriceResolver(PricingMode.DEFAULT)
        state = self.state(calculator_type)
        if not state.loaded and state.error is None:
            state = self.load(calculator_type)
        if state.error is not None:
            return PriceResolver(PricingMode.DEFAULT, error=state.error)
        return PriceResolver(PricingMode.CUSTOM, state.entries)


# --- Database-backed catalog ---

def get_or_create_config(db: Session, account_id: str, calculator_type: str) -> models.CustomCalculatorConfig:
    config = db.query(models.CustomCalculatorConfig).filter(
        models.CustomCalculatorConfig.account_id == account_id,
        models.CustomCalculatorConfig.calculator_type == calculator_type,
    ).first()
    if config is None:
        config = models.CustomCalculatorConfig(
            account_id=account_id, calculator_type=calculator_type, is_configured=False,
        )
        db.add(config)
        db.commit()
        db.refresh(config)
    return config


def fetch_materials(db: Session, account_id: str, calculator_type: str) -> list:
    """The account's override entries for one trade, in catalog (sort_order) order."""
    rows = db.query(models.CustomMaterial).join(models.CustomCalculatorConfig).filter(
        models.CustomCalculatorConfig.account_id == account_id,
        models.CustomCalculatorConfig.calculator_type == calculator_type,
    ).order_by(models.CustomMaterial.sort_order, models.CustomMaterial.id).all()
    return [
        MaterialEntry(
            name=row.name,
            category=row.category or "",
            price=row.price or 0.0,
            unit_spec=row.unit_spec,
            archived=bool(row.is_archived),
            created_at=row.created_at,
        )
        for row in rows
    ]


def db_loader(db: Session, account_id: str) -> CatalogLoader:
    return CatalogLoader(lambda calculator_type: fetch_materials(db, account_id, calculator_type))
