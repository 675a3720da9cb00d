"""
Saved estimate snapshots.

A snapshot is a calculator's raw inputs plus its last computed line items,
stored verbatim. Inputs are never migrated on save; readers rebuild them
through the calculator's `from_partial`, which tolerates drift.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .config import settings
from .exceptions import EstimateNotFoundError, EstimatePersistenceError
from .schemas import EstimateSnapshot, ResultsData

logger = logging.getLogger(__name__)


def _results_json(results_data) -> Optional[dict]:
    if results_data is None:
        return None
    if isinstance(results_data, ResultsData):
        return {"results": [item.to_dict() for item in results_data.results]}
    if isinstance(results_data, list):
        results_data = {"results": results_data}
    return {"results": [item.to_dict() for item in ResultsData.model_validate(results_data).results]}


def _snapshot(row: models.CalculatorEstimate) -> EstimateSnapshot:
    return EstimateSnapshot(
        calculator_type=row.calculator_type,
        estimate_name=row.estimate_name,
        estimate_data=row.estimate_data or {},
        results_data=row.results_data,
        client_id=row.client_id,
    )


class EstimateStore:
    """Save and load estimate snapshots for one account."""

    def __init__(self, db: Session, account_id: str = None):
        self.db = db
        self.account_id = account_id or settings.DEFAULT_ACCOUNT_ID

    def _commit(self, action: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to %s estimate: %s", action, e)
            raise EstimatePersistenceError(f"Failed to {action} estimate: {e}") from e

    def _get(self, estimate_id: int, calculator_type: str = None) -> models.CalculatorEstimate:
        try:
            query = self.db.query(models.CalculatorEstimate).filter(
                models.CalculatorEstimate.id == estimate_id,
                models.CalculatorEstimate.account_id == self.account_id,
            )
            if calculator_type is not None:
                query = query.filter(models.CalculatorEstimate.calculator_type == calculator_type)
            row = query.first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise EstimatePersistenceError(f"Failed to load estimate: {e}") from e
        if row is None:
            raise EstimateNotFoundError(f"Estimate {estimate_id} not found")
        return row

    def save(self, calculator_type: str, name: str, estimate_data: dict,
             results_data=None, client_id: Optional[str] = None) -> int:
        if not name or not name.strip():
            raise ValueError("Estimate name is required")
        row = models.CalculatorEstimate(
            account_id=self.account_id,
            calculator_type=calculator_type,
            estimate_name=name.strip(),
            client_id=client_id,
            estimate_data=dict(estimate_data or {}),
            results_data=_results_json(results_data),
        )
        self.db.add(row)
        self._commit("save")
        self.db.refresh(row)
        logger.info("Saved %s estimate %r as #%d", calculator_type, row.estimate_name, row.id)
        return row.id

    def save_snapshot(self, snapshot: EstimateSnapshot) -> int:
        return self.save(snapshot.calculator_type, snapshot.estimate_name, snapshot.estimate_data,
                         snapshot.results_data, snapshot.client_id)

    def load(self, calculator_type: str, estimate_id: int) -> EstimateSnapshot:
        return _snapshot(self._get(estimate_id, calculator_type))

    def update(self, estimate_id: int, **changes) -> EstimateSnapshot:
        """Apply the given fields (estimate_name, estimate_data, results_data, client_id)."""
        values = {}
        for field, value in changes.items():
            if field == "results_data":
                value = _results_json(value)
            elif field == "estimate_data":
                value = dict(value or {})
            elif field == "estimate_name" and (not value or not value.strip()):
                raise ValueError("Estimate name is required")
            values[field] = value

        # nothing touches the row until every field is accepted
        row = self._get(estimate_id)
        for field, value in values.items():
            setattr(row, field, value)

        row.updated_at = datetime.utcnow()
        self._commit("update")
        self.db.refresh(row)
        return _snapshot(row)

    def delete(self, estimate_id: int):
        row = self._get(estimate_id)
        self.db.delete(row)
        self._commit("delete")
        logger.info("Deleted estimate #%d", estimate_id)

    def list(self, calculator_type: str = None, client_id: str = None, search: str = None,
             limit: int = None, offset: int = None) -> list:
        """Saved estimates, newest first."""
        query = self.db.query(models.CalculatorEstimate).filter(
            models.CalculatorEstimate.account_id == self.account_id,
        )
        if calculator_type:
            query = query.filter(models.CalculatorEstimate.calculator_type == calculator_type)
        if client_id:
            query = query.filter(models.CalculatorEstimate.client_id == client_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(models.CalculatorEstimate.estimate_name.ilike(pattern))
        query = query.order_by(models.CalculatorEstimate.created_at.desc(), models.CalculatorEstimate.id.desc())
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        try:
            return query.all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise EstimatePersistenceError(f"Failed to list estimates: {e}") from e
