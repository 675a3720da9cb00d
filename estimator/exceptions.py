"""Exception hierarchy for the estimator."""

from __future__ import annotations


class EstimatorError(Exception):
    """Base exception for all estimator errors."""


class EstimatePersistenceError(EstimatorError):
    """Raised when an estimate snapshot cannot be saved, loaded, or removed."""


class EstimateNotFoundError(EstimatePersistenceError):
    """Raised when no estimate snapshot matches the requested id."""
