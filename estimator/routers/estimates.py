from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..accounts import get_account_id
from ..calculators.registry import get_calculator, has_calculator
from ..database import get_db
from ..estimates import EstimateStore
from ..exceptions import EstimateNotFoundError, EstimatePersistenceError

router = APIRouter(prefix="/estimates", tags=["estimates"])


def _store(db: Session = Depends(get_db), account_id: str = Depends(get_account_id)) -> EstimateStore:
    return EstimateStore(db, account_id)


def _raise_http(e: Exception):
    if isinstance(e, EstimateNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ValueError):
        raise HTTPException(status_code=422, detail=str(e))
    raise HTTPException(status_code=500, detail=str(e))


@router.post("/")
def save_estimate(snapshot: schemas.EstimateSnapshot, store: EstimateStore = Depends(_store)):
    if not has_calculator(snapshot.calculator_type):
        raise HTTPException(status_code=404, detail=f"Unknown calculator type: {snapshot.calculator_type}")
    try:
        estimate_id = store.save_snapshot(snapshot)
    except (ValueError, EstimatePersistenceError) as e:
        _raise_http(e)
    return {"id": estimate_id, **snapshot.to_dict()}


@router.get("/", response_model=List[schemas.EstimateSummary])
def list_estimates(
    calculator_type: Optional[str] = None,
    client_id: Optional[str] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    store: EstimateStore = Depends(_store),
):
    try:
        rows = store.list(calculator_type=calculator_type, client_id=client_id, search=search,
                          limit=limit, offset=skip)
    except EstimatePersistenceError as e:
        _raise_http(e)
    return [schemas.EstimateSummary.model_validate(row, from_attributes=True) for row in rows]


@router.get("/{calculator_type}/{estimate_id}")
def load_estimate(calculator_type: str, estimate_id: int, normalize: bool = False,
                  store: EstimateStore = Depends(_store)):
    """
    Load a snapshot. With normalize=true, estimateData is rebuilt through the
    calculator's input model: stale fields dropped, missing ones defaulted.
    """
    try:
        snapshot = store.load(calculator_type, estimate_id)
    except EstimatePersistenceError as e:
        _raise_http(e)
    data = snapshot.to_dict()
    if normalize:
        try:
            calculator = get_calculator(calculator_type)
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e))
        data["estimateData"] = calculator.parse_inputs(snapshot.estimate_data).to_dict()
    return {"id": estimate_id, **data}


@router.patch("/{estimate_id}")
def update_estimate(estimate_id: int, update: schemas.EstimateUpdate, store: EstimateStore = Depends(_store)):
    changes = {field: getattr(update, field) for field in update.model_fields_set}
    try:
        snapshot = store.update(estimate_id, **changes)
    except (ValueError, EstimatePersistenceError) as e:
        _raise_http(e)
    return {"id": estimate_id, **snapshot.to_dict()}


@router.delete("/{estimate_id}")
def delete_estimate(estimate_id: int, store: EstimateStore = Depends(_store)):
    try:
        store.delete(estimate_id)
    except EstimatePersistenceError as e:
        _raise_http(e)
    return {"ok": True}
