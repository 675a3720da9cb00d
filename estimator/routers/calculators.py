from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..accounts import get_account_id
from ..catalog import db_loader
from ..calculators.registry import get_calculator, list_calculators
from ..config import settings
from ..database import get_db
from ..models import PricingMode

router = APIRouter(prefix="/calculators", tags=["calculators"])


@router.get("/")
def list_calculator_types():
    return {"calculators": list_calculators()}


@router.post("/{calculator_type}/calculate", response_model=schemas.CalculateResponse)
def calculate(
    calculator_type: str,
    request: schemas.CalculateRequest,
    db: Session = Depends(get_db),
    account_id: str = Depends(get_account_id),
):
    """
    Run one calculation.

    Invalid input is not an HTTP error: the response has ok=false and names
    the missing fields. A failed override catalog load falls back to default
    prices and is reported in pricingError.
    """
    try:
        calculator = get_calculator(calculator_type)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    mode = request.pricing_mode or PricingMode(settings.DEFAULT_PRICING_MODE)
    resolver = db_loader(db, account_id).resolver(calculator_type, mode)
    outcome = calculator.calculate(request.inputs, resolver)

    return schemas.CalculateResponse(
        calculator_type=calculator_type,
        ok=outcome.ok,
        results=outcome.to_dicts(),
        failure=outcome.failure.to_dict() if outcome.failure else None,
        pricing_mode=resolver.mode,
        pricing_error=resolver.error,
    )
