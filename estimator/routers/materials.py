"""
Account override catalog. Each account keeps one material list per calculator
type; in custom pricing mode its non-archived entries replace default prices.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..accounts import get_account_id
from ..catalog import get_or_create_config
from ..calculators.registry import has_calculator
from ..database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/materials", tags=["materials"])


def _config_for(calculator_type: str, db: Session, account_id: str) -> models.CustomCalculatorConfig:
    if not has_calculator(calculator_type):
        raise HTTPException(status_code=404, detail=f"Unknown calculator type: {calculator_type}")
    return get_or_create_config(db, account_id, calculator_type)


def _material_for(material_id: int, db: Session, account_id: str) -> models.CustomMaterial:
    material = db.query(models.CustomMaterial).join(models.CustomCalculatorConfig).filter(
        models.CustomMaterial.id == material_id,
        models.CustomCalculatorConfig.account_id == account_id,
    ).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found")
    return material


@router.get("/{calculator_type}", response_model=schemas.CustomCalculatorConfig)
def get_catalog(calculator_type: str, db: Session = Depends(get_db),
                account_id: str = Depends(get_account_id)):
    return _config_for(calculator_type, db, account_id)


@router.post("/{calculator_type}", response_model=schemas.CustomMaterial)
def add_material(calculator_type: str, material: schemas.CustomMaterialCreate,
                 db: Session = Depends(get_db), account_id: str = Depends(get_account_id)):
    config = _config_for(calculator_type, db, account_id)
    db_material = models.CustomMaterial(config_id=config.id, **material.model_dump())
    db.add(db_material)
    config.is_configured = True
    db.commit()
    db.refresh(db_material)
    logger.info("Added override %r to %s catalog for account %s", db_material.name, calculator_type, account_id)
    return db_material


@router.patch("/item/{material_id}", response_model=schemas.CustomMaterial)
def update_material(material_id: int, update: schemas.CustomMaterialUpdate,
                    db: Session = Depends(get_db), account_id: str = Depends(get_account_id)):
    material = _material_for(material_id, db, account_id)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(material, field, value)
    material.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(material)
    return material


@router.delete("/item/{material_id}")
def delete_material(material_id: int, db: Session = Depends(get_db),
                    account_id: str = Depends(get_account_id)):
    material = _material_for(material_id, db, account_id)
    db.delete(material)
    db.commit()
    return {"ok": True}


@router.post("/item/{material_id}/archive", response_model=schemas.CustomMaterial)
def archive_material(material_id: int, db: Session = Depends(get_db),
                     account_id: str = Depends(get_account_id)):
    """Archived entries stay in the catalog but never win a price lookup."""
    material = _material_for(material_id, db, account_id)
    material.is_archived = True
    db.commit()
    db.refresh(material)
    return material


@router.post("/item/{material_id}/unarchive", response_model=schemas.CustomMaterial)
def unarchive_material(material_id: int, db: Session = Depends(get_db),
                       account_id: str = Depends(get_account_id)):
    material = _material_for(material_id, db, account_id)
    material.is_archived = False
    db.commit()
    db.refresh(material)
    return material


@router.post("/{calculator_type}/reset", response_model=schemas.CustomCalculatorConfig)
def reset_catalog(calculator_type: str, db: Session = Depends(get_db),
                  account_id: str = Depends(get_account_id)):
    """Drop every override for this trade. Custom mode then prices at defaults."""
    config = _config_for(calculator_type, db, account_id)
    config.materials.clear()
    config.is_configured = False
    db.commit()
    db.refresh(config)
    logger.info("Reset %s catalog for account %s", calculator_type, account_id)
    return config
