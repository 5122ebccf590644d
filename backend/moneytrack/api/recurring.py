"""API endpoints for recurring templates and generation."""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from moneytrack.dependencies import get_db
from moneytrack.exceptions import InvalidMonthError, StoreWriteError
from moneytrack.schemas.recurring import GenerationResponse, RecurringTemplateResponse
from moneytrack.schemas.transaction import TransactionResponse
from moneytrack.services import recurring_service
from moneytrack.services.calendar_service import LAST_MONTH, MonthKey

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recurring", tags=["recurring"])


def _to_response(generated) -> GenerationResponse:
    return GenerationResponse(
        generated=[TransactionResponse.model_validate(t) for t in generated],
        total_generated=len(generated),
    )


@router.get("/templates", response_model=List[RecurringTemplateResponse])
def get_recurring_templates(db: Session = Depends(get_db)):
    """Get all recurring templates with their generated instance counts."""
    result = []
    for template in recurring_service.get_recurring_templates(db):
        if not template.recurring_interval or not template.recurring_group_id:
            continue
        response = RecurringTemplateResponse.model_validate(template)
        response.instance_count = recurring_service.get_group_instance_count(db, template.recurring_group_id)
        result.append(response)
    return result


@router.post("/generate", response_model=GenerationResponse)
def generate_due(
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (default: now)"),
    db: Session = Depends(get_db)
):
    """Catch up all recurring templates."""
    if as_of is not None:
        if as_of.tzinfo is not None and MonthKey.of(as_of) <= LAST_MONTH:
            as_of = as_of.astimezone().replace(tzinfo=None)
        if MonthKey.of(as_of) > LAST_MONTH:
            raise HTTPException(status_code=400, detail=f"as_of must be before {LAST_MONTH.next()}")

    engine = recurring_service.get_engine(db)
    try:
        generated = engine.generate_due_transactions(as_of)
    except StoreWriteError as e:
        logger.error("Recurring generation failed: %s", e)
        raise HTTPException(status_code=503, detail="Could not save generated transactions")
    return _to_response(generated)


@router.post("/generate/{month}", response_model=GenerationResponse)
def generate_month(
    month: str,
    db: Session = Depends(get_db)
):
    """Generate monthly templates for one month (YYYY-MM)."""
    try:
        month_key = MonthKey.parse(month)
    except InvalidMonthError as e:
        raise HTTPException(status_code=400, detail=str(e))

    engine = recurring_service.get_engine(db)
    try:
        generated = engine.generate_for_month(month_key)
    except StoreWriteError as e:
        logger.error("Recurring generation for %s failed: %s", month_key, e)
        raise HTTPException(status_code=503, detail="Could not save generated transactions")
    return _to_response(generated)
