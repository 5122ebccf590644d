"""Pydantic schemas for recurring templates and generation runs."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from moneytrack.schemas.transaction import TransactionResponse


class RecurringTemplateResponse(BaseModel):
    id: str
    date: datetime
    amount: Decimal
    category: str
    merchant: Optional[str]
    kind: str
    recurring_interval: str
    recurring_group_id: str

    # Computed fields added by API
    instance_count: Optional[int] = None

    class Config:
        from_attributes = True


class GenerationResponse(BaseModel):
    """Result of one generation pass."""
    generated: List[TransactionResponse]
    total_generated: int
