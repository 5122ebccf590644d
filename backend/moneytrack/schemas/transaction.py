"""
Transaction schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from moneytrack.models.enums import MoneyCategory, PaymentMethod, TransactionKind, RecurringInterval


class TransactionBase(BaseModel):
    date: datetime
    amount: Decimal = Field(ge=0)
    category: MoneyCategory = MoneyCategory.misc
    merchant: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = None
    kind: TransactionKind = TransactionKind.expense


class TransactionCreate(TransactionBase):
    # Setting an interval makes the new transaction a recurring template
    recurring_interval: Optional[RecurringInterval] = None


class TransactionUpdate(BaseModel):
    date: Optional[datetime] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    category: Optional[MoneyCategory] = None
    merchant: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = None
    kind: Optional[TransactionKind] = None
    is_template: Optional[bool] = None
    recurring_interval: Optional[RecurringInterval] = None


class TransactionResponse(BaseModel):
    id: str
    date: datetime
    amount: Decimal
    category: str
    merchant: Optional[str]
    payment_method: Optional[str]
    notes: Optional[str]
    kind: str
    is_template: bool
    recurring_interval: Optional[str]
    recurring_group_id: Optional[str]
    generated_from_recurring_id: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    pages: int
