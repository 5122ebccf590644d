"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
import uuid

from moneytrack.dependencies import get_db
from moneytrack.models.enums import MoneyCategory, TransactionKind
from moneytrack.models.transaction import Transaction
from moneytrack.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse
)
from moneytrack.services import recurring_service

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _get_or_404(db: Session, transaction_id: str) -> Transaction:
    transaction = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    category: Optional[MoneyCategory] = None,
    kind: Optional[TransactionKind] = None,
    is_template: Optional[bool] = None,
    recurring_group_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List transactions with filtering and pagination"""
    query = db.query(Transaction)

    if start_date:
        query = query.filter(Transaction.date >= start_date)
    if end_date:
        query = query.filter(Transaction.date < end_date)
    if category:
        query = query.filter(Transaction.category == category.value)
    if kind:
        query = query.filter(Transaction.kind == kind.value)
    if is_template is not None:
        query = query.filter(Transaction.is_template == is_template)
    if recurring_group_id:
        query = query.filter(Transaction.recurring_group_id == recurring_group_id)

    total = query.count()

    query = query.order_by(Transaction.date.desc())
    query = query.offset((page - 1) * per_page).limit(per_page)

    transactions = query.all()
    pages = (total + per_page - 1) // per_page

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=total,
        page=page,
        pages=pages
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreate,
    db: Session = Depends(get_db)
):
    """Create a transaction, or a recurring template when an interval is given"""
    transaction = Transaction(
        id=str(uuid.uuid4()),
        date=data.date,
        amount=data.amount,
        category=data.category.value,
        merchant=data.merchant,
        payment_method=data.payment_method.value if data.payment_method else None,
        notes=data.notes,
        kind=data.kind.value,
        is_template=False,
        created_at=datetime.now(),
    )
    if data.recurring_interval:
        try:
            recurring_service.mark_transaction_recurring(transaction, data.recurring_interval)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    db.add(transaction)
    db.commit()
    db.refresh(transaction)

    return TransactionResponse.model_validate(transaction)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    db: Session = Depends(get_db)
):
    """Get a single transaction"""
    return TransactionResponse.model_validate(_get_or_404(db, transaction_id))


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    db: Session = Depends(get_db)
):
    """Update a transaction. Recurrence changes go through the recurring service."""
    transaction = _get_or_404(db, transaction_id)

    update_data = update.model_dump(exclude_unset=True)
    is_template = update_data.pop("is_template", None)
    interval = update_data.pop("recurring_interval", None)

    for field, value in update_data.items():
        setattr(transaction, field, getattr(value, "value", value))

    try:
        if is_template is False:
            recurring_service.unmark_transaction_recurring(transaction)
        elif interval is not None:
            recurring_service.mark_transaction_recurring(transaction, interval)
        elif is_template and not transaction.is_template:
            raise ValueError("recurring_interval is required to make a transaction recurring")
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    db.commit()
    db.refresh(transaction)

    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: str,
    db: Session = Depends(get_db)
):
    """Delete a transaction. Deleting a template leaves its generated instances in place."""
    transaction = _get_or_404(db, transaction_id)
    db.delete(transaction)
    db.commit()
    return {"deleted": True}
