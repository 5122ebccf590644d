"""
Transaction database model.
"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Text, Index, CheckConstraint
from moneytrack.database import Base
from moneytrack.models.enums import MoneyCategory, PaymentMethod, TransactionKind, RecurringInterval
from moneytrack.models.recurrence import RecurrenceRole, classify


class Transaction(Base):
    """Transaction model. Also stores recurring templates and their generated instances."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(DateTime, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)  # Always >= 0, direction in kind
    category = Column(String(50), nullable=False, default=MoneyCategory.misc.value)
    merchant = Column(String(255), nullable=True)
    payment_method = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    kind = Column(String(20), nullable=False, default=TransactionKind.expense.value)

    # Recurring
    is_template = Column(Boolean, default=False, nullable=False)
    recurring_interval = Column(String(20), nullable=True)
    recurring_group_id = Column(String(36), nullable=True, index=True)
    generated_from_recurring_id = Column(String(36), nullable=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index("idx_transaction_generated_date", "generated_from_recurring_id", "date"),
        CheckConstraint("amount >= 0", name="ck_transaction_amount_non_negative"),
        CheckConstraint(
            "generated_from_recurring_id IS NULL "
            "OR (NOT is_template AND recurring_interval IS NULL)",
            name="ck_transaction_generated_not_template",
        ),
    )

    @property
    def category_value(self) -> MoneyCategory:
        return MoneyCategory.from_raw(self.category)

    @property
    def payment_method_value(self) -> PaymentMethod:
        return PaymentMethod.from_raw(self.payment_method)

    @property
    def kind_value(self) -> TransactionKind:
        return TransactionKind.from_raw(self.kind)

    @property
    def interval_value(self) -> Optional[RecurringInterval]:
        if self.recurring_interval is None:
            return None
        return RecurringInterval.from_raw(self.recurring_interval)

    @property
    def role(self) -> RecurrenceRole:
        return classify(
            bool(self.is_template),
            self.recurring_interval,
            self.recurring_group_id,
            self.generated_from_recurring_id,
        )
