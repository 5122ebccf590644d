"""
Database models package.
"""

from moneytrack.models.enums import MoneyCategory, PaymentMethod, TransactionKind, RecurringInterval
from moneytrack.models.recurrence import Plain, Template, GeneratedInstance, RecurrenceRole, classify
from moneytrack.models.transaction import Transaction

__all__ = [
    "Transaction",
    "MoneyCategory",
    "PaymentMethod",
    "TransactionKind",
    "RecurringInterval",
    "Plain",
    "Template",
    "GeneratedInstance",
    "RecurrenceRole",
    "classify",
]
