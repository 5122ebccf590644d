"""
Enumerations for transaction fields.

Columns persist the raw string value. ``from_raw`` decodes a stored value and
falls back to a catch-all member when the value no longer matches a known case.
"""

import enum
from typing import Optional


class _LenientEnum(str, enum.Enum):
    """String enum that decodes unknown raw values to a fallback member."""

    @classmethod
    def fallback(cls) -> "_LenientEnum":
        raise NotImplementedError

    @classmethod
    def from_raw(cls, raw: Optional[str]):
        if raw is None:
            return cls.fallback()
        try:
            return cls(raw)
        except ValueError:
            return cls.fallback()


class MoneyCategory(_LenientEnum):
    """Spending category."""
    housing = "Housing"
    fixed_bills = "Fixed Bills"
    food = "Food"
    transportation = "Transportation"
    healthcare = "Healthcare"
    fun_lifestyle = "Fun/Lifestyle"
    shopping = "Shopping"
    subscriptions = "Subscriptions"
    savings = "Savings"
    investing = "Investing"
    travel = "Travel"
    gifts = "Gifts"
    misc = "Misc"

    @classmethod
    def fallback(cls) -> "MoneyCategory":
        return cls.misc


class PaymentMethod(_LenientEnum):
    """How a transaction was paid."""
    cash = "Cash"
    debit = "Debit"
    credit = "Credit"
    apple_pay = "Apple Pay"
    venmo = "Venmo"
    other = "Other"

    @classmethod
    def fallback(cls) -> "PaymentMethod":
        return cls.other


class TransactionKind(_LenientEnum):
    """Direction of money movement; amounts are always non-negative."""
    expense = "expense"
    income = "income"
    transfer = "transfer"

    @classmethod
    def fallback(cls) -> "TransactionKind":
        return cls.expense


class RecurringInterval(_LenientEnum):
    """Recurrence schedule of a template."""
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    unknown = "unknown"

    @classmethod
    def fallback(cls) -> "RecurringInterval":
        return cls.unknown

    @classmethod
    def schedulable(cls) -> list["RecurringInterval"]:
        return [cls.daily, cls.weekly, cls.monthly]
