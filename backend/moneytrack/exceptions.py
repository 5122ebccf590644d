"""Custom exception hierarchy for moneytrack."""


class MoneyTrackError(Exception):
    """Base exception for all moneytrack errors."""


class StoreError(MoneyTrackError):
    """Raised when the transaction store cannot complete an operation."""


class StoreReadError(StoreError):
    """Raised when a template or existence query fails."""


class StoreWriteError(StoreError):
    """Raised when staged records cannot be committed."""


class InvalidMonthError(MoneyTrackError, ValueError):
    """Raised when a month key cannot be parsed."""
