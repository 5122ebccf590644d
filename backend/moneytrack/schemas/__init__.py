"""
Pydantic schemas package.
"""

from moneytrack.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)
from moneytrack.schemas.recurring import (
    RecurringTemplateResponse,
    GenerationResponse,
)

__all__ = [
    "TransactionBase",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "RecurringTemplateResponse",
    "GenerationResponse",
]
