"""Store access for the recurring engine."""

import logging
from datetime import datetime
from typing import List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moneytrack.exceptions import StoreReadError, StoreWriteError
from moneytrack.models.transaction import Transaction

logger = logging.getLogger(__name__)


class RecurringStore(Protocol):
    """What the engine needs from persistence."""

    def fetch_recurring_templates(self) -> List[Transaction]:
        ...

    def instance_exists(self, group_id: str, period_start: datetime, period_end: datetime) -> bool:
        ...

    def insert(self, transaction: Transaction) -> None:
        ...

    def commit(self) -> None:
        ...


class SqlAlchemyRecurringStore:
    """RecurringStore backed by a SQLAlchemy session.

    Inserts are staged on the session and only flushed by ``commit``. Records
    staged earlier in the same pass count towards ``instance_exists``.
    """

    def __init__(self, db: Session):
        self._db = db
        self._staged: List[Transaction] = []

    def fetch_recurring_templates(self) -> List[Transaction]:
        try:
            return self._db.query(Transaction).filter(
                Transaction.is_template.is_(True),
                Transaction.generated_from_recurring_id.is_(None),
            ).all()
        except SQLAlchemyError as e:
            raise StoreReadError(f"Template query failed: {e}") from e

    def instance_exists(self, group_id: str, period_start: datetime, period_end: datetime) -> bool:
        for staged in self._staged:
            if staged.generated_from_recurring_id == group_id and period_start <= staged.date < period_end:
                return True
        try:
            return self._db.query(Transaction.id).filter(
                Transaction.generated_from_recurring_id == group_id,
                Transaction.date >= period_start,
                Transaction.date < period_end,
            ).first() is not None
        except SQLAlchemyError as e:
            raise StoreReadError(f"Instance lookup failed for group {group_id}: {e}") from e

    def insert(self, transaction: Transaction) -> None:
        self._db.add(transaction)
        self._staged.append(transaction)

    def commit(self) -> None:
        if not self._staged:
            return
        try:
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StoreWriteError(f"Commit of {len(self._staged)} generated transactions failed: {e}") from e
        finally:
            self._staged = []
        logger.debug("Committed generated transactions")
