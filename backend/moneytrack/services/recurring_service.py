"""Service for generating transactions from recurring templates."""

import logging
import threading
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from moneytrack.config import settings
from moneytrack.exceptions import StoreReadError
from moneytrack.models.enums import RecurringInterval
from moneytrack.models.recurrence import Template
from moneytrack.models.transaction import Transaction
from moneytrack.services.calendar_service import CalendarService, MonthKey
from moneytrack.services.recurring_scheduler import occurrence_dates, occurrence_in_month
from moneytrack.services.recurring_store import RecurringStore, SqlAlchemyRecurringStore

logger = logging.getLogger(__name__)

# One generation pass at a time per process.
_generation_lock = threading.Lock()


def period_bounds(
    interval: RecurringInterval,
    occurrence: datetime,
    calendar: CalendarService,
) -> tuple[datetime, datetime]:
    """Half-open dedupe bucket that ``occurrence`` falls in."""
    if interval == RecurringInterval.daily:
        return calendar.day_bounds(occurrence)
    if interval == RecurringInterval.weekly:
        return calendar.week_bounds(occurrence)
    if interval == RecurringInterval.monthly:
        return calendar.month_bounds(occurrence)
    raise ValueError(f"No period for interval {interval!r}")


def build_instance(template: Transaction, group_id: str, occurrence: datetime) -> Transaction:
    """Copy a template into a concrete, non-recurring transaction dated ``occurrence``."""
    return Transaction(
        id=str(uuid.uuid4()),
        date=occurrence,
        amount=template.amount,
        category=template.category,
        merchant=template.merchant,
        payment_method=template.payment_method,
        notes=template.notes,
        kind=template.kind,
        is_template=False,
        recurring_interval=None,
        recurring_group_id=group_id,
        generated_from_recurring_id=group_id,
        created_at=datetime.now(),
    )


class RecurringEngine:
    """
    Materializes instances from recurring templates.
    Never edits or deletes templates or previously generated instances.
    """

    def __init__(self, store: RecurringStore, calendar: Optional[CalendarService] = None):
        self.store = store
        self.calendar = calendar or CalendarService()

    def generate_due_transactions(self, as_of: Optional[datetime] = None) -> List[Transaction]:
        """
        Catch up every template up to ``as_of`` (default: now).
        Returns the newly created instances. Raises StoreWriteError if the final commit fails.
        """
        now = as_of or datetime.now()
        with _generation_lock:
            created: List[Transaction] = []
            for template, role in self._load_templates():
                for occurrence in occurrence_dates(template.date, role.interval, now, self.calendar):
                    instance = self._materialize(template, role, occurrence)
                    if instance is not None:
                        created.append(instance)
            self.store.commit()

        logger.info("Generated %d recurring transactions as of %s", len(created), now.isoformat())
        return created

    def generate_for_month(self, month: MonthKey) -> List[Transaction]:
        """Generate the single occurrence of each monthly template that lands in ``month``."""
        with _generation_lock:
            created: List[Transaction] = []
            for template, role in self._load_templates():
                if role.interval != RecurringInterval.monthly:
                    continue
                occurrence = occurrence_in_month(template.date, month, self.calendar)
                if occurrence is None:
                    continue
                instance = self._materialize(template, role, occurrence)
                if instance is not None:
                    created.append(instance)
            self.store.commit()

        logger.info("Generated %d recurring transactions for %s", len(created), month)
        return created

    def _load_templates(self) -> List[tuple[Transaction, Template]]:
        try:
            records = self.store.fetch_recurring_templates()
        except StoreReadError:
            logger.exception("Could not load recurring templates, skipping generation")
            return []

        templates = []
        for record in records:
            role = record.role
            if not isinstance(role, Template):
                logger.warning("Transaction %s is flagged recurring without a schedule, skipping", record.id)
                continue
            if role.interval not in RecurringInterval.schedulable():
                logger.warning(
                    "Template %s has unsupported interval %r, skipping",
                    record.id, record.recurring_interval,
                )
                continue
            templates.append((record, role))
        return templates

    def _materialize(self, template: Transaction, role: Template, occurrence: datetime) -> Optional[Transaction]:
        period_start, period_end = period_bounds(role.interval, occurrence, self.calendar)
        try:
            exists = self.store.instance_exists(role.group_id, period_start, period_end)
        except StoreReadError:
            logger.exception(
                "Could not check for an existing instance of group %s at %s, skipping",
                role.group_id, occurrence.isoformat(),
            )
            return None
        if exists:
            return None

        instance = build_instance(template, role.group_id, occurrence)
        self.store.insert(instance)
        logger.debug("Staged %s instance of group %s on %s", role.interval.value, role.group_id, occurrence.isoformat())
        return instance


def get_engine(db: Session) -> RecurringEngine:
    """Engine bound to a request session and the configured week start."""
    return RecurringEngine(
        SqlAlchemyRecurringStore(db),
        CalendarService(first_weekday=settings.first_weekday),
    )


def get_recurring_templates(db: Session) -> List[Transaction]:
    """Get all templates, oldest anchor first."""
    return db.query(Transaction).filter(
        Transaction.is_template.is_(True),
        Transaction.generated_from_recurring_id.is_(None),
    ).order_by(Transaction.date).all()


def get_group_instance_count(db: Session, group_id: str) -> int:
    """Get count of instances generated for a recurring group."""
    return db.query(Transaction).filter(
        Transaction.generated_from_recurring_id == group_id
    ).count()


def mark_transaction_recurring(transaction: Transaction, interval: RecurringInterval) -> None:
    """
    Turn a transaction into a template. The group id is assigned once and
    kept for the life of the series.
    """
    if transaction.generated_from_recurring_id is not None:
        raise ValueError(f"Transaction {transaction.id} was generated from a template and cannot recur")
    if interval == RecurringInterval.unknown:
        raise ValueError("Interval must be daily, weekly or monthly")
    transaction.is_template = True
    transaction.recurring_interval = interval.value
    if not transaction.recurring_group_id:
        transaction.recurring_group_id = str(uuid.uuid4())


def unmark_transaction_recurring(transaction: Transaction) -> None:
    """Stop a template from generating; existing instances keep their lineage."""
    transaction.is_template = False
    transaction.recurring_interval = None
