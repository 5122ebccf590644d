"""
Recurrence role of a transaction.

A stored transaction is exactly one of: a plain transaction, a recurring
template, or an instance generated from a template.
"""

from dataclasses import dataclass
from typing import Optional, Union

from moneytrack.models.enums import RecurringInterval


@dataclass(frozen=True)
class Plain:
    """Ordinary transaction with no schedule attached."""


@dataclass(frozen=True)
class Template:
    """Definition of a recurring series."""
    interval: RecurringInterval
    group_id: str


@dataclass(frozen=True)
class GeneratedInstance:
    """Concrete occurrence produced from the template owning ``group_id``."""
    group_id: str


RecurrenceRole = Union[Plain, Template, GeneratedInstance]


def classify(
    is_template: bool,
    recurring_interval: Optional[str],
    recurring_group_id: Optional[str],
    generated_from_recurring_id: Optional[str],
) -> RecurrenceRole:
    """Derive the role from the persisted flag columns.

    A template flag without a schedule or without a group id is treated as a
    plain transaction so the engine never tries to expand it.
    """
    if generated_from_recurring_id is not None:
        return GeneratedInstance(group_id=generated_from_recurring_id)
    if is_template and recurring_interval and recurring_group_id:
        return Template(
            interval=RecurringInterval.from_raw(recurring_interval),
            group_id=recurring_group_id,
        )
    return Plain()
