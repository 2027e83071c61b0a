"""Recurrence and display rules for reminders.

``should_expire`` is never accepted from callers: it is recomputed from
``frequency`` on every write that carries a frequency.
"""
from app.models.reminder import Frequency, Reminder

VALID_FREQUENCIES = frozenset(item.value for item in Frequency)

STATUS_ACTIVE = "Active"
STATUS_COMPLETED = "Completed"


def is_valid_frequency(value) -> bool:
    if isinstance(value, Frequency):
        return True
    return isinstance(value, str) and value in VALID_FREQUENCIES


def derive_should_expire(frequency: Frequency | str) -> bool:
    """One-time reminders go stale once their date passes; recurring ones never do."""
    if not is_valid_frequency(frequency):
        raise ValueError(f"Invalid frequency: {frequency!r}")
    return Frequency(frequency) == Frequency.NEVER


def apply_frequency_rules(fields: dict) -> dict:
    """Drop any caller-supplied should_expire and derive it when frequency is present."""
    updates = dict(fields)
    updates.pop("should_expire", None)
    if "frequency" in updates:
        updates["frequency"] = Frequency(updates["frequency"])
        updates["should_expire"] = derive_should_expire(updates["frequency"])
    return updates


def display_status(reminder: Reminder) -> str:
    # Independent of should_expire, which is only a recurrence hint.
    return STATUS_COMPLETED if reminder.completed else STATUS_ACTIVE
