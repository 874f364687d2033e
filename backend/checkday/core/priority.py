"""
Task priority
"""
from enum import Enum


class Priority(str, Enum):
    HIGH = "high"
    MED = "med"
    LOW = "low"


def normalize_priority(value) -> Priority:
    """Return a valid priority, falling back to med for anything unknown"""
    if isinstance(value, Priority):
        return value
    if isinstance(value, str):
        try:
            return Priority(value)
        except ValueError:
            pass
    return Priority.MED
