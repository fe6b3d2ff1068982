"""Chronology validators for member and life-event forms."""
from .life_events import (
    validate_achievement,
    validate_birth,
    validate_divorce,
    validate_marriage,
)
from .passing import check_passing, validate_passing
from .timeline import OCCUPATION, RESIDENCE, IntervalRole, TimelineValidator, validate

__all__ = [
    "TimelineValidator",
    "IntervalRole",
    "RESIDENCE",
    "OCCUPATION",
    "validate",
    "check_passing",
    "validate_passing",
    "validate_marriage",
    "validate_divorce",
    "validate_birth",
    "validate_achievement",
]
