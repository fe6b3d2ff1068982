"""family-timeline - chronology validation and change-log reconstruction.

Two pure entry points for family-tree editors:
- ``validate`` checks a person's biographical timeline before it is saved
- ``describe`` turns an audit entry's before/after snapshots into
  field-level changes and a feed sentence
"""

__version__ = "0.1.0"

from .changelog import ChangeDiffer, build_feed, describe, describe_entry
from .validation import TimelineValidator, validate, validate_passing

__all__ = [
    "__version__",
    "ChangeDiffer",
    "TimelineValidator",
    "build_feed",
    "describe",
    "describe_entry",
    "validate",
    "validate_passing",
]
