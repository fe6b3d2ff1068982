from __future__ import annotations

import os
from dataclasses import dataclass


def _f(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _i(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _s(name: str, default: str, allowed: tuple[str, ...]) -> str:
    value = os.getenv(name, default).strip().lower()
    for option in allowed:
        if option.lower() == value:
            return option
    return default


# Residence and occupation intervals must start strictly after the birth date,
# while burials may start on the date of passing itself.
INTERVAL_START_AFTER_BIRTH_STRICT = True
BURIAL_AFTER_PASSING_INCLUSIVE = True

DATE_STYLES = ("us", "iso")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class TimelineConfig:
    # Data-quality floor for a spouse relationship, in calendar years after birth
    min_spouse_age_years: int = _i("FAMILY_TIMELINE_MIN_SPOUSE_YEARS", 7)

    # "us" renders 5/15/2025, "iso" renders 2025-05-15
    date_display_style: str = _s("FAMILY_TIMELINE_DATE_STYLE", "us", DATE_STYLES)

    # Seconds allowed for each injected name lookup
    name_resolution_timeout: float = _f("FAMILY_TIMELINE_RESOLVE_TIMEOUT", 5.0)

    log_level: str = _s("FAMILY_TIMELINE_LOG_LEVEL", "INFO", LOG_LEVELS)


CONFIG = TimelineConfig()
