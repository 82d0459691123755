"""
Pointsman configuration.

Usage in settings.py:
    POINTSMAN = {
        "INCOME_MULTIPLIER": 10,
        "CODE_BONUS": 50,
        "CAMPAIGN_ANCHOR": "2024-03-01",
    }
"""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Any

from django.conf import settings
from django.utils import timezone


@dataclass
class PointsmanSettings:
    """Pointsman configuration settings."""

    # Accrual
    INCOME_MULTIPLIER: int = 10
    CODE_BONUS: int = 50
    DATE_BONUS: int = 100

    # Campaign window (empty anchor = date the process started)
    CAMPAIGN_DURATION_DAYS: int = 7
    CAMPAIGN_ANCHOR: str = ""

    # Promotional codes
    PROMO_CODE_MIN: int = 1000
    PROMO_CODE_MAX: int = 9999

    # History listings
    HISTORY_LIMIT: int = 50

    @property
    def campaign_anchor(self) -> date:
        if self.CAMPAIGN_ANCHOR:
            return date.fromisoformat(self.CAMPAIGN_ANCHOR)
        return process_start_date()


@lru_cache(maxsize=1)
def process_start_date() -> date:
    """Date of the first campaign lookup in this process."""
    return timezone.localdate()


def get_pointsman_settings() -> PointsmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "POINTSMAN", {})
    return PointsmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_pointsman_settings(), name)


pointsman_settings = _LazySettings()
