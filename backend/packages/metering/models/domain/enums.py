"""
Metering enums - reset cadences, consumption kinds and built-in tiers.
"""

from enum import Enum


class WindowKind(str, Enum):
    """Reset cadence of a quota window."""

    WEEKLY = "weekly"  # 7x24h from the configured week-start day at midnight
    MONTHLY = "monthly"  # first of month to first of next month


class ConsumptionKind(str, Enum):
    """Discriminator for consumption events."""

    SEARCH = "search"


class BuiltinTier(str, Enum):
    """
    Tier ids shipped in the default catalog.

    Catalogs accept any string id; these are just the stock ones.
    """

    STARTER = "starter"  # free, 100 searches/week
    PRO = "pro"  # 29€/mo, 1,000 searches/month
    AGENCY = "agency"  # 99€/mo, 5,000 searches/month
