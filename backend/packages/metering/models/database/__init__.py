"""Database models for metering."""

from packages.metering.models.database.consumption_event import (
    ConsumptionEventEntity,
)

__all__ = [
    "ConsumptionEventEntity",
]
