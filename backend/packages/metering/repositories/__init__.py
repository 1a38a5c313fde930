"""Metering repositories."""

from packages.metering.repositories.consumption_repository import (
    ConsumptionEventRepository,
)

__all__ = [
    "ConsumptionEventRepository",
]
