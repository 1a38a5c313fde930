"""Metering API routes."""

from packages.metering.routes import plans, usage

__all__ = ["plans", "usage"]
