"""Metering services."""

from packages.metering.services.admission_gate import AdmissionGate
from packages.metering.services.plan_catalog import PlanCatalog, get_plan_catalog
from packages.metering.services.quota_calendar import QuotaCalendar
from packages.metering.services.quota_evaluator import QuotaEvaluator
from packages.metering.services.usage_reporting import UsageReportingService

__all__ = [
    "AdmissionGate",
    "PlanCatalog",
    "get_plan_catalog",
    "QuotaCalendar",
    "QuotaEvaluator",
    "UsageReportingService",
]
