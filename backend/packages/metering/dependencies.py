"""FastAPI dependency providers for metering services."""

from packages.metering.services.admission_gate import AdmissionGate
from packages.metering.services.usage_reporting import UsageReportingService


def get_admission_gate() -> AdmissionGate:
    """Get AdmissionGate instance."""
    return AdmissionGate()


def get_usage_reporting_service() -> UsageReportingService:
    """Get UsageReportingService instance."""
    return UsageReportingService()
