from enum import Enum


class Environment(str, Enum):
    """Environment profiles."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class LockProviderType(str, Enum):
    """Distributed lock provider types."""

    REDIS = "redis"
    MEMORY = "memory"


class QuotaEnforcementMode(str, Enum):
    """How strictly concurrent admissions are serialized per account."""

    BOUNDED_OVERSHOOT = "bounded_overshoot"  # check-then-act, may admit limit+1
    STRICT = "strict"  # per-account lock around check, operation and record


class StorageFailurePolicy(str, Enum):
    """What the admission gate does when usage cannot be counted."""

    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"
