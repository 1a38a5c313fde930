from enum import Enum

from common.core.exceptions import ValidationError


class IdentityProvider(str, Enum):
    """Supported identity providers"""

    JWT = "jwt"


class InvalidCredential(ValidationError):
    """Bearer credential could not be verified."""

    pass
