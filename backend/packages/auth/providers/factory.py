"""Factory for the identity provider singleton."""

from typing import Dict, Optional

from packages.auth.providers.interface import IdentityProviderInterface
from packages.auth.providers.jwt_provider import JWTIdentityProvider
from packages.auth.providers.models import IdentityProvider


class IdentityProviderFactory:
    """Factory for creating and caching identity provider singletons."""

    _instances: Dict[IdentityProvider, IdentityProviderInterface] = {}

    @classmethod
    def get_provider(
        cls, provider: IdentityProvider = IdentityProvider.JWT
    ) -> IdentityProviderInterface:
        if provider not in cls._instances:
            cls._instances[provider] = cls._create_provider(provider)
        return cls._instances[provider]

    @classmethod
    def _create_provider(cls, provider: IdentityProvider) -> IdentityProviderInterface:
        if provider == IdentityProvider.JWT:
            return JWTIdentityProvider()
        raise ValueError(f"Unsupported identity provider: {provider}. Supported: JWT.")

    @classmethod
    def clear_cache(cls, provider: Optional[IdentityProvider] = None):
        """Clear cached provider instances."""
        if provider:
            cls._instances.pop(provider, None)
        else:
            cls._instances.clear()


def get_identity_provider() -> IdentityProviderInterface:
    """Convenience function to get the configured identity provider."""
    return IdentityProviderFactory.get_provider(IdentityProvider.JWT)
