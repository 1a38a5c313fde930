from abc import ABC, abstractmethod


class IdentityProviderInterface(ABC):
    """Interface for the external identity service."""

    @abstractmethod
    async def verify_credential(self, token: str) -> str:
        """
        Verify a bearer credential.

        Returns:
            The account id the credential was issued to

        Raises:
            InvalidCredential: The token is malformed, expired or forged
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name"""
        pass
