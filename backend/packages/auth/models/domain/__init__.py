from packages.auth.models.domain.authenticated_account import AuthenticatedAccount

__all__ = [
    "AuthenticatedAccount",
]
