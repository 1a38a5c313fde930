"""Shared-secret JWT identity provider."""

from typing import Any, Dict, Optional

import jwt

from common.core.config import settings
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.providers.interface import IdentityProviderInterface
from packages.auth.providers.models import IdentityProvider, InvalidCredential

logger = get_logger(__name__)


class JWTIdentityProvider(IdentityProviderInterface):
    """Verifies access tokens signed by the identity service; the account id is `sub`."""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        self.secret = secret or settings.auth_jwt_secret
        self.algorithm = algorithm or settings.auth_jwt_algorithm
        self.audience = audience if audience is not None else settings.auth_jwt_audience

    @trace_span
    async def verify_credential(self, token: str) -> str:
        claims = self._decode(token)

        account_id = claims.get("sub")
        if not account_id:
            raise InvalidCredential("Token missing 'sub' claim")
        return str(account_id)

    def get_provider_name(self) -> str:
        return IdentityProvider.JWT.value

    def _decode(self, token: str) -> Dict[str, Any]:
        options = {"require": ["sub", "exp"]}
        if not self.audience:
            options["verify_aud"] = False

        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience or None,
                options=options,
            )
        except jwt.PyJWTError as e:
            logger.warning(f"Token validation failed: {e}")
            raise InvalidCredential(f"Invalid token: {e}") from e
