"""
FastAPI Authorization Dependencies for Microservices

The authorization gate turns request credentials into a VerifiedCaller
capability. Mutating endpoints depend on require_verified_caller and pass
the resulting value on to the service layer explicitly.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Iterable, Optional

from fastapi import Header, Request

from core.config import AlbumServiceConfig

logger = logging.getLogger(__name__)

INTERNAL_SERVICE_SUBJECT = "internal-service"
PUBLIC_SUBJECT = "public"


class NotAuthorizedError(Exception):
    """Raised when a request fails the authorization gate"""
    pass


@dataclass(frozen=True)
class VerifiedCaller:
    """Proof that the authorization gate passed for one request"""
    subject: str
    method: str  # session | internal | public


class AuthorizationGate:
    """
    Single pass/fail check for mutating operations.

    Authorization order:
    1. Public mode - every caller passes
    2. Internal service (X-Internal-Service + X-Internal-Service-Secret)
    3. Session token (X-Session-Token) from the configured token list
    """

    def __init__(
        self,
        public_mode: bool = False,
        session_tokens: Iterable[str] = (),
        internal_service_secret: Optional[str] = None,
    ):
        self.public_mode = public_mode
        self._session_tokens = tuple(token for token in session_tokens if token)
        self._internal_service_secret = internal_service_secret

    @classmethod
    def from_config(cls, config: AlbumServiceConfig) -> "AuthorizationGate":
        return cls(
            public_mode=config.public_mode,
            session_tokens=config.session_tokens,
            internal_service_secret=config.internal_service_secret,
        )

    def authorize(
        self,
        session_token: Optional[str] = None,
        internal_service: Optional[str] = None,
        internal_service_secret: Optional[str] = None,
    ) -> Optional[VerifiedCaller]:
        """
        Evaluate the gate.

        Returns:
            VerifiedCaller if authorized, None otherwise
        """
        if self.public_mode:
            return VerifiedCaller(subject=PUBLIC_SUBJECT, method="public")

        if internal_service == "true" and internal_service_secret:
            if self._internal_service_secret and secrets.compare_digest(
                internal_service_secret, self._internal_service_secret
            ):
                return VerifiedCaller(subject=INTERNAL_SERVICE_SUBJECT, method="internal")
            logger.warning("Invalid internal service secret")

        if session_token:
            for token in self._session_tokens:
                if secrets.compare_digest(session_token, token):
                    # Only a short prefix is used as the subject, never the full token
                    return VerifiedCaller(subject=f"session:{token[:6]}", method="session")

        return None


async def require_verified_caller(
    request: Request,
    x_session_token: Optional[str] = Header(None, alias="X-Session-Token"),
    x_internal_service: Optional[str] = Header(None, alias="X-Internal-Service"),
    x_internal_service_secret: Optional[str] = Header(None, alias="X-Internal-Service-Secret"),
) -> VerifiedCaller:
    """
    Authorization dependency for mutating endpoints.

    The gate instance is owned by the application (app.state.authorization_gate).

    Raises:
        NotAuthorizedError: Gate rejected the request
    """
    gate: Optional[AuthorizationGate] = getattr(request.app.state, "authorization_gate", None)
    if gate is None:
        logger.error("Authorization gate not configured, rejecting request")
        raise NotAuthorizedError("Unauthorized")

    caller = gate.authorize(
        session_token=x_session_token,
        internal_service=x_internal_service,
        internal_service_secret=x_internal_service_secret,
    )
    if caller is None:
        logger.debug(f"Unauthorized request to {request.url.path}")
        raise NotAuthorizedError("Unauthorized")
    return caller


__all__ = [
    "NotAuthorizedError",
    "VerifiedCaller",
    "AuthorizationGate",
    "require_verified_caller",
]
