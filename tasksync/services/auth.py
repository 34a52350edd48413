"""Auth provider: current identity, sign-in/out and change listeners.

The authentication backend itself is external. This module only tracks
who is signed in, tells subscribers when that changes, and decodes the
bearer tokens the backend hands out.
"""

import logging
from collections.abc import Awaitable, Callable
from uuid import UUID

from jose import jwt
from jose.exceptions import JOSEError

from tasksync.models.identity import Identity

logger = logging.getLogger(__name__)

IdentityListener = Callable[[Identity | None, Identity | None], Awaitable[None]]


class InvalidTokenError(Exception):
    """Bearer token could not be decoded into an identity."""


def identity_from_token(
    token: str,
    secret: str,
    algorithm: str = "HS256",
) -> Identity:
    """Decode and verify a bearer JWT into an identity.

    Raises:
        InvalidTokenError: If no secret is configured, or the token is
            malformed, badly signed, expired or has no subject
    """
    if not secret:
        raise InvalidTokenError("Token verification secret is not configured")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"verify_aud": False},
        )
    except JOSEError as e:
        raise InvalidTokenError(str(e)) from e

    subject = payload.get("sub")
    if subject is None:
        raise InvalidTokenError("Token has no subject")

    try:
        user_id = UUID(str(subject))
    except ValueError as e:
        raise InvalidTokenError("Token subject is not a user id") from e

    return Identity(id=user_id, email=payload.get("email"), access_token=token)


class AuthProvider:
    """Holds the current identity and notifies listeners when it changes."""

    def __init__(self, identity: Identity | None = None) -> None:
        self._identity = identity
        self._listeners: list[IdentityListener] = []

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def sign_in(self, identity: Identity) -> None:
        await self._set_identity(identity)

    async def sign_out(self) -> None:
        await self._set_identity(None)

    async def _set_identity(self, identity: Identity | None) -> None:
        previous = self._identity
        self._identity = identity

        previous_id = previous.id if previous else None
        current_id = identity.id if identity else None
        if previous_id == current_id:
            return

        logger.info("Identity changed: %s -> %s", previous_id, current_id)
        for listener in list(self._listeners):
            await listener(previous, identity)
