"""Session tokens and the authentication provider.

Clients present ``Authorization: Bearer <user_id>.<signature>`` where the
signature is a hex HMAC-SHA256 of the user id keyed by the configured session
secret. :func:`authenticate` turns that header into a :data:`Session`, which is
either an :class:`AuthenticatedSession` or an :class:`AnonymousSession`. Bad or
missing tokens are not errors at this layer; routes decide what an anonymous
caller may do.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from hashlib import sha256
from typing import Union

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
TOKEN_SEPARATOR = "."


@dataclass(frozen=True)
class AuthenticatedSession:
    """A caller whose token was verified. ``user_id`` scopes every query."""

    user_id: str


@dataclass(frozen=True)
class AnonymousSession:
    """A caller without a usable session token."""


Session = Union[AuthenticatedSession, AnonymousSession]


def compute_session_signature(*, secret: bytes, user_id: str) -> str:
    """Compute the hexadecimal HMAC signature for ``user_id``."""

    signer = hmac.new(secret, digestmod=sha256)
    signer.update(user_id.encode("utf-8"))
    return signer.hexdigest()


def issue_session_token(*, secret: bytes, user_id: str) -> str:
    """Return a signed token for ``user_id``.

    User ids must be non-empty and may not contain the token separator, since
    the signature is split off at the last separator.
    """

    if not user_id or TOKEN_SEPARATOR in user_id:
        raise ValueError("User id must be non-empty and must not contain '.'.")
    return f"{user_id}{TOKEN_SEPARATOR}{compute_session_signature(secret=secret, user_id=user_id)}"


def authenticate(authorization: str | None, *, secret: bytes) -> Session:
    """Resolve an ``Authorization`` header value into a session."""

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return AnonymousSession()

    token = authorization[len(BEARER_PREFIX):].strip()
    user_id, _, provided_signature = token.rpartition(TOKEN_SEPARATOR)
    if not user_id or not provided_signature:
        return AnonymousSession()

    expected_signature = compute_session_signature(secret=secret, user_id=user_id)
    if not hmac.compare_digest(expected_signature, provided_signature):
        logger.info("Rejected session token with invalid signature")
        return AnonymousSession()

    return AuthenticatedSession(user_id=user_id)
