"""
Session Resolver Module

Turns an Authorization header into the id of the calling user.
"""

from ..errors import ErrorKind, LedgerError
from .session_store import SessionStore

BEARER_PREFIX = "Bearer "


def extract_token(authorization: str | None) -> str:
    """Strip the bearer prefix from an Authorization header value.

    Raises:
        LedgerError: UNAUTHENTICATED if the header is absent or carries no token
    """
    token = (authorization or "").replace(BEARER_PREFIX, "", 1).strip()
    if not token:
        raise LedgerError(ErrorKind.UNAUTHENTICATED, "Missing bearer token")
    return token


class SessionResolver:
    """Resolves bearer tokens against the session store."""

    def __init__(self, sessions: SessionStore):
        self.sessions = sessions

    def resolve(self, authorization: str | None) -> str | None:
        """Resolve an Authorization header to a user id.

        Args:
            authorization: Raw header value, e.g. "Bearer <token>"

        Returns:
            The session's user id, or None if no session has this token

        Raises:
            LedgerError: UNAUTHENTICATED if no token is present
        """
        token = extract_token(authorization)
        session = self.sessions.get(token)
        if session is None:
            return None
        return session.user_id
