"""
Mock authentication against the seeded user directory
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional, Tuple

from ..config import settings
from ..exceptions import AuthenticationError
from ..models.common import get_current_utc_time
from ..models.user import User
from ..repositories.base import SessionRepository
from ..seed import default_users

logger = logging.getLogger(__name__)


class AuthService:
    """
    Email lookup login. Passwords are accepted as-is; sessions are opaque
    tokens kept in memory and the signed-in user is mirrored to storage.

    Sessions expire after ``session_ttl``. At most ``max_sessions`` are kept;
    the oldest is dropped when a login would exceed the cap.
    """

    def __init__(
        self,
        users: Optional[Iterable[User]] = None,
        session_ttl: Optional[timedelta] = None,
        max_sessions: Optional[int] = None
    ):
        users = list(users) if users is not None else default_users()
        self.users: Dict[str, User] = {u.email.lower(): u for u in users}
        self.session_ttl = session_ttl or timedelta(minutes=settings.session_ttl_minutes)
        self.max_sessions = max_sessions or settings.max_sessions
        # token -> (user, expires at); insertion order is login order
        self.sessions: Dict[str, Tuple[User, datetime]] = {}

    async def login(self, email: str, password: str, session_store: Optional[SessionRepository] = None):
        """
        Open a session for a directory user

        Returns:
            (token, user)

        Raises:
            AuthenticationError: unknown email
        """
        user = self.users.get(email.strip().lower())
        if user is None:
            logger.warning(f"Login failed for {email}")
            raise AuthenticationError("Invalid email or password")

        self.prune_sessions()
        while len(self.sessions) >= self.max_sessions:
            oldest = next(iter(self.sessions))
            del self.sessions[oldest]
            logger.info("Session limit reached, dropped the oldest session")

        token = secrets.token_urlsafe(32)
        self.sessions[token] = (user, get_current_utc_time() + self.session_ttl)
        if session_store is not None:
            await session_store.set_current_user(user.to_document())
        logger.info(f"User logged in: {user.email} ({user.role})")
        return token, user

    async def logout(self, token: Optional[str], session_store: Optional[SessionRepository] = None):
        entry = self.sessions.pop(token, None) if token else None
        if session_store is not None:
            await session_store.set_current_user(None)
        if entry:
            logger.info(f"User logged out: {entry[0].email}")

    def current_user(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None
        entry = self.sessions.get(token)
        if entry is None:
            return None
        user, expires_at = entry
        if expires_at <= get_current_utc_time():
            del self.sessions[token]
            return None
        return user

    def prune_sessions(self) -> int:
        """Drop expired sessions; returns how many were removed"""
        now = get_current_utc_time()
        expired = [token for token, (_, expires_at) in self.sessions.items() if expires_at <= now]
        for token in expired:
            del self.sessions[token]
        if expired:
            logger.info(f"Pruned {len(expired)} expired session(s)")
        return len(expired)


# Global auth service instance
auth_service = AuthService()
