"""
Authentication service.

Login resolves the user and checks the password inside one borrowed
transaction; nothing is committed. The resulting identity is persisted
in the session store, never in the relational store.
"""

import logging
from typing import Tuple

from aloha.core.exceptions import AuthenticationError, InvalidRequestError
from aloha.core.security import verify_password
from aloha.core.session_store import SessionData, SessionStore
from aloha.core.transaction import Transaction
from aloha.models.user import User
from aloha.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """
    Credential checks and session issuance.

    Attributes:
        users: Repository used to resolve usernames
        sessions: Store receiving post-login identities
    """

    def __init__(self, users: UserRepository, sessions: SessionStore):
        self.users = users
        self.sessions = sessions

    async def authenticate(self, tx: Transaction, username: str, password: str) -> User:
        """
        Resolve ``username`` and verify ``password`` against its hash.

        Both reads share ``tx``, which stays open afterwards.

        Raises:
            InvalidRequestError: No user has this username
            AuthenticationError: The password does not match
        """
        user = await self.users.get_by_username(tx, username)
        if user is None:
            logger.info("Login for unknown user", extra={"operation": "login"})
            raise InvalidRequestError("User not found")

        if not verify_password(password, user.password_hash):
            logger.info(
                "Login with wrong password",
                extra={"operation": "login", "user_id": str(user.id)},
            )
            raise AuthenticationError("Invalid username or password")

        return user

    async def login(
        self, tx: Transaction, username: str, password: str
    ) -> Tuple[str, SessionData]:
        """
        Authenticate and open a session.

        Returns:
            The new session id and the identity stored under it
        """
        user = await self.authenticate(tx, username, password)
        session_id = await self.sessions.create(user.id, user.username)
        return session_id, SessionData(user_id=user.id, username=user.username)

    async def logout(self, session_id: str) -> bool:
        return await self.sessions.delete(session_id)
