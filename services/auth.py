import logging
from typing import Optional

from errors import ConflictError, UnauthorizedError
from models import User, utcnow
from schemas import LoginResponse, UserProfile
from stores.users import UserStore
from utils.jwt import JWTManager
from utils.password import PasswordHasher

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password."


class AuthService:
    """Registration, login and profile lookup"""

    def __init__(self, users: UserStore, hasher: PasswordHasher, jwt_manager: JWTManager):
        self._users = users
        self._hasher = hasher
        self._jwt = jwt_manager

    def register(self, username: str, email: str, password: str) -> UserProfile:
        """
        Register a new user

        Args:
            username: Desired username, unique ignoring case
            email: Email address, unique ignoring case
            password: Plain text password

        Returns:
            Profile of the created user

        Raises:
            ConflictError: If the username or email already exists
        """
        if self._users.username_exists(username):
            raise ConflictError("Username already exists.")

        if self._users.email_exists(email):
            raise ConflictError("Email already exists.")

        user = User(
            username=username,
            email=email,
            password_hash=self._hasher.hash(password),
            created_at=utcnow(),
        )
        created = self._users.create(user)

        logger.info("Registered user %s (%s)", created.username, created.id)
        return UserProfile.from_user(created)

    def login(self, username: str, password: str) -> LoginResponse:
        """
        Authenticate a user and issue a bearer token

        Raises:
            UnauthorizedError: If the user is unknown or the password is wrong
        """
        user = self._users.get_by_username(username)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Failed login attempt for %s", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token, expires = self._jwt.create_token(user)

        logger.info("Login: %s (%s)", user.username, user.id)
        return LoginResponse(token=token, expires=expires, user=UserProfile.from_user(user))

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        user = self._users.get_by_id(user_id)
        return UserProfile.from_user(user) if user else None
