from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from database import Database
from errors import ConflictError
from models import User, normalize_key


class UserStore:
    """User records; usernames and emails are unique ignoring case"""

    def __init__(self, db: Database):
        self._db = db

    def create(self, user: User) -> User:
        """
        Store a new user

        The id is assigned by the store: one past the highest id so far,
        or 1 for the first user.

        Raises:
            ConflictError: If the username or email is already taken
        """
        user.username_key = normalize_key(user.username)
        user.email_key = normalize_key(user.email)
        with self._db.session() as session:
            session.add(user)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ConflictError("Username or email already exists.")
            session.refresh(user)
            return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._db.session() as session:
            return session.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        with self._db.session() as session:
            query = select(User).where(User.username_key == normalize_key(username))
            return session.exec(query).first()

    def get_by_email(self, email: str) -> Optional[User]:
        with self._db.session() as session:
            query = select(User).where(User.email_key == normalize_key(email))
            return session.exec(query).first()

    def username_exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def count(self) -> int:
        with self._db.session() as session:
            return len(session.exec(select(User.id)).all())
