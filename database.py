from contextlib import contextmanager
from threading import RLock
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, SQLModel, Session


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create engine; in-memory SQLite keeps a single shared connection"""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)

    if _is_memory_sqlite(database_url):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo, connect_args={"check_same_thread": False})


def create_db_and_tables(engine: Engine) -> None:
    """Create all tables in the database"""
    SQLModel.metadata.create_all(engine)


class Database:
    """
    Engine plus the lock that serializes every unit of work against it.

    Stores never touch the engine directly; they open sessions through
    ``session()`` so id assignment and collection mutation happen under
    the same lock.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._lock = RLock()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Get a locked database session"""
        with self._lock:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
