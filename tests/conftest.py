# tests/conftest.py

import os

# main builds a module-level app on import; it must find a key.
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-at-least-32-chars"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEMO_DATA"] = "false"

from datetime import timedelta
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Database, create_db_and_tables, create_db_engine
from main import create_app
from models import utcnow
from services.auth import AuthService
from services.tasks import TaskService
from stores.tasks import TaskStore
from stores.users import UserStore
from utils.jwt import JWTManager
from utils.password import PasswordHasher

SECRET = os.environ["JWT_SECRET_KEY"]
ISSUER = "TaskManagementAPI"


@pytest.fixture()
def settings() -> Settings:
    return Settings(jwt_secret_key=SECRET, bcrypt_rounds=4, seed_demo_data=False)


@pytest.fixture()
def db() -> Database:
    """Fresh private in-memory database per test."""
    database = Database(create_db_engine("sqlite://"))
    create_db_and_tables(database.engine)
    return database


@pytest.fixture()
def user_store(db: Database) -> UserStore:
    return UserStore(db)


@pytest.fixture()
def task_store(db: Database) -> TaskStore:
    return TaskStore(db)


@pytest.fixture()
def hasher() -> PasswordHasher:
    # Minimum work factor keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture()
def jwt_manager() -> JWTManager:
    return JWTManager(SECRET, ISSUER, ISSUER)


@pytest.fixture()
def auth_service(user_store: UserStore, hasher: PasswordHasher, jwt_manager: JWTManager) -> AuthService:
    return AuthService(user_store, hasher, jwt_manager)


@pytest.fixture()
def task_service(task_store: TaskStore, user_store: UserStore) -> TaskService:
    return TaskService(task_store, user_store)


@pytest.fixture()
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture()
def tomorrow() -> str:
    return (utcnow() + timedelta(days=1)).isoformat()


@pytest.fixture()
def login(client: TestClient) -> Callable[..., Dict[str, str]]:
    """Register (if needed) and log in; returns Authorization headers."""

    def _login(username: str = "alice", email: str = "", password: str = "Passw0rd") -> Dict[str, str]:
        email = email or f"{username}@example.com"
        client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        resp = client.post("/api/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login
