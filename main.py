import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, load_settings
from database import Database, create_db_and_tables, create_db_engine
from middleware.errors import register_exception_handlers
from middleware.logging import register_request_logging
from routes import auth, tasks
from seed import seed_demo_data
from services.auth import AuthService
from services.tasks import TaskService
from stores.tasks import TaskStore
from stores.users import UserStore
from utils.jwt import JWTManager
from utils.password import PasswordHasher

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application with its stores and services

    Args:
        settings: Configuration; read from the environment when omitted

    Raises:
        ValueError: If the JWT signing key is not configured
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    # Create FastAPI app
    app = FastAPI(
        title="Task Management API",
        description="RESTful API for task management with per-user ownership",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # In-memory storage
    db = Database(create_db_engine(settings.database_url))
    create_db_and_tables(db.engine)

    users = UserStore(db)
    task_store = TaskStore(db)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    jwt_manager = JWTManager(settings.jwt_secret_key, settings.jwt_issuer, settings.jwt_audience)

    app.state.settings = settings
    app.state.jwt_manager = jwt_manager
    app.state.auth_service = AuthService(users, hasher, jwt_manager)
    app.state.task_service = TaskService(task_store, users)

    if settings.seed_demo_data:
        seed_demo_data(users, task_store, hasher)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_logging(app)
    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])

    @app.get("/")
    def read_root():
        """Root endpoint"""
        return {
            "message": "Task Management API is running",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    logger.info("Task Management API ready")
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
