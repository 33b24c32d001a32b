from fastapi import Request

from services.auth import AuthService
from services.tasks import TaskService


def get_auth_service(request: Request) -> AuthService:
    """Auth service wired by create_app - used as FastAPI dependency"""
    return request.app.state.auth_service


def get_task_service(request: Request) -> TaskService:
    """Task service wired by create_app - used as FastAPI dependency"""
    return request.app.state.task_service
