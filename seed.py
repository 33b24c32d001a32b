import logging
from datetime import timedelta

from models import Task, TaskStatus, User, utcnow
from stores.tasks import TaskStore
from stores.users import UserStore
from utils.password import PasswordHasher

logger = logging.getLogger(__name__)

DEMO_USERS = [
    # username, email, password, days since registration
    ("demo_user", "demo@example.com", "Demo123!", 30),
    ("john_doe", "john.doe@example.com", "John123!", 15),
]

DEMO_TASKS = [
    # owner, title, description, status, due in days, created days ago, updated days ago
    (
        "demo_user",
        "Complete API Documentation",
        "Write comprehensive API documentation for the task management system",
        TaskStatus.IN_PROGRESS, 7, 5, 2,
    ),
    (
        "demo_user",
        "Implement User Authentication",
        "Add JWT-based authentication to secure the API endpoints",
        TaskStatus.COMPLETED, -1, 10, 1,
    ),
    (
        "john_doe",
        "Setup CI/CD Pipeline",
        "Configure automated deployment pipeline for the application",
        TaskStatus.PENDING, 14, 3, None,
    ),
]


def seed_demo_data(users: UserStore, tasks: TaskStore, hasher: PasswordHasher) -> bool:
    """
    Seed demo users and tasks into empty stores

    Returns:
        True if data was seeded, False if users already existed
    """
    if users.count() > 0:
        return False

    now = utcnow()
    user_ids = {}
    for username, email, password, age_days in DEMO_USERS:
        user = users.create(User(
            username=username,
            email=email,
            password_hash=hasher.hash(password),
            created_at=now - timedelta(days=age_days),
        ))
        user_ids[username] = user.id

    for owner, title, description, status, due_days, created_days, updated_days in DEMO_TASKS:
        tasks.create(Task(
            user_id=user_ids[owner],
            title=title,
            description=description,
            status=status,
            due_date=now + timedelta(days=due_days),
            created_at=now - timedelta(days=created_days),
            updated_at=now - timedelta(days=updated_days) if updated_days is not None else None,
        ))

    logger.info("Seeded %d demo users and %d demo tasks", len(DEMO_USERS), len(DEMO_TASKS))
    return True
