from typing import List, Optional

from sqlmodel import select

from database import Database
from errors import NotFoundError
from models import Task

# Fields a stored task may change after creation; owner and creation time
# stay fixed.
MUTABLE_FIELDS = ("title", "description", "status", "due_date", "updated_at")


class TaskStore:
    """Task records; ids are sequential and never reused"""

    def __init__(self, db: Database):
        self._db = db

    def create(self, task: Task) -> Task:
        with self._db.session() as session:
            session.add(task)
            session.commit()
            session.refresh(task)
            return task

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with self._db.session() as session:
            return session.get(Task, task_id)

    def get_by_user_id(self, user_id: int) -> List[Task]:
        """All tasks owned by user_id, in insertion order"""
        with self._db.session() as session:
            query = select(Task).where(Task.user_id == user_id).order_by(Task.id)
            return list(session.exec(query).all())

    def update(self, task: Task) -> Task:
        """
        Overwrite the stored record with the same id

        Raises:
            NotFoundError: If no task with that id is stored
        """
        with self._db.session() as session:
            stored = session.get(Task, task.id)
            if stored is None:
                raise NotFoundError(f"Task {task.id} not found.")

            for field in MUTABLE_FIELDS:
                setattr(stored, field, getattr(task, field))

            session.add(stored)
            session.commit()
            session.refresh(stored)
            return stored

    def delete(self, task_id: int) -> bool:
        """Remove a task; returns whether anything was removed"""
        with self._db.session() as session:
            task = session.get(Task, task_id)
            if task is None:
                return False

            session.delete(task)
            session.commit()
            return True
