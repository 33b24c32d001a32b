import logging
from typing import List, Optional

from errors import InvalidInputError
from models import Task, TaskStatus, utcnow
from schemas import TaskCreate, TaskPatch, TaskResponse, TaskUpdate
from stores.tasks import TaskStore
from stores.users import UserStore

logger = logging.getLogger(__name__)


class TaskService:
    """
    Task CRUD scoped to the authenticated user.

    A task owned by someone else is reported exactly like a missing one.
    """

    def __init__(self, tasks: TaskStore, users: UserStore):
        self._tasks = tasks
        self._users = users

    def _owned(self, task_id: int, user_id: int) -> Optional[Task]:
        task = self._tasks.get_by_id(task_id)
        if task is None or task.user_id != user_id:
            return None
        return task

    def list_for_user(self, user_id: int) -> List[TaskResponse]:
        return [TaskResponse.from_task(task) for task in self._tasks.get_by_user_id(user_id)]

    def get(self, task_id: int, user_id: int) -> Optional[TaskResponse]:
        task = self._owned(task_id, user_id)
        return TaskResponse.from_task(task) if task else None

    def create(self, data: TaskCreate, user_id: int) -> TaskResponse:
        """
        Create a task owned by user_id

        Raises:
            InvalidInputError: If user_id does not belong to a stored user
        """
        if self._users.get_by_id(user_id) is None:
            raise InvalidInputError("User not found.")

        task = Task(
            title=data.title,
            description=data.description,
            status=TaskStatus(data.status),
            due_date=data.due_date,
            user_id=user_id,
            created_at=utcnow(),
        )
        created = self._tasks.create(task)

        logger.info("User %s created task %s", user_id, created.id)
        return TaskResponse.from_task(created)

    def update_full(self, task_id: int, data: TaskUpdate, user_id: int) -> Optional[TaskResponse]:
        """Replace title, description, status and due date"""
        task = self._owned(task_id, user_id)
        if task is None:
            return None

        task.title = data.title
        task.description = data.description
        task.status = TaskStatus(data.status)
        task.due_date = data.due_date
        task.updated_at = utcnow()

        return TaskResponse.from_task(self._tasks.update(task))

    def update_partial(self, task_id: int, patch: TaskPatch, user_id: int) -> Optional[TaskResponse]:
        """
        Apply only the fields present in the patch

        An empty title counts as absent; an empty description clears the
        stored one. The update timestamp moves even when nothing else does.
        """
        task = self._owned(task_id, user_id)
        if task is None:
            return None

        if patch.title:
            task.title = patch.title
        if patch.description is not None:
            task.description = patch.description
        if patch.status is not None:
            task.status = TaskStatus(patch.status)
        if patch.due_date is not None:
            task.due_date = patch.due_date
        task.updated_at = utcnow()

        return TaskResponse.from_task(self._tasks.update(task))

    def delete(self, task_id: int, user_id: int) -> bool:
        if self._owned(task_id, user_id) is None:
            return False

        deleted = self._tasks.delete(task_id)
        if deleted:
            logger.info("User %s deleted task %s", user_id, task_id)
        return deleted
