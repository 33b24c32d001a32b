# tests/test_task_store.py

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from errors import NotFoundError
from models import Task, TaskStatus, User, utcnow
from stores.tasks import TaskStore
from stores.users import UserStore


@pytest.fixture()
def owners(user_store: UserStore):
    alice = user_store.create(User(username="alice", email="alice@example.com", password_hash="h"))
    bob = user_store.create(User(username="bob", email="bob@example.com", password_hash="h"))
    return alice.id, bob.id


def _task(user_id: int, title: str = "Task") -> Task:
    return Task(
        user_id=user_id,
        title=title,
        description="",
        status=TaskStatus.PENDING,
        due_date=utcnow() + timedelta(days=1),
    )


def test_create_assigns_sequential_ids(task_store: TaskStore, owners) -> None:
    alice, bob = owners
    first = task_store.create(_task(alice))
    second = task_store.create(_task(bob))

    assert (first.id, second.id) == (1, 2)


def test_ids_are_not_reused_after_delete(task_store: TaskStore, owners) -> None:
    alice, _ = owners
    task_store.create(_task(alice))
    second = task_store.create(_task(alice))

    assert task_store.delete(second.id)
    assert task_store.create(_task(alice)).id == 3


def test_get_by_user_id_keeps_insertion_order(task_store: TaskStore, owners) -> None:
    alice, bob = owners
    task_store.create(_task(alice, "a1"))
    task_store.create(_task(bob, "b1"))
    task_store.create(_task(alice, "a2"))

    assert [t.title for t in task_store.get_by_user_id(alice)] == ["a1", "a2"]
    assert [t.title for t in task_store.get_by_user_id(bob)] == ["b1"]
    assert task_store.get_by_user_id(999) == []


def test_get_by_id(task_store: TaskStore, owners) -> None:
    alice, _ = owners
    created = task_store.create(_task(alice, "mine"))

    loaded = task_store.get_by_id(created.id)
    assert loaded.title == "mine"
    assert loaded.status == TaskStatus.PENDING
    assert loaded.due_date.tzinfo is not None
    assert task_store.get_by_id(42) is None


def test_update_replaces_fields(task_store: TaskStore, owners) -> None:
    alice, _ = owners
    task = task_store.create(_task(alice, "old"))

    task.title = "new"
    task.status = TaskStatus.COMPLETED
    task.updated_at = utcnow()
    task_store.update(task)

    loaded = task_store.get_by_id(task.id)
    assert loaded.title == "new"
    assert loaded.status == TaskStatus.COMPLETED
    assert loaded.updated_at is not None


def test_update_never_moves_owner(task_store: TaskStore, owners) -> None:
    alice, bob = owners
    task = task_store.create(_task(alice))

    task.user_id = bob
    task_store.update(task)

    assert task_store.get_by_id(task.id).user_id == alice


def test_update_of_missing_task_raises(task_store: TaskStore, owners) -> None:
    alice, _ = owners
    ghost = _task(alice)
    ghost.id = 123

    with pytest.raises(NotFoundError):
        task_store.update(ghost)


def test_delete_reports_removal(task_store: TaskStore, owners) -> None:
    alice, _ = owners
    task = task_store.create(_task(alice))

    assert task_store.delete(task.id) is True
    assert task_store.get_by_id(task.id) is None
    assert task_store.delete(task.id) is False


def test_concurrent_creates_get_distinct_sequential_ids(task_store: TaskStore, owners) -> None:
    alice, bob = owners
    count = 40
    barrier = threading.Barrier(count)

    def create(i: int) -> int:
        barrier.wait()
        return task_store.create(_task(alice if i % 2 else bob, f"t{i}")).id

    with ThreadPoolExecutor(max_workers=count) as pool:
        ids = list(pool.map(create, range(count)))

    assert sorted(ids) == list(range(1, count + 1))
    assert len(task_store.get_by_user_id(alice)) + len(task_store.get_by_user_id(bob)) == count
