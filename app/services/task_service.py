"""Task repository.

Plain CRUD by id. Ownership is not checked here: the routers go through
``app.core.authorization`` first.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFound
from app.models.task import Task

logger = logging.getLogger(__name__)


def create_task(db: Session, user_id: int, fields: Dict[str, Any]) -> Task:
    task = Task(user_id=user_id, completed=False, **fields)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task id=%s created for user id=%s", task.id, user_id)
    return task


def list_tasks(db: Session, user_id: int) -> List[Task]:
    return db.query(Task).filter(Task.user_id == user_id).all()


def get_task(db: Session, task_id: int) -> Optional[Task]:
    return db.get(Task, task_id)


def update_task(db: Session, task_id: int, fields: Dict[str, Any]) -> Task:
    task = get_task(db, task_id)
    if task is None:
        raise NotFound("Task not found")

    for field, value in fields.items():
        setattr(task, field, value)

    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> bool:
    """Remove a task. Returns False when there was nothing to remove."""
    task = get_task(db, task_id)
    if task is None:
        return False
    db.delete(task)
    db.commit()
    logger.info("Task id=%s deleted", task_id)
    return True


def sort_tasks(tasks: List[Task], key: str) -> List[Task]:
    # même ordre que le client web; à égalité, les plus récentes d'abord
    newest_first = sorted(tasks, key=lambda t: (t.created_at, t.id), reverse=True)
    if key == "completed":
        return sorted(newest_first, key=lambda t: t.completed)
    if key == "priority":
        return sorted(newest_first, key=lambda t: t.priority, reverse=True)
    return newest_first
