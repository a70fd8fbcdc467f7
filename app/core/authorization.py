"""Authorization gate shared by every task endpoint."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import NotFound
from app.core.sessions import SessionStore, get_session_store
from app.models.task import Task
from app.models.user import User
from app.services import auth_service
from app.services.task_service import get_task


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
) -> User:
    # 401 avant tout accès au repository
    session_id = auth_service.session_id_from_request(request)
    return auth_service.current_user(db, store, session_id)


def get_owned_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Task:
    task = get_task(db, task_id)
    # tâche absente ou d'un autre user: même réponse, pour ne rien révéler
    if task is None or task.user_id != current_user.id:
        raise NotFound("Task not found")
    return task
