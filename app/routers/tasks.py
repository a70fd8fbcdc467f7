from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Literal, Optional

from app.core.authorization import get_current_user, get_owned_task
from app.core.database import get_db
from app.core.errors import ValidationError
from app.models.task import Task
from app.models.user import User
from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from app.services import task_service

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    sort: Optional[Literal["createdAt", "completed", "priority"]] = Query(None),
):
    tasks = task_service.list_tasks(db, current_user.id)
    if sort:
        tasks = task_service.sort_tasks(tasks, sort)
    return tasks


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.create_task(db, current_user.id, task_data.model_dump())


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task: Task = Depends(get_owned_task)):
    return task


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_data: TaskUpdate,
    task: Task = Depends(get_owned_task),
    db: Session = Depends(get_db),
):
    update_data = task_data.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationError(detail="No fields to update")
    return task_service.update_task(db, task.id, update_data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task: Task = Depends(get_owned_task),
    db: Session = Depends(get_db),
):
    task_service.delete_task(db, task.id)
