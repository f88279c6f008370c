from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ..core.deps import get_task_handler
from ..schemas.task import DeleteResponse, TaskCreate, TaskResponse, TaskUpdate
from ..services import TaskHandler

router = APIRouter()


@router.get("", response_model=List[TaskResponse])
def get_tasks(
    user_id: Optional[str] = Query(None, alias="userId", description="Owner of the tasks"),
    handler: TaskHandler = Depends(get_task_handler)
):
    """Get every task owned by a user, oldest first"""
    return handler.list_tasks(user_id)


@router.post("", response_model=TaskResponse)
def create_task(task_data: TaskCreate, handler: TaskHandler = Depends(get_task_handler)):
    """Create a new task"""
    return handler.create_task(task_data)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    user_id: Optional[str] = Query(None, alias="userId", description="Restrict the update to this owner"),
    handler: TaskHandler = Depends(get_task_handler)
):
    """Update some fields of a task"""
    return handler.update_task(task_id, task_update, owner_id=user_id)


@router.delete("/{task_id}", response_model=DeleteResponse)
def delete_task(
    task_id: str,
    user_id: Optional[str] = Query(None, alias="userId", description="Restrict the delete to this owner"),
    handler: TaskHandler = Depends(get_task_handler)
):
    """Delete a task"""
    handler.delete_task(task_id, owner_id=user_id)
    return DeleteResponse(success=True)
