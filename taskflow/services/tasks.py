import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel, ValidationError as SchemaValidationError

from ..core import errors
from ..core.storage import StorageAdapter
from ..schemas.task import TaskCreate, TaskResponse, TaskUpdate

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _parse(schema: Type[SchemaT], payload: Union[SchemaT, Dict[str, Any]]) -> SchemaT:
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except SchemaValidationError as e:
        raise errors.ValidationError(str(e)) from e


class TaskHandler:
    """Task CRUD scoped by the owning user's ID"""

    def __init__(self, storage: StorageAdapter):
        self.storage = storage

    def list_tasks(self, user_id: Optional[str]) -> List[TaskResponse]:
        if not user_id or not user_id.strip():
            raise errors.BadRequest("User ID is required")

        try:
            tasks = self.storage.get_tasks(user_id)
        except Exception as e:
            logger.exception(f"Get tasks error: {e}")
            raise errors.InternalError("Failed to fetch tasks") from e

        return [TaskResponse.model_validate(task) for task in tasks]

    def create_task(self, payload: Union[TaskCreate, Dict[str, Any]]) -> TaskResponse:
        task_data = _parse(TaskCreate, payload)

        try:
            task = self.storage.create_task(task_data.model_dump())
        except Exception as e:
            logger.exception(f"Create task error: {e}")
            raise errors.InternalError("Failed to create task") from e

        return TaskResponse.model_validate(task)

    def update_task(
        self,
        task_id: str,
        fields: Union[TaskUpdate, Dict[str, Any]],
        owner_id: Optional[str] = None
    ) -> TaskResponse:
        """
        Merge the supplied fields into an existing task.

        Only fields present in the payload are written. When ``owner_id`` is
        given, a task owned by someone else is reported as missing.
        """
        task_update = _parse(TaskUpdate, fields)
        update_data = task_update.model_dump(exclude_unset=True)

        try:
            task = self.storage.update_task(task_id, update_data, user_id=owner_id)
        except Exception as e:
            logger.exception(f"Update task error: {e}")
            raise errors.InternalError("Failed to update task") from e

        if task is None:
            raise errors.NotFound("Task not found")

        return TaskResponse.model_validate(task)

    def delete_task(self, task_id: str, owner_id: Optional[str] = None) -> bool:
        try:
            deleted = self.storage.delete_task(task_id, user_id=owner_id)
        except Exception as e:
            logger.exception(f"Delete task error: {e}")
            raise errors.InternalError("Failed to delete task") from e

        if not deleted:
            raise errors.NotFound("Task not found")

        logger.info(f"Deleted task {task_id}")
        return True
