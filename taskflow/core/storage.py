"""
Storage adapter for users and tasks.

Handlers only talk to a ``StorageAdapter``; the SQLAlchemy implementation
maps each call onto a single query or mutation in its own session.
"""
import abc
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError

from .database import Database
from ..models.task import Task
from ..models.user import User

logger = logging.getLogger(__name__)


class DuplicateUsernameError(Exception):
    """Raised when a user with the same username already exists"""


class StorageAdapter(abc.ABC):
    """Persistence boundary used by the auth and task handlers"""

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abc.abstractmethod
    def create_user(self, data: Dict[str, Any]) -> User:
        ...

    @abc.abstractmethod
    def get_tasks(self, user_id: str) -> List[Task]:
        ...

    @abc.abstractmethod
    def get_task(self, task_id: str) -> Optional[Task]:
        ...

    @abc.abstractmethod
    def create_task(self, data: Dict[str, Any]) -> Task:
        ...

    @abc.abstractmethod
    def update_task(self, task_id: str, fields: Dict[str, Any], user_id: Optional[str] = None) -> Optional[Task]:
        ...

    @abc.abstractmethod
    def delete_task(self, task_id: str, user_id: Optional[str] = None) -> bool:
        ...

    def ping(self) -> bool:
        return True


class SqlAlchemyStorage(StorageAdapter):
    """StorageAdapter backed by a SQLAlchemy ``Database``"""

    def __init__(self, database: Database):
        self.database = database

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self.database.session() as db:
            return db.query(User).filter(User.username == username).first()

    def create_user(self, data: Dict[str, Any]) -> User:
        with self.database.session() as db:
            user = User(**data)
            db.add(user)
            try:
                db.commit()
            except IntegrityError as e:
                raise DuplicateUsernameError(data.get("username")) from e
            db.refresh(user)
            logger.info(f"Created user {user.id}")
            return user

    def get_tasks(self, user_id: str) -> List[Task]:
        with self.database.session() as db:
            return (
                db.query(Task)
                .filter(Task.user_id == user_id)
                .order_by(Task.created_at.asc())
                .all()
            )

    def get_task(self, task_id: str) -> Optional[Task]:
        with self.database.session() as db:
            return db.query(Task).filter(Task.id == task_id).first()

    def create_task(self, data: Dict[str, Any]) -> Task:
        with self.database.session() as db:
            task = Task(**data)
            db.add(task)
            db.commit()
            db.refresh(task)
            logger.info(f"Created task {task.id} for user {task.user_id}")
            return task

    def update_task(self, task_id: str, fields: Dict[str, Any], user_id: Optional[str] = None) -> Optional[Task]:
        with self.database.session() as db:
            query = db.query(Task).filter(Task.id == task_id)
            if user_id is not None:
                query = query.filter(Task.user_id == user_id)
            task = query.first()
            if task is None:
                return None

            for field, value in fields.items():
                setattr(task, field, value)

            db.commit()
            db.refresh(task)
            return task

    def delete_task(self, task_id: str, user_id: Optional[str] = None) -> bool:
        with self.database.session() as db:
            query = db.query(Task).filter(Task.id == task_id)
            if user_id is not None:
                query = query.filter(Task.user_id == user_id)
            deleted = query.delete(synchronize_session=False)
            db.commit()
            return deleted > 0

    def ping(self) -> bool:
        return self.database.check_connection()
