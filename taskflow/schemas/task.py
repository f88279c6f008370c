"""
Pydantic schemas for tasks.

The wire format is camelCase (``dueDate``, ``userId``); every schema also
accepts the snake_case field names.
"""
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, field_validator


def convert_datetime_to_utc(dt):
    """Convert datetime to UTC timezone-aware datetime"""
    if dt is None:
        return None

    if isinstance(dt, datetime):
        if dt.tzinfo is None:
            # Naive datetime, assume UTC
            return dt.replace(tzinfo=timezone.utc)
        else:
            # Already timezone-aware, convert to UTC
            return dt.astimezone(timezone.utc)

    return dt


class TaskCreate(BaseModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, max_length=200, description="Task title")
    description: Optional[str] = Field(None, max_length=1000, description="Task description")
    completed: bool = Field(False, description="Whether the task is done")
    due_date: Optional[datetime] = Field(None, alias="dueDate", description="Task due date")
    user_id: str = Field(..., min_length=1, alias="userId", description="Owning user ID")

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value):
        return convert_datetime_to_utc(value)

    class Config:
        populate_by_name = True


class TaskUpdate(BaseModel):
    """Schema for updating a task; every field is optional"""
    title: Optional[str] = Field(None, min_length=1, max_length=200, description="Task title")
    description: Optional[str] = Field(None, max_length=1000, description="Task description")
    completed: Optional[bool] = Field(None, description="Whether the task is done")
    due_date: Optional[datetime] = Field(None, alias="dueDate", description="Task due date")

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value):
        return convert_datetime_to_utc(value)

    @field_validator("title", "completed")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

    class Config:
        populate_by_name = True


class TaskResponse(BaseModel):
    """Schema for task response"""
    id: str = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    completed: bool = Field(..., description="Whether the task is done")
    due_date: Optional[datetime] = Field(None, alias="dueDate", description="Task due date")
    user_id: str = Field(..., alias="userId", description="User ID who owns the task")
    created_at: datetime = Field(..., alias="createdAt", description="Task creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Task update timestamp")

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def normalize_dates(cls, value):
        return convert_datetime_to_utc(value)

    class Config:
        from_attributes = True
        populate_by_name = True


class DeleteResponse(BaseModel):
    success: bool = True
