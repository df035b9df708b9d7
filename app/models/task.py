"""
Task Model Module

This module defines the Task model and TaskCategory junction table for the
many-to-many relationship between tasks and categories. A task can carry any
number of categories, and a category can label any number of tasks.
"""
from enum import Enum
from typing import Optional, List
from sqlmodel import SQLModel, Field
from datetime import datetime
from pydantic import field_validator, ValidationInfo

from app.core.time import utc_now, to_utc
from app.models.category import CategoryRead


class TaskStatus(str, Enum):
    pending = "pending"
    completed = "completed"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


# Severity rank used for priority sorting; lexical order of the names is wrong.
PRIORITY_RANK = {
    TaskPriority.low: 0,
    TaskPriority.medium: 1,
    TaskPriority.high: 2,
}


class TaskCategory(SQLModel, table=True):
    """
    Junction table for many-to-many relationship between Tasks and Categories.

    Rows are removed by the database when either side is deleted (ON DELETE
    CASCADE). The table carries a surrogate key and no unique constraint on
    (task_id, category_id); readers de-duplicate instead.

    Attributes:
        id: Surrogate primary key
        task_id: Foreign key to the labelled task
        category_id: Foreign key to the attached category
    """
    __tablename__ = "task_categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", nullable=False, index=True, ondelete="CASCADE")
    category_id: int = Field(foreign_key="categories.id", nullable=False, index=True, ondelete="CASCADE")


class TaskBase(SQLModel):
    """
    Base Task model containing common fields.
    """
    # Basic task information
    title: str = Field(nullable=False, min_length=1)
    description: Optional[str] = None

    # Workflow fields
    status: TaskStatus = Field(default=TaskStatus.pending)
    priority: TaskPriority = Field(default=TaskPriority.medium)

    # Stored as UTC
    due_date: Optional[datetime] = None


class Task(TaskBase, table=True):
    """
    Task table model.
    """
    __tablename__ = "tasks"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Audit timestamps
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)


class TaskCreate(TaskBase):
    """
    Schema for creating a task.

    category_ids lists the categories to attach. Omitting it attaches none.
    """
    category_ids: Optional[List[int]] = None

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class TaskUpdate(SQLModel):
    """
    Schema for patching a task.

    Only fields present in the request body are applied. An explicit null
    clears description or due_date; title, status and priority cannot be null.
    category_ids, when present, replaces the task's whole category set.
    """
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    category_ids: Optional[List[int]] = None

    @field_validator("title", "status", "priority", "category_ids")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class TaskRead(TaskBase):
    """Schema for reading basic task data."""
    id: int
    created_at: datetime
    updated_at: datetime


class TaskReadWithCategories(TaskRead):
    """Schema for reading task data with its categories."""
    categories: List[CategoryRead] = []
