from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.core.time import to_utc
from app.models.task import TaskPriority, TaskStatus


class TaskSort(str, Enum):
    created_at_asc = "created_at_asc"
    created_at_desc = "created_at_desc"
    due_date_asc = "due_date_asc"
    due_date_desc = "due_date_desc"
    priority_asc = "priority_asc"
    priority_desc = "priority_desc"


# Predicates are AND-combined; unset fields don't filter
class TaskFilter(BaseModel):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category_id: Optional[int] = None
    due_before: Optional[datetime] = None  # due_date <= due_before
    due_after: Optional[datetime] = None   # due_date >= due_after

    @field_validator("due_before", "due_after")
    @classmethod
    def dates_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class TaskQuery(BaseModel):
    """
    Everything get_tasks needs: filter, ordering and page bounds.

    limit=None returns every matching task. offset and limit count distinct
    tasks, not joined category rows.
    """
    filter: Optional[TaskFilter] = None
    sort: TaskSort = TaskSort.created_at_desc
    limit: Optional[int] = Field(default=None, gt=0)
    offset: int = Field(default=0, ge=0)
