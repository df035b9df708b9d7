"""
API Dependencies Module

This module provides FastAPI dependency functions shared by the endpoint modules.
"""
from datetime import datetime
from typing import Optional

from fastapi import Query

from app.models.task import TaskPriority, TaskStatus
from app.schemas.task_query import TaskFilter, TaskQuery, TaskSort


def get_task_query(
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    category_id: Optional[int] = None,
    due_before: Optional[datetime] = None,
    due_after: Optional[datetime] = None,
    sort: TaskSort = TaskSort.created_at_desc,
    limit: Optional[int] = Query(default=None, gt=0),
    offset: int = Query(default=0, ge=0),
) -> TaskQuery:
    """
    Dependency that builds a TaskQuery from flat query-string parameters.

    Example:
        GET /tasks?status=pending&category_id=3&sort=priority_desc&limit=20

    Args:
        status: Only tasks with this status
        priority: Only tasks with this priority
        category_id: Only tasks carrying this category
        due_before: Only tasks due at or before this instant
        due_after: Only tasks due at or after this instant
        sort: One of the TaskSort keys (default: created_at_desc)
        limit: Maximum number of tasks to return (default: all)
        offset: Number of tasks to skip

    Returns:
        TaskQuery: The validated query for the task service
    """
    task_filter = TaskFilter(
        status=status,
        priority=priority,
        category_id=category_id,
        due_before=due_before,
        due_after=due_after,
    )
    return TaskQuery(filter=task_filter, sort=sort, limit=limit, offset=offset)
