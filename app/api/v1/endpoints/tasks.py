"""
Task Endpoints Module

This module provides CRUD endpoints for managing tasks with category support.
Tasks use a many-to-many relationship with categories through the TaskCategory
junction table.
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from app.db.session import get_db
from app.models.task import TaskCreate, TaskReadWithCategories, TaskUpdate
from app.schemas.task_query import TaskQuery
from app.services import tasks as task_service
from app.api import deps

router = APIRouter()


@router.get("", response_model=List[TaskReadWithCategories])
def list_tasks(
    query: TaskQuery = Depends(deps.get_task_query),
    db: Session = Depends(get_db),
):
    """
    Retrieve tasks with their categories.

    Supports filtering by status, priority, category and due-date range,
    sorting by created_at, due_date or priority in either direction, and
    limit/offset pagination over distinct tasks.
    """
    return task_service.get_tasks(db, query)


@router.get("/{task_id}", response_model=TaskReadWithCategories)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
):
    """
    Get a specific task by ID.

    Raises:
        HTTPException 404: If the task doesn't exist
    """
    task = task_service.get_task_by_id(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("", response_model=TaskReadWithCategories, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new task with optional categories.

    The body can include a "category_ids" field containing a list of category IDs
    to attach. Every ID must exist, otherwise nothing is created (400).
    """
    return task_service.create_task(db, task_in)


@router.patch("/{task_id}", response_model=TaskReadWithCategories)
def update_task(
    task_id: int,
    task_in: TaskUpdate,
    db: Session = Depends(get_db),
):
    """
    Update an existing task.

    Fields missing from the body are left untouched. "category_ids" replaces the
    task's categories when present (an empty list clears them) and is ignored
    when absent.
    """
    return task_service.update_task(db, task_id, task_in)


@router.delete("/{task_id}", response_model=Dict[str, Any])
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete a task and all its category links.

    Returns {"success": false} when the task does not exist.
    """
    return {"success": task_service.delete_task(db, task_id)}
