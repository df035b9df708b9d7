"""
Task Service Module

Query and mutation logic for tasks and their category associations.

Reads go through a single statement: the filtered, sorted and paginated task
ids are selected in a subquery, then outer-joined through task_categories to
categories so a task with no categories still comes back once. The flat
(task, category) rows are folded into one TaskReadWithCategories per task.

Writes run inside one transaction each (see app.services.base.atomic), so a
failure while replacing associations never leaves a half-written task behind.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import case
from sqlmodel import Session, select

from app.core.errors import NotFoundError, ReferentialIntegrityError
from app.core.time import utc_now
from app.models.category import Category, CategoryRead
from app.models.task import (
    PRIORITY_RANK,
    Task,
    TaskCategory,
    TaskCreate,
    TaskRead,
    TaskReadWithCategories,
    TaskUpdate,
)
from app.schemas.task_query import TaskFilter, TaskQuery, TaskSort
from app.services.base import atomic, reading

logger = logging.getLogger(__name__)


def _apply_filter(statement, task_filter: Optional[TaskFilter]):
    if task_filter is None:
        return statement

    if task_filter.status is not None:
        statement = statement.where(Task.status == task_filter.status)
    if task_filter.priority is not None:
        statement = statement.where(Task.priority == task_filter.priority)
    if task_filter.category_id is not None:
        # Restrict the driving rows, not the join, so matching tasks keep
        # their full category list and non-matching tasks vanish entirely.
        tagged_task_ids = select(TaskCategory.task_id).where(
            TaskCategory.category_id == task_filter.category_id
        )
        statement = statement.where(Task.id.in_(tagged_task_ids))
    if task_filter.due_before is not None:
        statement = statement.where(Task.due_date <= task_filter.due_before)
    if task_filter.due_after is not None:
        statement = statement.where(Task.due_date >= task_filter.due_after)
    return statement


def _order_by(sort: TaskSort) -> list:
    """
    ORDER BY clauses for a sort key, always ending in a task id tie-breaker.

    Tasks without a due date go last in both due_date directions.
    """
    if sort == TaskSort.created_at_asc:
        return [Task.created_at.asc(), Task.id.asc()]
    if sort == TaskSort.created_at_desc:
        return [Task.created_at.desc(), Task.id.desc()]
    if sort == TaskSort.due_date_asc:
        return [Task.due_date.is_(None), Task.due_date.asc(), Task.id.asc()]
    if sort == TaskSort.due_date_desc:
        return [Task.due_date.is_(None), Task.due_date.desc(), Task.id.desc()]

    priority_rank = case(
        *((Task.priority == priority, rank) for priority, rank in PRIORITY_RANK.items())
    )
    if sort == TaskSort.priority_asc:
        return [priority_rank.asc(), Task.id.asc()]
    return [priority_rank.desc(), Task.id.desc()]


def _aggregate(rows: Iterable[Tuple[Task, Optional[Category]]]) -> List[TaskReadWithCategories]:
    """
    Fold joined (task, category) rows into one object per task.

    Task order is first-seen order. A category is added only once per task
    even if the association table holds the same pair more than once.
    """
    tasks: Dict[int, Task] = {}
    categories: Dict[int, List[Category]] = {}

    for task, category in rows:
        if task.id not in tasks:
            tasks[task.id] = task
            categories[task.id] = []
        if category is None:
            continue
        if any(c.id == category.id for c in categories[task.id]):
            continue
        categories[task.id].append(category)

    return [
        TaskReadWithCategories(
            **TaskRead.model_validate(task).model_dump(),
            categories=[CategoryRead.model_validate(c) for c in categories[task_id]],
        )
        for task_id, task in tasks.items()
    ]


def _fetch_with_categories(db: Session, page, sort: TaskSort) -> List[TaskReadWithCategories]:
    page = page.subquery()
    statement = (
        select(Task, Category)
        .join(page, page.c.id == Task.id)
        .outerjoin(TaskCategory, TaskCategory.task_id == Task.id)
        .outerjoin(Category, Category.id == TaskCategory.category_id)
        .order_by(*_order_by(sort), TaskCategory.id)
    )
    return _aggregate(db.exec(statement).all())


def get_tasks(db: Session, query: Optional[TaskQuery] = None) -> List[TaskReadWithCategories]:
    """
    List tasks with their categories.

    Filters are AND-combined. offset/limit are applied to distinct tasks in
    sorted order before joining categories, so a page never cuts a task's
    category list short. limit=None returns everything after offset.
    """
    query = query or TaskQuery()

    page = _apply_filter(select(Task.id), query.filter)
    page = page.order_by(*_order_by(query.sort)).offset(query.offset)
    if query.limit is not None:
        page = page.limit(query.limit)

    with reading(db, "list tasks"):
        tasks = _fetch_with_categories(db, page, query.sort)
    logger.debug("get_tasks sort=%s offset=%s limit=%s -> %d tasks",
                 query.sort.value, query.offset, query.limit, len(tasks))
    return tasks


def get_task_by_id(db: Session, task_id: int) -> Optional[TaskReadWithCategories]:
    page = select(Task.id).where(Task.id == task_id)
    with reading(db, "load task"):
        tasks = _fetch_with_categories(db, page, TaskSort.created_at_desc)
    return tasks[0] if tasks else None


def _unique(ids: Sequence[int]) -> List[int]:
    """Drop repeated ids, keeping the first occurrence's position."""
    return list(dict.fromkeys(ids))


def _ensure_categories_exist(db: Session, category_ids: List[int]) -> None:
    if not category_ids:
        return
    found = set(db.exec(select(Category.id).where(Category.id.in_(category_ids))).all())
    missing = set(category_ids) - found
    if missing:
        raise ReferentialIntegrityError(missing)


def _attach_categories(db: Session, task_id: int, category_ids: List[int]) -> None:
    db.add_all(
        TaskCategory(task_id=task_id, category_id=category_id)
        for category_id in category_ids
    )


def create_task(db: Session, task_in: TaskCreate) -> TaskReadWithCategories:
    """
    Create a task and attach the requested categories.

    Raises:
        ReferentialIntegrityError: If any id in category_ids has no category.
            Nothing is written in that case.
    """
    category_ids = _unique(task_in.category_ids or [])

    with atomic(db, "create task"):
        _ensure_categories_exist(db, category_ids)

        task = Task.model_validate(task_in.model_dump(exclude={"category_ids"}))
        db.add(task)
        db.flush()  # assigns task.id
        task_id = task.id

        _attach_categories(db, task_id, category_ids)

    logger.info("Created task %s with %d categories", task_id, len(category_ids))
    return get_task_by_id(db, task_id)


def update_task(db: Session, task_id: int, task_in: TaskUpdate) -> TaskReadWithCategories:
    """
    Patch a task.

    Only fields present in task_in are written; updated_at is always bumped.
    When category_ids is present (even as []), the task's associations are
    replaced with exactly that set; when it is absent they are left alone.

    Raises:
        NotFoundError: If no task has this id
        ReferentialIntegrityError: If any id in category_ids has no category
    """
    data = task_in.model_dump(exclude_unset=True)
    category_ids = data.pop("category_ids", None)

    with atomic(db, "update task"):
        task = db.get(Task, task_id)
        if not task:
            raise NotFoundError("Task", task_id)

        if category_ids is not None:
            category_ids = _unique(category_ids)
            _ensure_categories_exist(db, category_ids)

        for key, value in data.items():
            setattr(task, key, value)
        task.updated_at = utc_now()
        db.add(task)

        if category_ids is not None:
            links = db.exec(select(TaskCategory).where(TaskCategory.task_id == task_id)).all()
            for link in links:
                db.delete(link)
            db.flush()
            _attach_categories(db, task_id, category_ids)

    logger.info("Updated task %s (fields: %s)", task_id,
                ", ".join(sorted(data)) or "-")
    return get_task_by_id(db, task_id)


def delete_task(db: Session, task_id: int) -> bool:
    """
    Delete a task. Its task_categories rows go with it via ON DELETE CASCADE.

    Returns False when there was nothing to delete.
    """
    with atomic(db, "delete task"):
        task = db.get(Task, task_id)
        if not task:
            return False
        db.delete(task)
    logger.info("Deleted task %s", task_id)
    return True
