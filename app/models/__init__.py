from .category import Category, CategoryCreate, CategoryRead, CategoryUpdate
from .task import (
    PRIORITY_RANK,
    Task,
    TaskCategory,
    TaskCreate,
    TaskPriority,
    TaskRead,
    TaskReadWithCategories,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    "Category", "CategoryCreate", "CategoryRead", "CategoryUpdate",
    "Task", "TaskCategory",
    "TaskCreate", "TaskUpdate", "TaskRead", "TaskReadWithCategories",
    "TaskStatus", "TaskPriority", "PRIORITY_RANK",
]
