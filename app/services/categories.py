"""
Category Service Module

Create, read, patch and delete categories. Association rows pointing at a
deleted category are removed by the database cascade on task_categories.
"""
import logging
from typing import List, Optional

from sqlmodel import Session, select

from app.core.errors import NotFoundError
from app.models.category import Category, CategoryCreate, CategoryUpdate
from app.services.base import atomic, reading

logger = logging.getLogger(__name__)


def create_category(db: Session, category_in: CategoryCreate) -> Category:
    category = Category.model_validate(category_in)
    with atomic(db, "create category"):
        db.add(category)
    db.refresh(category)
    logger.info("Created category %s (%r)", category.id, category.name)
    return category


def get_categories(db: Session) -> List[Category]:
    """All categories ordered by name."""
    with reading(db, "list categories"):
        statement = select(Category).order_by(Category.name, Category.id)
        return list(db.exec(statement).all())


def get_category_by_id(db: Session, category_id: int) -> Optional[Category]:
    with reading(db, "load category"):
        return db.get(Category, category_id)


def update_category(db: Session, category_id: int, category_in: CategoryUpdate) -> Category:
    """
    Apply the fields present in category_in to an existing category.

    Raises:
        NotFoundError: If no category has this id
    """
    with atomic(db, "update category"):
        category = db.get(Category, category_id)
        if not category:
            raise NotFoundError("Category", category_id)

        # Only fields the caller actually sent; an explicit null clears color
        for key, value in category_in.model_dump(exclude_unset=True).items():
            setattr(category, key, value)
        db.add(category)
    db.refresh(category)
    logger.info("Updated category %s", category_id)
    return category


def delete_category(db: Session, category_id: int) -> bool:
    """Delete a category. Returns False when there was nothing to delete."""
    with atomic(db, "delete category"):
        category = db.get(Category, category_id)
        if not category:
            return False
        db.delete(category)
    logger.info("Deleted category %s", category_id)
    return True
