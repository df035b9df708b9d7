"""
Category Endpoints Module

This module provides CRUD endpoints for managing categories. Categories are shared
labels; deleting one detaches it from every task that carried it.
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from app.db.session import get_db
from app.models.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.services import categories as category_service

router = APIRouter()


@router.get("", response_model=List[CategoryRead])
def list_categories(db: Session = Depends(get_db)):
    """
    Retrieve all categories, ordered by name.
    """
    return category_service.get_categories(db)


@router.get("/{category_id}", response_model=CategoryRead)
def read_category(
    category_id: int,
    db: Session = Depends(get_db),
):
    category = category_service.get_category_by_id(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CategoryCreate,
    db: Session = Depends(get_db),
):
    return category_service.create_category(db, category_in)


@router.patch("/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    db: Session = Depends(get_db),
):
    """
    Update an existing category.

    Only the fields sent are changed; "color": null clears the color.
    """
    return category_service.update_category(db, category_id, category_in)


@router.delete("/{category_id}", response_model=Dict[str, Any])
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete a category.

    Returns {"success": false} when the category does not exist.
    """
    return {"success": category_service.delete_category(db, category_id)}
