"""
Category Model Module

This module defines the Category model. Categories are named, optionally colored
labels that can be attached to any number of tasks through the TaskCategory
junction table.
"""
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime
from pydantic import field_validator

from app.core.time import utc_now


class CategoryBase(SQLModel):
    """
    Base Category model containing common fields.
    """
    name: str = Field(nullable=False, min_length=1)

    # Display hint only, e.g. "#ff0000". No format is enforced.
    color: Optional[str] = None


class Category(CategoryBase, table=True):
    """
    Category table model.

    Attributes:
        id: Auto-incrementing primary key
        name: Category label (required, non-empty)
        color: Optional display color
        created_at: UTC timestamp of when the category was created
    """
    __tablename__ = "categories"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Audit timestamp - set once on creation
    created_at: datetime = Field(default_factory=utc_now, nullable=False)


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""


class CategoryUpdate(SQLModel):
    """
    Schema for patching a category.

    Only fields present in the request body are applied; an explicit
    "color": null clears the color.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError("name cannot be null")
        return v


class CategoryRead(CategoryBase):
    """Schema for reading category data."""
    id: int
    created_at: datetime
