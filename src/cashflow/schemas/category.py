"""Pydantic schemas for category API responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CategoryResponse(BaseModel):
    """Category data for API responses."""

    id: UUID
    title: str = Field(description="Unique category title")
    created_at: datetime = Field(description="Category creation timestamp")

    model_config = ConfigDict(from_attributes=True)


class CategoryListResult(BaseModel):
    """All known categories."""

    categories: list[CategoryResponse]
    total: int = Field(description="Total number of categories")
