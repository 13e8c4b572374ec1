"""Category request models."""

from typing import Optional

from ...shared.models import CamelModel


class CreateCategoryRequest(CamelModel):
    name: str
    description: str
    icon_url: Optional[str] = None
    parent_category_id: Optional[int] = None
    is_active: bool = True


class UpdateCategoryRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    icon_url: Optional[str] = None
    parent_category_id: Optional[int] = None
    is_active: Optional[bool] = None


class MoveCategoryRequest(CamelModel):
    # None moves the category to the root
    new_parent_category_id: Optional[int] = None


CATEGORY_SUMMARY_FIELDS = (
    "id", "name", "description", "iconUrl", "parentCategoryId",
    "parentCategoryName", "isActive", "courseCount", "createdAt",
)
