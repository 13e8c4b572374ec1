"""Category management tools backed by the Learnify API."""

import logging
from typing import Annotated, Optional

import requests
from pydantic import Field

from ...config.settings import ApiSettings
from ...registry.markers import CancellationToken, tool, tool_service
from ...shared.api_service import BaseApiService
from .models import (
    CATEGORY_SUMMARY_FIELDS,
    CreateCategoryRequest,
    MoveCategoryRequest,
    UpdateCategoryRequest,
)

logger = logging.getLogger(__name__)

CategoryId = Annotated[int, Field(description="The category ID")]
Page = Annotated[int, Field(description="Page number (default: 1)")]
PageSize = Annotated[int, Field(description="Page size (default: 10)")]


@tool_service
class CategoryApiService(BaseApiService):
    """API service for category management and hierarchy operations."""

    def __init__(self, session: requests.Session, settings: ApiSettings):
        super().__init__(session, settings, "CategoryApiService")

    # ========================================================================
    # Category CRUD
    # ========================================================================

    @tool("Get all categories with optional filtering and pagination")
    async def get_categories(
        self,
        is_active: Annotated[Optional[bool], Field(description="Active status filter (optional)")] = None,
        parent_category_id: Annotated[Optional[int], Field(description="Parent category ID filter (optional)")] = None,
        root_only: Annotated[Optional[bool], Field(description="Show only root categories (optional)")] = None,
        search_term: Annotated[Optional[str], Field(description="Search term for name/description (optional)")] = None,
        page: Page = 1,
        page_size: PageSize = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting categories with filters - Page: {page}, PageSize: {page_size}")
        params = {
            "isActive": is_active,
            "parentCategoryId": parent_category_id,
            "rootOnly": root_only,
            "searchTerm": search_term,
            "page": page,
            "pageSize": page_size,
        }
        return await self._tool_result(
            "getting categories",
            self._get("/api/categories", params, cancellation_token),
            "Categories retrieved successfully",
            "No categories found",
        )

    @tool("Get category details by ID")
    async def get_category(
        self,
        category_id: CategoryId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting category with ID: {category_id}")
        return await self._tool_result(
            f"getting category {category_id}",
            self._get(f"/api/categories/{category_id}", cancellation_token=cancellation_token),
            "Category retrieved successfully",
            f"Category with ID {category_id} not found",
        )

    @tool("Create a new category")
    async def create_category(
        self,
        name: Annotated[str, Field(description="Category name")],
        description: Annotated[str, Field(description="Category description")],
        icon_url: Annotated[Optional[str], Field(description="Category icon URL (optional)")] = None,
        parent_category_id: Annotated[Optional[int], Field(description="Parent category ID (optional)")] = None,
        is_active: Annotated[bool, Field(description="Whether the category is active")] = True,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Creating category: {name}")
        request = CreateCategoryRequest(
            name=name,
            description=description,
            icon_url=icon_url,
            parent_category_id=parent_category_id,
            is_active=is_active,
        )
        return await self._tool_result(
            f"creating category {name}",
            self._post("/api/categories", request, cancellation_token=cancellation_token),
            "Category created successfully",
        )

    @tool("Update category details")
    async def update_category(
        self,
        category_id: CategoryId,
        name: Annotated[Optional[str], Field(description="Category name (optional)")] = None,
        description: Annotated[Optional[str], Field(description="Category description (optional)")] = None,
        icon_url: Annotated[Optional[str], Field(description="Category icon URL (optional)")] = None,
        parent_category_id: Annotated[Optional[int], Field(description="Parent category ID (optional)")] = None,
        is_active: Annotated[Optional[bool], Field(description="Whether the category is active (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Updating category with ID: {category_id}")
        request = UpdateCategoryRequest(
            name=name,
            description=description,
            icon_url=icon_url,
            parent_category_id=parent_category_id,
            is_active=is_active,
        )
        return await self._tool_result(
            f"updating category {category_id}",
            self._put(f"/api/categories/{category_id}", request, cancellation_token=cancellation_token),
            "Category updated successfully",
            f"Category with ID {category_id} not found",
        )

    @tool("Delete a category permanently")
    async def delete_category(
        self,
        category_id: CategoryId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Deleting category with ID: {category_id}")
        return await self._deletion_result(
            f"deleting category {category_id}",
            self._delete(f"/api/categories/{category_id}", cancellation_token),
            "Category deleted successfully",
            "Failed to delete category",
        )

    @tool("Activate a category to make it visible")
    async def activate_category(
        self,
        category_id: CategoryId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Activating category with ID: {category_id}")
        return await self._tool_result(
            f"activating category {category_id}",
            self._put(f"/api/categories/{category_id}/activate", cancellation_token=cancellation_token),
            "Category activated successfully",
            f"Category with ID {category_id} not found",
        )

    @tool("Deactivate a category to hide it")
    async def deactivate_category(
        self,
        category_id: CategoryId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Deactivating category with ID: {category_id}")
        return await self._tool_result(
            f"deactivating category {category_id}",
            self._put(f"/api/categories/{category_id}/deactivate", cancellation_token=cancellation_token),
            "Category deactivated successfully",
            f"Category with ID {category_id} not found",
        )

    # ========================================================================
    # Hierarchy
    # ========================================================================

    @tool("Get complete category hierarchy as a tree structure")
    async def get_category_tree(
        self,
        active_only: Annotated[Optional[bool], Field(description="Include only active categories (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info("Getting category tree")
        return await self._tool_result(
            "getting category tree",
            self._get("/api/categories/tree", {"activeOnly": active_only}, cancellation_token),
            "Category tree retrieved successfully",
            "No category tree found",
        )

    @tool("Get all subcategories of a specific category")
    async def get_subcategories(
        self,
        category_id: Annotated[int, Field(description="The parent category ID")],
        active_only: Annotated[Optional[bool], Field(description="Include only active subcategories (optional)")] = None,
        page: Page = 1,
        page_size: PageSize = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting subcategories for category ID: {category_id}")
        params = {"activeOnly": active_only, "page": page, "pageSize": page_size}
        return await self._tool_result(
            f"getting subcategories of {category_id}",
            self._get(f"/api/categories/{category_id}/subcategories", params, cancellation_token),
            "Subcategories retrieved successfully",
            f"No subcategories found for category ID {category_id}",
        )

    @tool("Move a category to a different parent or make it a root category")
    async def move_category(
        self,
        category_id: Annotated[int, Field(description="The category ID to move")],
        new_parent_category_id: Annotated[
            Optional[int], Field(description="New parent category ID (null for root category)")
        ] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Moving category {category_id} to parent {new_parent_category_id}")
        request = MoveCategoryRequest(new_parent_category_id=new_parent_category_id)
        return await self._tool_result(
            f"moving category {category_id}",
            self._put(f"/api/categories/{category_id}/move", request, cancellation_token=cancellation_token),
            "Category moved successfully",
            f"Category with ID {category_id} not found",
        )

    @tool("Get all root categories (categories without parents)")
    async def get_root_categories(
        self,
        active_only: Annotated[Optional[bool], Field(description="Include only active categories (optional)")] = None,
        page: Page = 1,
        page_size: PageSize = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info("Getting root categories")
        params = {"rootOnly": True, "isActive": active_only, "page": page, "pageSize": page_size}
        return await self._tool_result(
            "getting root categories",
            self._get("/api/categories", params, cancellation_token),
            "Root categories retrieved successfully",
            "No root categories found",
        )

    # ========================================================================
    # Courses and statistics
    # ========================================================================

    @tool("Get all courses in a specific category")
    async def get_category_courses(
        self,
        category_id: CategoryId,
        published_only: Annotated[Optional[bool], Field(description="Include only published courses (optional)")] = None,
        page: Page = 1,
        page_size: PageSize = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting courses for category ID: {category_id}")
        params = {"publishedOnly": published_only, "page": page, "pageSize": page_size}
        return await self._tool_result(
            f"getting courses for category {category_id}",
            self._get(f"/api/categories/{category_id}/courses", params, cancellation_token),
            "Category courses retrieved successfully",
            f"No courses found for category ID {category_id}",
        )

    @tool("Get comprehensive statistics for a category")
    async def get_category_stats(
        self,
        category_id: CategoryId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting statistics for category ID: {category_id}")
        return await self._tool_result(
            f"getting stats for category {category_id}",
            self._get(f"/api/categories/{category_id}/stats", cancellation_token=cancellation_token),
            "Category statistics retrieved successfully",
            f"Statistics for category ID {category_id} not found",
        )

    @tool("Check if a category exists")
    async def check_category_exists(
        self,
        category_id: Annotated[int, Field(description="The category ID to check")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Checking if category exists: {category_id}")
        return await self._exists_result(
            f"checking category {category_id}",
            self._get(f"/api/categories/{category_id}", cancellation_token=cancellation_token),
            "Category",
        )

    @tool("Get category summary (basic information only)")
    async def get_category_summary(
        self,
        category_id: CategoryId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting category summary for ID: {category_id}")
        return await self._tool_result(
            f"getting category summary {category_id}",
            self._select(
                self._get(f"/api/categories/{category_id}", cancellation_token=cancellation_token),
                CATEGORY_SUMMARY_FIELDS,
            ),
            "Category summary retrieved successfully",
            f"Category with ID {category_id} not found",
        )
