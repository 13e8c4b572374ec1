"""Course management tools backed by the Learnify API."""

import logging
from typing import Annotated, Optional

import requests
from pydantic import Field

from ...config.settings import ApiSettings
from ...registry.markers import CancellationToken, tool, tool_service
from ...shared.api_service import BaseApiService
from .models import COURSE_SUMMARY_FIELDS, CourseLevel, CreateCourseRequest, UpdateCourseRequest

logger = logging.getLogger(__name__)

_LEVEL_HELP = "1=Beginner, 2=Intermediate, 3=Advanced, 4=Expert"


@tool_service
class CourseApiService(BaseApiService):
    """API service for course management operations."""

    def __init__(self, session: requests.Session, settings: ApiSettings):
        super().__init__(session, settings, "CourseApiService")

    # ========================================================================
    # Course CRUD
    # ========================================================================

    @tool("Get all courses with optional filtering and pagination")
    async def get_courses(
        self,
        category_id: Annotated[Optional[int], Field(description="Category ID filter (optional)")] = None,
        instructor_id: Annotated[Optional[int], Field(description="Instructor ID filter (optional)")] = None,
        level: Annotated[Optional[int], Field(description=f"Course level filter ({_LEVEL_HELP})")] = None,
        is_published: Annotated[Optional[bool], Field(description="Published status filter (optional)")] = None,
        is_featured: Annotated[Optional[bool], Field(description="Featured status filter (optional)")] = None,
        min_price: Annotated[Optional[float], Field(description="Minimum price filter (optional)")] = None,
        max_price: Annotated[Optional[float], Field(description="Maximum price filter (optional)")] = None,
        search_term: Annotated[Optional[str], Field(description="Search term for title/description (optional)")] = None,
        page: Annotated[int, Field(description="Page number (default: 1)")] = 1,
        page_size: Annotated[int, Field(description="Page size (default: 10)")] = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting courses with filters - Page: {page}, PageSize: {page_size}")
        params = {
            "categoryId": category_id,
            "instructorId": instructor_id,
            "level": level,
            "isPublished": is_published,
            "isFeatured": is_featured,
            "minPrice": min_price,
            "maxPrice": max_price,
            "searchTerm": search_term,
            "page": page,
            "pageSize": page_size,
        }
        return await self._tool_result(
            "getting courses",
            self._get("/api/courses", params, cancellation_token),
            "Courses retrieved successfully",
            "No courses found",
        )

    @tool("Get course details by ID")
    async def get_course(
        self,
        course_id: Annotated[int, Field(description="The course ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting course with ID: {course_id}")
        return await self._tool_result(
            f"getting course {course_id}",
            self._get(f"/api/courses/{course_id}", cancellation_token=cancellation_token),
            "Course retrieved successfully",
            f"Course with ID {course_id} not found",
        )

    @tool("Create a new course")
    async def create_course(
        self,
        title: Annotated[str, Field(description="Course title")],
        description: Annotated[str, Field(description="Course description")],
        instructor_id: Annotated[int, Field(description="Instructor ID")],
        category_id: Annotated[int, Field(description="Category ID")],
        price: Annotated[float, Field(description="Course price")],
        duration_hours: Annotated[int, Field(description="Course duration in hours")],
        level: Annotated[int, Field(description=f"Course level ({_LEVEL_HELP})")],
        language: Annotated[str, Field(description="Course language")],
        short_description: Annotated[Optional[str], Field(description="Short description (optional)")] = None,
        discount_price: Annotated[Optional[float], Field(description="Discount price (optional)")] = None,
        thumbnail_url: Annotated[Optional[str], Field(description="Thumbnail URL (optional)")] = None,
        video_preview_url: Annotated[Optional[str], Field(description="Video preview URL (optional)")] = None,
        is_published: Annotated[bool, Field(description="Whether the course is published")] = False,
        is_featured: Annotated[bool, Field(description="Whether the course is featured")] = False,
        max_students: Annotated[Optional[int], Field(description="Maximum number of students (optional)")] = None,
        prerequisites: Annotated[Optional[str], Field(description="Prerequisites (optional)")] = None,
        learning_objectives: Annotated[Optional[str], Field(description="Learning objectives (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Creating course: {title}")
        request = CreateCourseRequest(
            title=title,
            description=description,
            short_description=short_description,
            instructor_id=instructor_id,
            category_id=category_id,
            price=price,
            discount_price=discount_price,
            duration_hours=duration_hours,
            level=CourseLevel(level),
            language=language,
            thumbnail_url=thumbnail_url,
            video_preview_url=video_preview_url,
            is_published=is_published,
            is_featured=is_featured,
            max_students=max_students,
            prerequisites=prerequisites,
            learning_objectives=learning_objectives,
        )
        return await self._tool_result(
            f"creating course {title}",
            self._post("/api/courses", request, cancellation_token=cancellation_token),
            "Course created successfully",
        )

    @tool("Update course details")
    async def update_course(
        self,
        course_id: Annotated[int, Field(description="The course ID")],
        title: Annotated[Optional[str], Field(description="Course title (optional)")] = None,
        description: Annotated[Optional[str], Field(description="Course description (optional)")] = None,
        short_description: Annotated[Optional[str], Field(description="Short description (optional)")] = None,
        category_id: Annotated[Optional[int], Field(description="Category ID (optional)")] = None,
        price: Annotated[Optional[float], Field(description="Course price (optional)")] = None,
        discount_price: Annotated[Optional[float], Field(description="Discount price (optional)")] = None,
        duration_hours: Annotated[Optional[int], Field(description="Course duration in hours (optional)")] = None,
        level: Annotated[Optional[int], Field(description=f"Course level ({_LEVEL_HELP}) (optional)")] = None,
        language: Annotated[Optional[str], Field(description="Course language (optional)")] = None,
        thumbnail_url: Annotated[Optional[str], Field(description="Thumbnail URL (optional)")] = None,
        video_preview_url: Annotated[Optional[str], Field(description="Video preview URL (optional)")] = None,
        is_published: Annotated[Optional[bool], Field(description="Whether the course is published (optional)")] = None,
        is_featured: Annotated[Optional[bool], Field(description="Whether the course is featured (optional)")] = None,
        max_students: Annotated[Optional[int], Field(description="Maximum number of students (optional)")] = None,
        prerequisites: Annotated[Optional[str], Field(description="Prerequisites (optional)")] = None,
        learning_objectives: Annotated[Optional[str], Field(description="Learning objectives (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Updating course with ID: {course_id}")
        request = UpdateCourseRequest(
            title=title,
            description=description,
            short_description=short_description,
            category_id=category_id,
            price=price,
            discount_price=discount_price,
            duration_hours=duration_hours,
            level=CourseLevel(level) if level is not None else None,
            language=language,
            thumbnail_url=thumbnail_url,
            video_preview_url=video_preview_url,
            is_published=is_published,
            is_featured=is_featured,
            max_students=max_students,
            prerequisites=prerequisites,
            learning_objectives=learning_objectives,
        )
        return await self._tool_result(
            f"updating course {course_id}",
            self._put(f"/api/courses/{course_id}", request, cancellation_token=cancellation_token),
            "Course updated successfully",
            f"Course with ID {course_id} not found",
        )

    @tool("Delete a course permanently")
    async def delete_course(
        self,
        course_id: Annotated[int, Field(description="The course ID to delete")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Deleting course with ID: {course_id}")
        return await self._deletion_result(
            f"deleting course {course_id}",
            self._delete(f"/api/courses/{course_id}", cancellation_token),
            "Course deleted successfully",
            f"Course with ID {course_id} not found",
        )

    # ========================================================================
    # Publishing
    # ========================================================================

    @tool("Publish a course to make it visible to students")
    async def publish_course(
        self,
        course_id: Annotated[int, Field(description="The course ID to publish")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        return await self._course_action(course_id, "publish", "Course published successfully", cancellation_token)

    @tool("Unpublish a course to hide it from students")
    async def unpublish_course(
        self,
        course_id: Annotated[int, Field(description="The course ID to unpublish")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        return await self._course_action(course_id, "unpublish", "Course unpublished successfully", cancellation_token)

    @tool("Feature a course to highlight it")
    async def feature_course(
        self,
        course_id: Annotated[int, Field(description="The course ID to feature")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        return await self._course_action(course_id, "feature", "Course featured successfully", cancellation_token)

    @tool("Unfeature a course to remove highlighting")
    async def unfeature_course(
        self,
        course_id: Annotated[int, Field(description="The course ID to unfeature")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        return await self._course_action(course_id, "unfeature", "Course unfeatured successfully", cancellation_token)

    # ========================================================================
    # Enrollments and statistics
    # ========================================================================

    @tool("Get all enrollments for a specific course")
    async def get_course_enrollments(
        self,
        course_id: Annotated[int, Field(description="The course ID")],
        page: Annotated[int, Field(description="Page number (default: 1)")] = 1,
        page_size: Annotated[int, Field(description="Page size (default: 10)")] = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting enrollments for course ID: {course_id}")
        return await self._tool_result(
            f"getting enrollments for course {course_id}",
            self._get(
                f"/api/courses/{course_id}/enrollments",
                {"page": page, "pageSize": page_size},
                cancellation_token,
            ),
            "Course enrollments retrieved successfully",
            f"No enrollments found for course ID {course_id}",
        )

    @tool("Get statistics for a specific course")
    async def get_course_stats(
        self,
        course_id: Annotated[int, Field(description="The course ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting statistics for course ID: {course_id}")
        return await self._tool_result(
            f"getting stats for course {course_id}",
            self._get(f"/api/courses/{course_id}/stats", cancellation_token=cancellation_token),
            "Course statistics retrieved successfully",
            f"Statistics for course ID {course_id} not found",
        )

    # ========================================================================
    # Utility
    # ========================================================================

    @tool("Check if a course exists")
    async def check_course_exists(
        self,
        course_id: Annotated[int, Field(description="The course ID to check")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Checking if course exists: {course_id}")
        return await self._exists_result(
            f"checking course {course_id}",
            self._get(f"/api/courses/{course_id}", cancellation_token=cancellation_token),
            "Course",
        )

    @tool("Get course summary (basic information only)")
    async def get_course_summary(
        self,
        course_id: Annotated[int, Field(description="The course ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting course summary for ID: {course_id}")
        return await self._tool_result(
            f"getting course summary {course_id}",
            self._select(
                self._get(f"/api/courses/{course_id}", cancellation_token=cancellation_token),
                COURSE_SUMMARY_FIELDS,
            ),
            "Course summary retrieved successfully",
            f"Course with ID {course_id} not found",
        )

    async def _course_action(
        self,
        course_id: int,
        action: str,
        success_message: str,
        cancellation_token: CancellationToken,
    ) -> str:
        logger.info(f"Applying '{action}' to course ID: {course_id}")
        return await self._tool_result(
            f"applying {action} to course {course_id}",
            self._put(f"/api/courses/{course_id}/{action}", cancellation_token=cancellation_token),
            success_message,
            f"Course with ID {course_id} not found",
        )
