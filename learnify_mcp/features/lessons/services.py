"""Lesson management tools backed by the Learnify API."""

import logging
from typing import Annotated, Any, Optional

import requests
from pydantic import Field

from ...config.settings import ApiSettings
from ...registry.markers import CancellationToken, tool, tool_service
from ...shared.api_service import BaseApiService
from .models import (
    LESSON_SUMMARY_FIELDS,
    CreateLessonRequest,
    ReorderLessonRequest,
    UpdateContentRequest,
    UpdateLessonRequest,
    UploadVideoRequest,
    format_duration,
)

logger = logging.getLogger(__name__)

LessonId = Annotated[int, Field(description="The lesson ID")]
CourseId = Annotated[int, Field(description="The course ID")]


def _with_formatted_duration(lesson: Any) -> Any:
    if isinstance(lesson, dict) and "formattedDuration" not in lesson:
        duration = lesson.get("duration")
        if isinstance(duration, int):
            lesson["formattedDuration"] = format_duration(duration)
    return lesson


@tool_service
class LessonApiService(BaseApiService):
    """API service for lesson management, sequencing and content."""

    def __init__(self, session: requests.Session, settings: ApiSettings):
        super().__init__(session, settings, "LessonApiService")

    async def _lesson(self, endpoint: str, token: CancellationToken) -> Any:
        return _with_formatted_duration(await self._get(endpoint, cancellation_token=token))

    # ========================================================================
    # Lesson CRUD
    # ========================================================================

    @tool("Get lesson details by ID")
    async def get_lesson(
        self,
        lesson_id: LessonId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting lesson with ID: {lesson_id}")
        return await self._tool_result(
            f"getting lesson {lesson_id}",
            self._lesson(f"/api/lessons/{lesson_id}", cancellation_token),
            "Lesson retrieved successfully",
            f"Lesson with ID {lesson_id} not found",
        )

    @tool("Update lesson details")
    async def update_lesson(
        self,
        lesson_id: LessonId,
        title: Annotated[Optional[str], Field(description="The lesson title")] = None,
        description: Annotated[Optional[str], Field(description="The lesson description")] = None,
        content: Annotated[Optional[str], Field(description="The lesson content")] = None,
        video_url: Annotated[Optional[str], Field(description="The lesson video URL")] = None,
        duration: Annotated[Optional[int], Field(description="The lesson duration in minutes")] = None,
        order_index: Annotated[Optional[int], Field(description="The lesson order index")] = None,
        is_free: Annotated[Optional[bool], Field(description="Whether the lesson is free")] = None,
        is_published: Annotated[Optional[bool], Field(description="Whether the lesson is published")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Updating lesson with ID: {lesson_id}")
        request = UpdateLessonRequest(
            title=title,
            description=description,
            content=content,
            video_url=video_url,
            duration=duration,
            order_index=order_index,
            is_free=is_free,
            is_published=is_published,
        )
        return await self._tool_result(
            f"updating lesson {lesson_id}",
            self._put(f"/api/lessons/{lesson_id}", request, cancellation_token=cancellation_token),
            "Lesson updated successfully",
            f"Lesson with ID {lesson_id} not found",
        )

    @tool("Delete a lesson permanently")
    async def delete_lesson(
        self,
        lesson_id: LessonId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Deleting lesson with ID: {lesson_id}")
        return await self._deletion_result(
            f"deleting lesson {lesson_id}",
            self._delete(f"/api/lessons/{lesson_id}", cancellation_token),
            "Lesson deleted successfully",
            "Failed to delete lesson",
        )

    # ========================================================================
    # Sequencing
    # ========================================================================

    @tool("Reorder a lesson within its course")
    async def reorder_lesson(
        self,
        lesson_id: Annotated[int, Field(description="The lesson ID to reorder")],
        new_order_index: Annotated[int, Field(description="The new order index position")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Reordering lesson {lesson_id} to position {new_order_index}")
        request = ReorderLessonRequest(new_order_index=new_order_index)
        return await self._tool_result(
            f"reordering lesson {lesson_id}",
            self._put(f"/api/lessons/{lesson_id}/reorder", request, cancellation_token=cancellation_token),
            "Lesson reordered successfully",
            f"Lesson with ID {lesson_id} not found",
        )

    @tool("Get the next lesson in the course sequence")
    async def get_next_lesson(
        self,
        lesson_id: Annotated[int, Field(description="The current lesson ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting next lesson after: {lesson_id}")
        return await self._tool_result(
            f"getting next lesson after {lesson_id}",
            self._lesson(f"/api/lessons/{lesson_id}/next", cancellation_token),
            "Next lesson retrieved successfully",
            f"No next lesson found for lesson ID {lesson_id}",
        )

    @tool("Get the previous lesson in the course sequence")
    async def get_previous_lesson(
        self,
        lesson_id: Annotated[int, Field(description="The current lesson ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting previous lesson before: {lesson_id}")
        return await self._tool_result(
            f"getting previous lesson before {lesson_id}",
            self._lesson(f"/api/lessons/{lesson_id}/previous", cancellation_token),
            "Previous lesson retrieved successfully",
            f"No previous lesson found for lesson ID {lesson_id}",
        )

    # ========================================================================
    # Content
    # ========================================================================

    @tool("Upload or update lesson video")
    async def upload_lesson_video(
        self,
        lesson_id: LessonId,
        video_url: Annotated[str, Field(description="The video URL")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Uploading video for lesson: {lesson_id}")
        request = UploadVideoRequest(video_url=video_url)
        return await self._tool_result(
            f"uploading video for lesson {lesson_id}",
            self._post(f"/api/lessons/{lesson_id}/video", request, cancellation_token=cancellation_token),
            "Video uploaded successfully",
        )

    @tool("Update lesson content")
    async def update_lesson_content(
        self,
        lesson_id: LessonId,
        content: Annotated[str, Field(description="The new lesson content")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Updating content for lesson: {lesson_id}")
        request = UpdateContentRequest(content=content)
        return await self._tool_result(
            f"updating content for lesson {lesson_id}",
            self._put(f"/api/lessons/{lesson_id}/content", request, cancellation_token=cancellation_token),
            "Content updated successfully",
            f"Lesson with ID {lesson_id} not found",
        )

    @tool("Get lesson resources and attachments")
    async def get_lesson_resources(
        self,
        lesson_id: LessonId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting resources for lesson: {lesson_id}")
        return await self._tool_result(
            f"getting resources for lesson {lesson_id}",
            self._get(f"/api/lessons/{lesson_id}/resources", cancellation_token=cancellation_token),
            "Resources retrieved successfully",
            f"No resources found for lesson ID {lesson_id}",
        )

    # ========================================================================
    # Visibility and access
    # ========================================================================

    @tool("Publish a lesson to make it visible to students")
    async def publish_lesson(
        self,
        lesson_id: LessonId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Publishing lesson: {lesson_id}")
        return await self._tool_result(
            f"publishing lesson {lesson_id}",
            self._put(f"/api/lessons/{lesson_id}/publish", cancellation_token=cancellation_token),
            "Lesson published successfully",
            f"Lesson with ID {lesson_id} not found",
        )

    @tool("Unpublish a lesson to hide it from students")
    async def unpublish_lesson(
        self,
        lesson_id: LessonId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Unpublishing lesson: {lesson_id}")
        return await self._tool_result(
            f"unpublishing lesson {lesson_id}",
            self._put(f"/api/lessons/{lesson_id}/unpublish", cancellation_token=cancellation_token),
            "Lesson unpublished successfully",
            f"Lesson with ID {lesson_id} not found",
        )

    @tool("Make a lesson free or premium")
    async def make_lesson_free(
        self,
        lesson_id: LessonId,
        is_free: Annotated[bool, Field(description="Whether the lesson should be free")] = True,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        action = "free" if is_free else "premium"
        logger.info(f"Making lesson {lesson_id} {action}")
        return await self._tool_result(
            f"making lesson {lesson_id} {action}",
            self._put(
                f"/api/lessons/{lesson_id}/free",
                params={"isFree": is_free},
                cancellation_token=cancellation_token,
            ),
            f"Lesson made {action} successfully",
            f"Lesson with ID {lesson_id} not found",
        )

    # ========================================================================
    # Course lessons
    # ========================================================================

    @tool("Get all lessons for a specific course")
    async def get_course_lessons(
        self,
        course_id: CourseId,
        is_published: Annotated[Optional[bool], Field(description="Filter by published status (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting lessons for course: {course_id}")
        return await self._tool_result(
            f"getting lessons for course {course_id}",
            self._get(f"/api/courses/{course_id}/lessons", {"isPublished": is_published}, cancellation_token),
            "Course lessons retrieved successfully",
            f"No lessons found for course ID {course_id}",
        )

    @tool("Create a new lesson in a course")
    async def create_course_lesson(
        self,
        course_id: CourseId,
        title: Annotated[str, Field(description="The lesson title")],
        description: Annotated[str, Field(description="The lesson description")],
        content: Annotated[str, Field(description="The lesson content")],
        duration: Annotated[int, Field(description="The lesson duration in minutes")],
        video_url: Annotated[Optional[str], Field(description="The lesson video URL (optional)")] = None,
        is_free: Annotated[bool, Field(description="Whether the lesson is free")] = False,
        is_published: Annotated[bool, Field(description="Whether the lesson is published")] = False,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Creating lesson '{title}' in course: {course_id}")
        request = CreateLessonRequest(
            title=title,
            description=description,
            content=content,
            video_url=video_url,
            duration=duration,
            is_free=is_free,
            is_published=is_published,
        )
        return await self._tool_result(
            f"creating lesson in course {course_id}",
            self._post(f"/api/courses/{course_id}/lessons", request, cancellation_token=cancellation_token),
            "Lesson created successfully",
        )

    @tool("Check if a lesson exists")
    async def check_lesson_exists(
        self,
        lesson_id: Annotated[int, Field(description="The lesson ID to check")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Checking if lesson exists: {lesson_id}")
        return await self._exists_result(
            f"checking lesson {lesson_id}",
            self._get(f"/api/lessons/{lesson_id}", cancellation_token=cancellation_token),
            "Lesson",
        )

    @tool("Get lesson summary (basic information only)")
    async def get_lesson_summary(
        self,
        lesson_id: LessonId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting lesson summary for ID: {lesson_id}")
        return await self._tool_result(
            f"getting lesson summary {lesson_id}",
            self._select(
                self._get(f"/api/lessons/{lesson_id}", cancellation_token=cancellation_token),
                LESSON_SUMMARY_FIELDS,
            ),
            "Lesson summary retrieved successfully",
            f"Lesson with ID {lesson_id} not found",
        )
