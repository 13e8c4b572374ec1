"""Lesson request models."""

from typing import Optional

from ...shared.models import CamelModel


class CreateLessonRequest(CamelModel):
    title: str
    description: str
    content: str
    video_url: Optional[str] = None
    duration: int
    is_free: bool = False
    is_published: bool = False
    learning_objectives: Optional[str] = None
    resources: Optional[str] = None


class UpdateLessonRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[int] = None
    order_index: Optional[int] = None
    is_free: Optional[bool] = None
    is_published: Optional[bool] = None
    learning_objectives: Optional[str] = None
    resources: Optional[str] = None


class ReorderLessonRequest(CamelModel):
    new_order_index: int


class UploadVideoRequest(CamelModel):
    video_url: str


class UpdateContentRequest(CamelModel):
    content: str


def format_duration(minutes: int) -> str:
    """Render a lesson duration the way the API does, e.g. ``1h 5m`` or ``45m``."""
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if hours > 0 else f"{rest}m"


LESSON_SUMMARY_FIELDS = (
    "id", "courseId", "title", "description", "duration",
    "orderIndex", "isFree", "isPublished", "createdAt",
)
