"""Course request models."""

from enum import IntEnum
from typing import Optional

from ...shared.models import CamelModel


class CourseLevel(IntEnum):
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    EXPERT = 4


class CreateCourseRequest(CamelModel):
    title: str
    description: str
    short_description: Optional[str] = None
    instructor_id: int
    category_id: int
    price: float
    discount_price: Optional[float] = None
    duration_hours: int
    level: CourseLevel
    language: str
    thumbnail_url: Optional[str] = None
    video_preview_url: Optional[str] = None
    is_published: bool = False
    is_featured: bool = False
    max_students: Optional[int] = None
    prerequisites: Optional[str] = None
    learning_objectives: Optional[str] = None


class UpdateCourseRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    category_id: Optional[int] = None
    price: Optional[float] = None
    discount_price: Optional[float] = None
    duration_hours: Optional[int] = None
    level: Optional[CourseLevel] = None
    language: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_preview_url: Optional[str] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None
    max_students: Optional[int] = None
    prerequisites: Optional[str] = None
    learning_objectives: Optional[str] = None


COURSE_SUMMARY_FIELDS = (
    "id", "title", "shortDescription", "instructorId", "instructorName",
    "price", "discountPrice", "level", "language", "isPublished",
    "isFeatured", "createdAt",
)
