"""Quiz request models."""

from enum import IntEnum
from typing import Optional

from ...shared.models import CamelModel


class QuestionType(IntEnum):
    MULTIPLE_CHOICE = 1
    TRUE_FALSE = 2
    SHORT_ANSWER = 3
    ESSAY = 4
    FILL_IN_THE_BLANK = 5


class CreateQuizRequest(CamelModel):
    course_id: Optional[int] = None
    lesson_id: Optional[int] = None
    title: str
    description: str
    time_limit: Optional[int] = None
    passing_score: float
    max_attempts: int = 3
    is_active: bool = False


class UpdateQuizRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    time_limit: Optional[int] = None
    passing_score: Optional[float] = None
    max_attempts: Optional[int] = None
    is_active: Optional[bool] = None


class AddQuestionToQuizRequest(CamelModel):
    question_text: str
    question_type: QuestionType
    points: int = 1
    order_index: Optional[int] = None


class StartQuizAttemptRequest(CamelModel):
    user_id: int


QUIZ_SUMMARY_FIELDS = (
    "id", "courseId", "courseTitle", "lessonId", "lessonTitle", "title",
    "description", "passingScore", "maxAttempts", "isActive",
    "questionCount", "createdAt",
)
