"""Quiz management tools backed by the Learnify API."""

import logging
from typing import Annotated, Optional

import requests
from pydantic import Field

from ...config.settings import ApiSettings
from ...registry.markers import CancellationToken, tool, tool_service
from ...shared.api_service import BaseApiService
from ...utils.response import error_payload
from .models import (
    QUIZ_SUMMARY_FIELDS,
    AddQuestionToQuizRequest,
    CreateQuizRequest,
    QuestionType,
    StartQuizAttemptRequest,
    UpdateQuizRequest,
)

logger = logging.getLogger(__name__)

QuizId = Annotated[int, Field(description="The quiz ID")]
Page = Annotated[int, Field(description="Page number (default: 1)")]
PageSize = Annotated[int, Field(description="Page size (default: 10)")]


@tool_service
class QuizApiService(BaseApiService):
    """API service for quizzes, their questions and attempts."""

    def __init__(self, session: requests.Session, settings: ApiSettings):
        super().__init__(session, settings, "QuizApiService")

    # ========================================================================
    # Quiz CRUD
    # ========================================================================

    @tool("Get all quizzes with optional filtering and pagination")
    async def get_quizzes(
        self,
        course_id: Annotated[Optional[int], Field(description="Course ID filter (optional)")] = None,
        lesson_id: Annotated[Optional[int], Field(description="Lesson ID filter (optional)")] = None,
        is_active: Annotated[Optional[bool], Field(description="Active status filter (optional)")] = None,
        search_term: Annotated[Optional[str], Field(description="Search term for title/description (optional)")] = None,
        page: Page = 1,
        page_size: PageSize = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting quizzes with filters - Page: {page}, PageSize: {page_size}")
        params = {
            "courseId": course_id,
            "lessonId": lesson_id,
            "isActive": is_active,
            "searchTerm": search_term,
            "page": page,
            "pageSize": page_size,
        }
        return await self._tool_result(
            "getting quizzes",
            self._get("/api/quizzes", params, cancellation_token),
            "Quizzes retrieved successfully",
            "No quizzes found",
        )

    @tool("Get quiz details by ID")
    async def get_quiz(
        self,
        quiz_id: QuizId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting quiz with ID: {quiz_id}")
        return await self._tool_result(
            f"getting quiz {quiz_id}",
            self._get(f"/api/quizzes/{quiz_id}", cancellation_token=cancellation_token),
            "Quiz retrieved successfully",
            f"Quiz with ID {quiz_id} not found",
        )

    @tool("Create a new quiz")
    async def create_quiz(
        self,
        title: Annotated[str, Field(description="Quiz title")],
        description: Annotated[str, Field(description="Quiz description")],
        passing_score: Annotated[float, Field(description="Passing score (0-100)")],
        course_id: Annotated[Optional[int], Field(description="Course ID (optional)")] = None,
        lesson_id: Annotated[Optional[int], Field(description="Lesson ID (optional)")] = None,
        time_limit: Annotated[Optional[int], Field(description="Time limit in minutes (optional)")] = None,
        max_attempts: Annotated[int, Field(description="Maximum attempts allowed")] = 3,
        is_active: Annotated[bool, Field(description="Whether the quiz is active")] = False,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Creating quiz: {title}")
        request = CreateQuizRequest(
            course_id=course_id,
            lesson_id=lesson_id,
            title=title,
            description=description,
            time_limit=time_limit,
            passing_score=passing_score,
            max_attempts=max_attempts,
            is_active=is_active,
        )
        return await self._tool_result(
            f"creating quiz {title}",
            self._post("/api/quizzes", request, cancellation_token=cancellation_token),
            "Quiz created successfully",
        )

    @tool("Update quiz details")
    async def update_quiz(
        self,
        quiz_id: QuizId,
        title: Annotated[Optional[str], Field(description="Quiz title (optional)")] = None,
        description: Annotated[Optional[str], Field(description="Quiz description (optional)")] = None,
        time_limit: Annotated[Optional[int], Field(description="Time limit in minutes (optional)")] = None,
        passing_score: Annotated[Optional[float], Field(description="Passing score (0-100) (optional)")] = None,
        max_attempts: Annotated[Optional[int], Field(description="Maximum attempts allowed (optional)")] = None,
        is_active: Annotated[Optional[bool], Field(description="Whether the quiz is active (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Updating quiz with ID: {quiz_id}")
        request = UpdateQuizRequest(
            title=title,
            description=description,
            time_limit=time_limit,
            passing_score=passing_score,
            max_attempts=max_attempts,
            is_active=is_active,
        )
        return await self._tool_result(
            f"updating quiz {quiz_id}",
            self._put(f"/api/quizzes/{quiz_id}", request, cancellation_token=cancellation_token),
            "Quiz updated successfully",
            f"Quiz with ID {quiz_id} not found",
        )

    @tool("Delete a quiz permanently")
    async def delete_quiz(
        self,
        quiz_id: QuizId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Deleting quiz with ID: {quiz_id}")
        return await self._deletion_result(
            f"deleting quiz {quiz_id}",
            self._delete(f"/api/quizzes/{quiz_id}", cancellation_token),
            "Quiz deleted successfully",
            "Failed to delete quiz",
        )

    # ========================================================================
    # Activation
    # ========================================================================

    @tool("Activate a quiz to make it available to students")
    async def activate_quiz(
        self,
        quiz_id: QuizId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Activating quiz with ID: {quiz_id}")
        return await self._tool_result(
            f"activating quiz {quiz_id}",
            self._put(f"/api/quizzes/{quiz_id}/activate", cancellation_token=cancellation_token),
            "Quiz activated successfully",
            f"Quiz with ID {quiz_id} not found",
        )

    @tool("Deactivate a quiz to make it unavailable to students")
    async def deactivate_quiz(
        self,
        quiz_id: QuizId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Deactivating quiz with ID: {quiz_id}")
        return await self._tool_result(
            f"deactivating quiz {quiz_id}",
            self._put(f"/api/quizzes/{quiz_id}/deactivate", cancellation_token=cancellation_token),
            "Quiz deactivated successfully",
            f"Quiz with ID {quiz_id} not found",
        )

    # ========================================================================
    # Course and lesson quizzes
    # ========================================================================

    @tool("Get all quizzes for a specific course")
    async def get_course_quizzes(
        self,
        course_id: Annotated[int, Field(description="The course ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting quizzes for course: {course_id}")
        return await self._tool_result(
            f"getting quizzes for course {course_id}",
            self._get(f"/api/quizzes/courses/{course_id}/quizzes", cancellation_token=cancellation_token),
            "Course quizzes retrieved successfully",
            f"No quizzes found for course ID {course_id}",
        )

    @tool("Get all quizzes for a specific lesson")
    async def get_lesson_quizzes(
        self,
        lesson_id: Annotated[int, Field(description="The lesson ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting quizzes for lesson: {lesson_id}")
        return await self._tool_result(
            f"getting quizzes for lesson {lesson_id}",
            self._get(f"/api/quizzes/lessons/{lesson_id}/quizzes", cancellation_token=cancellation_token),
            "Lesson quizzes retrieved successfully",
            f"No quizzes found for lesson ID {lesson_id}",
        )

    # ========================================================================
    # Questions and attempts
    # ========================================================================

    @tool("Get all questions for a specific quiz")
    async def get_quiz_questions(
        self,
        quiz_id: QuizId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting questions for quiz: {quiz_id}")
        return await self._tool_result(
            f"getting questions for quiz {quiz_id}",
            self._get(f"/api/quizzes/{quiz_id}/questions", cancellation_token=cancellation_token),
            "Quiz questions retrieved successfully",
            f"No questions found for quiz ID {quiz_id}",
        )

    @tool("Add a new question to a quiz")
    async def add_question_to_quiz(
        self,
        quiz_id: QuizId,
        question_text: Annotated[str, Field(description="The question text")],
        question_type: Annotated[int, Field(
            description="Question type (1=MultipleChoice, 2=TrueFalse, 3=ShortAnswer, 4=Essay, 5=FillInTheBlank)"
        )],
        points: Annotated[int, Field(description="Points for this question")] = 1,
        order_index: Annotated[Optional[int], Field(description="Order index (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Adding question to quiz {quiz_id}: {question_text}")
        try:
            kind = QuestionType(question_type)
        except ValueError:
            return error_payload(f"Invalid question type: {question_type}")

        request = AddQuestionToQuizRequest(
            question_text=question_text,
            question_type=kind,
            points=points,
            order_index=order_index,
        )
        return await self._tool_result(
            f"adding question to quiz {quiz_id}",
            self._post(f"/api/quizzes/{quiz_id}/questions", request, cancellation_token=cancellation_token),
            "Question added to quiz successfully",
        )

    @tool("Start a quiz attempt for a specific user")
    async def start_quiz_attempt(
        self,
        quiz_id: QuizId,
        user_id: Annotated[int, Field(description="The user ID")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Starting quiz attempt for quiz {quiz_id} by user {user_id}")
        request = StartQuizAttemptRequest(user_id=user_id)
        return await self._tool_result(
            f"starting attempt for quiz {quiz_id}",
            self._post(f"/api/quizzes/{quiz_id}/start", request, cancellation_token=cancellation_token),
            "Quiz attempt started successfully",
        )

    @tool("Get all attempts for a specific quiz")
    async def get_quiz_attempts(
        self,
        quiz_id: QuizId,
        page: Page = 1,
        page_size: PageSize = 10,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting attempts for quiz: {quiz_id}")
        return await self._tool_result(
            f"getting attempts for quiz {quiz_id}",
            self._get(
                f"/api/quizzes/{quiz_id}/attempts",
                {"page": page, "pageSize": page_size},
                cancellation_token,
            ),
            "Quiz attempts retrieved successfully",
            f"No attempts found for quiz ID {quiz_id}",
        )

    @tool("Get comprehensive statistics for a quiz")
    async def get_quiz_stats(
        self,
        quiz_id: QuizId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting statistics for quiz: {quiz_id}")
        return await self._tool_result(
            f"getting stats for quiz {quiz_id}",
            self._get(f"/api/quizzes/{quiz_id}/stats", cancellation_token=cancellation_token),
            "Quiz statistics retrieved successfully",
            f"No statistics found for quiz ID {quiz_id}",
        )

    @tool("Check if a quiz exists")
    async def check_quiz_exists(
        self,
        quiz_id: Annotated[int, Field(description="The quiz ID to check")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Checking if quiz exists: {quiz_id}")
        return await self._exists_result(
            f"checking quiz {quiz_id}",
            self._get(f"/api/quizzes/{quiz_id}", cancellation_token=cancellation_token),
            "Quiz",
        )

    @tool("Get quiz summary (basic information only)")
    async def get_quiz_summary(
        self,
        quiz_id: QuizId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting quiz summary for ID: {quiz_id}")
        return await self._tool_result(
            f"getting quiz summary {quiz_id}",
            self._select(
                self._get(f"/api/quizzes/{quiz_id}", cancellation_token=cancellation_token),
                QUIZ_SUMMARY_FIELDS,
            ),
            "Quiz summary retrieved successfully",
            f"Quiz with ID {quiz_id} not found",
        )
