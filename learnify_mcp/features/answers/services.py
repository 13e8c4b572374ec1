"""Answer management tools backed by the Learnify API."""

import logging
from typing import Annotated, Any, Dict, List, Optional

import requests
from pydantic import Field

from ...config.settings import ApiSettings
from ...registry.markers import CancellationToken, tool, tool_service
from ...shared.api_service import BaseApiService
from ...utils.response import error_payload, success_payload
from .models import (
    ANSWER_SUMMARY_FIELDS,
    AnswerOrderItem,
    BulkAnswerOperation,
    BulkAnswerRequest,
    CreateAnswerRequest,
    CreateMultipleAnswersRequest,
    CreateSingleAnswerRequest,
    ReorderAnswersRequest,
    UpdateAnswerRequest,
    parse_id_list,
)

logger = logging.getLogger(__name__)

AnswerId = Annotated[int, Field(description="The answer ID")]
QuestionId = Annotated[int, Field(description="The question ID")]


def _result_message(result: Any, default: str) -> str:
    if isinstance(result, dict) and result.get("message"):
        return result["message"]
    return default


@tool_service
class AnswerApiService(BaseApiService):
    """API service for quiz question answers, their ordering and analytics."""

    def __init__(self, session: requests.Session, settings: ApiSettings):
        super().__init__(session, settings, "AnswerApiService")

    # ========================================================================
    # Answer CRUD
    # ========================================================================

    @tool("Get all answers with optional filtering")
    async def get_answers(
        self,
        question_id: Annotated[Optional[int], Field(description="Question ID filter (optional)")] = None,
        is_correct: Annotated[Optional[bool], Field(description="Correct answer filter (optional)")] = None,
        search_term: Annotated[Optional[str], Field(description="Search term for answer text (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info("Getting answers with filters")
        params = {"questionId": question_id, "isCorrect": is_correct, "searchTerm": search_term}
        return await self._tool_result(
            "getting answers",
            self._get("/api/answers", params, cancellation_token),
            "Answers retrieved successfully",
            "No answers found",
        )

    @tool("Get answer details by ID")
    async def get_answer(
        self,
        answer_id: AnswerId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting answer with ID: {answer_id}")
        return await self._tool_result(
            f"getting answer {answer_id}",
            self._get(f"/api/answers/{answer_id}", cancellation_token=cancellation_token),
            "Answer retrieved successfully",
            f"Answer with ID {answer_id} not found",
        )

    @tool("Create a new answer for a quiz question")
    async def create_answer(
        self,
        question_id: Annotated[int, Field(description="Question ID")],
        answer_text: Annotated[str, Field(description="Answer text")],
        is_correct: Annotated[bool, Field(description="Whether this is the correct answer")],
        order_index: Annotated[int, Field(description="Order index for answer display")] = 0,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Creating answer for question: {question_id}")
        request = CreateAnswerRequest(
            question_id=question_id,
            answer_text=answer_text,
            is_correct=is_correct,
            order_index=order_index,
        )
        return await self._tool_result(
            f"creating answer for question {question_id}",
            self._post("/api/answers", request, cancellation_token=cancellation_token),
            "Answer created successfully",
        )

    @tool("Update answer details")
    async def update_answer(
        self,
        answer_id: AnswerId,
        answer_text: Annotated[Optional[str], Field(description="Answer text (optional)")] = None,
        is_correct: Annotated[Optional[bool], Field(description="Whether this is the correct answer (optional)")] = None,
        order_index: Annotated[Optional[int], Field(description="Order index for answer display (optional)")] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Updating answer with ID: {answer_id}")
        request = UpdateAnswerRequest(answer_text=answer_text, is_correct=is_correct, order_index=order_index)
        return await self._tool_result(
            f"updating answer {answer_id}",
            self._put(f"/api/answers/{answer_id}", request, cancellation_token=cancellation_token),
            "Answer updated successfully",
            f"Answer with ID {answer_id} not found",
        )

    @tool("Delete an answer permanently")
    async def delete_answer(
        self,
        answer_id: AnswerId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Deleting answer with ID: {answer_id}")
        return await self._deletion_result(
            f"deleting answer {answer_id}",
            self._delete(f"/api/answers/{answer_id}", cancellation_token),
            "Answer deleted successfully",
            "Failed to delete answer",
        )

    # ========================================================================
    # Question answers
    # ========================================================================

    @tool("Get all answers for a specific question")
    async def get_question_answers(
        self,
        question_id: QuestionId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting answers for question: {question_id}")
        return await self._tool_result(
            f"getting answers for question {question_id}",
            self._get(f"/api/answers/question/{question_id}", cancellation_token=cancellation_token),
            "Question answers retrieved successfully",
            f"No answers found for question ID {question_id}",
        )

    @tool("Reorder answers for a specific question")
    async def reorder_question_answers(
        self,
        question_id: QuestionId,
        answer_ids_order: Annotated[str, Field(description="Comma-separated list of answer IDs in new order")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Reordering answers for question: {question_id}")
        try:
            answer_ids = parse_id_list(answer_ids_order)
        except ValueError as e:
            return error_payload(f"Invalid answer ID list: {e}")

        request = ReorderAnswersRequest(answer_orders=[
            AnswerOrderItem(answer_id=answer_id, order_index=index)
            for index, answer_id in enumerate(answer_ids, start=1)
        ])
        return await self._tool_result(
            f"reordering answers for question {question_id}",
            self._put(
                f"/api/answers/question/{question_id}/reorder",
                request,
                cancellation_token=cancellation_token,
            ),
            "Answers reordered successfully",
            f"Failed to reorder answers for question ID {question_id}",
        )

    @tool("Create multiple answers for a question at once")
    async def create_multiple_answers(
        self,
        question_id: QuestionId,
        answers: Annotated[
            List[CreateSingleAnswerRequest],
            Field(description="JSON array of answers with answerText, isCorrect, and orderIndex"),
        ],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Creating multiple answers for question: {question_id}")
        if not answers:
            return error_payload("Invalid or empty answers data provided")

        request = CreateMultipleAnswersRequest(question_id=question_id, answers=answers)
        try:
            result = await self._post(
                f"/api/answers/question/{question_id}/bulk",
                request,
                cancellation_token=cancellation_token,
            )
        except Exception as e:
            logger.error(f"Error creating answers for question {question_id}: {e}")
            return error_payload(str(e))

        return success_payload(result, _result_message(result, "Bulk answer creation completed"))

    # ========================================================================
    # Validation
    # ========================================================================

    @tool("Validate answer business rules and constraints")
    async def validate_answer(
        self,
        answer_id: AnswerId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Validating answer: {answer_id}")
        try:
            validation = await self._get(f"/api/answers/{answer_id}/validate", cancellation_token=cancellation_token)
        except Exception as e:
            logger.error(f"Error validating answer {answer_id}: {e}")
            return error_payload(str(e))

        if validation is None:
            return error_payload(f"Answer with ID {answer_id} not found for validation")
        message = "Answer validation passed" if validation.get("isValid") else "Answer validation failed"
        return success_payload(validation, message)

    @tool("Validate all answers for a specific question")
    async def validate_question_answers(
        self,
        question_id: QuestionId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Validating all answers for question: {question_id}")
        try:
            report = await self._validate_question(question_id, cancellation_token)
        except Exception as e:
            logger.error(f"Error validating answers for question {question_id}: {e}")
            return error_payload(str(e))

        if report is None:
            return error_payload(f"No answers found for question ID {question_id}")
        if report["overallValid"]:
            message = "All answers are valid"
        else:
            message = f"Found {report['invalidAnswers']} invalid answers"
        return success_payload(report, message)

    async def _validate_question(
        self, question_id: int, token: CancellationToken
    ) -> Optional[Dict[str, Any]]:
        """Validate every answer of a question and aggregate the outcome."""
        question = await self._get(f"/api/answers/question/{question_id}", cancellation_token=token)
        if question is None:
            return None

        answers = question.get("answers") or []
        results = []
        for answer in answers:
            validation = await self._get(f"/api/answers/{answer['id']}/validate", cancellation_token=token)
            if validation is not None:
                results.append(validation)

        valid = sum(1 for result in results if result.get("isValid"))
        return {
            "questionId": question_id,
            "overallValid": valid == len(results),
            "totalAnswers": len(answers),
            "validAnswers": valid,
            "invalidAnswers": len(results) - valid,
            "validationResults": results,
            "totalErrors": [
                error for result in results for error in result.get("validationErrors") or []
            ],
        }

    # ========================================================================
    # Analytics and bulk operations
    # ========================================================================

    @tool("Get answer selection statistics and analytics")
    async def get_answer_stats(
        self,
        answer_id: AnswerId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting statistics for answer: {answer_id}")
        return await self._tool_result(
            f"getting stats for answer {answer_id}",
            self._get(f"/api/answers/{answer_id}/stats", cancellation_token=cancellation_token),
            "Answer statistics retrieved successfully",
            f"No statistics found for answer ID {answer_id}",
        )

    @tool("Get comprehensive analytics for all answers of a question")
    async def get_question_answer_analytics(
        self,
        question_id: QuestionId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting answer analytics for question: {question_id}")
        return await self._tool_result(
            f"getting answer analytics for question {question_id}",
            self._get(f"/api/answers/question/{question_id}/analytics", cancellation_token=cancellation_token),
            "Question answer analytics retrieved successfully",
            f"No analytics found for question ID {question_id}",
        )

    @tool("Perform bulk operations on multiple answers")
    async def bulk_answer_operation(
        self,
        answer_ids: Annotated[str, Field(description="Comma-separated list of answer IDs")],
        operation: Annotated[int, Field(
            description="Operation type (1=Delete, 2=MarkCorrect, 3=MarkIncorrect, 4=Reorder)"
        )],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Performing bulk operation {operation} on answers: {answer_ids}")
        try:
            request = BulkAnswerRequest(
                answer_ids=parse_id_list(answer_ids),
                operation=BulkAnswerOperation(operation),
            )
        except ValueError as e:
            return error_payload(f"Invalid bulk operation request: {e}")

        try:
            result = await self._post("/api/answers/bulk", request, cancellation_token=cancellation_token)
        except Exception as e:
            logger.error(f"Error performing bulk answer operation: {e}")
            return error_payload(str(e))

        return success_payload(result, _result_message(result, "Bulk operation completed"))

    @tool("Check if an answer exists")
    async def check_answer_exists(
        self,
        answer_id: Annotated[int, Field(description="The answer ID to check")],
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Checking if answer exists: {answer_id}")
        return await self._exists_result(
            f"checking answer {answer_id}",
            self._get(f"/api/answers/{answer_id}", cancellation_token=cancellation_token),
            "Answer",
        )

    @tool("Get answer summary (basic information only)")
    async def get_answer_summary(
        self,
        answer_id: AnswerId,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        logger.info(f"Getting answer summary for ID: {answer_id}")
        return await self._tool_result(
            f"getting answer summary {answer_id}",
            self._select(
                self._get(f"/api/answers/{answer_id}", cancellation_token=cancellation_token),
                ANSWER_SUMMARY_FIELDS,
            ),
            "Answer summary retrieved successfully",
            f"Answer with ID {answer_id} not found",
        )
