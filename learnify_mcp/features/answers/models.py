"""Answer request models."""

from enum import IntEnum
from typing import List, Optional

from ...shared.models import CamelModel


class BulkAnswerOperation(IntEnum):
    DELETE = 1
    MARK_CORRECT = 2
    MARK_INCORRECT = 3
    REORDER = 4


class CreateAnswerRequest(CamelModel):
    question_id: int
    answer_text: str
    is_correct: bool
    order_index: int = 0


class UpdateAnswerRequest(CamelModel):
    answer_text: Optional[str] = None
    is_correct: Optional[bool] = None
    order_index: Optional[int] = None


class CreateSingleAnswerRequest(CamelModel):
    """One entry of a bulk answer creation."""

    answer_text: str
    is_correct: bool = False
    order_index: int = 0


class CreateMultipleAnswersRequest(CamelModel):
    question_id: int
    answers: List[CreateSingleAnswerRequest]


class AnswerOrderItem(CamelModel):
    answer_id: int
    order_index: int


class ReorderAnswersRequest(CamelModel):
    answer_orders: List[AnswerOrderItem]


class BulkAnswerRequest(CamelModel):
    answer_ids: List[int]
    operation: BulkAnswerOperation


def parse_id_list(raw: str) -> List[int]:
    """Parse ``"3, 1,2"`` into ``[3, 1, 2]``; empty entries are skipped.

    Raises:
        ValueError: If an entry is not an integer
    """
    return [int(part.strip()) for part in raw.split(",") if part.strip()]


ANSWER_SUMMARY_FIELDS = (
    "id", "questionId", "answerText", "isCorrect", "orderIndex", "createdAt",
)
