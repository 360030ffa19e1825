"""
Quiz -> Flashcard bridge.

Derives exactly one freshly scheduled flashcard per question of a completed
quiz. Deterministic: the same quiz and ``now`` always give the same batch.
"""

import dataclasses
import datetime
import uuid
from typing import List, Optional, Tuple

from quizzy_app.core.errors import ValidationError
from quizzy_app.modules.quiz.schemas import Question, Quiz
from quizzy_app.modules.srs.config import SrsDefaultConfig
from quizzy_app.modules.srs.schemas import Flashcard
from quizzy_app.utils.time_utils import ensure_utc, utcnow
from ..config import FlashcardDefaultConfig
from ..exceptions import DuplicateFlashcardGenerationError, QuizNotCompletedError


def _answer_text(question: Question) -> str:
    if question.is_multi_select:
        return ", ".join(sorted(question.correct_answer))
    return question.correct_answer


def build_back(question: Question, placeholder: str = FlashcardDefaultConfig.FLASHCARD_EXPLANATION_PLACEHOLDER) -> str:
    explanation = question.explanation if question.explanation and question.explanation.strip() else placeholder
    return f"{_answer_text(question)}\n\n{explanation}"


def new_flashcard(card_id: str, front: str, back: str, now: datetime.datetime, quiz_id: Optional[str] = None) -> Flashcard:
    """A never-reviewed card, due immediately."""
    return Flashcard(
        id=card_id,
        front=front,
        back=back,
        quiz_id=quiz_id,
        interval=0,
        ease_factor=SrsDefaultConfig.SRS_DEFAULT_EASE_FACTOR,
        repetition=0,
        next_review=now,
        created_at=now,
    )


def build_flashcards_for_quiz(
    quiz: Quiz,
    now: Optional[datetime.datetime] = None,
    placeholder: str = FlashcardDefaultConfig.FLASHCARD_EXPLANATION_PLACEHOLDER,
) -> Tuple[Quiz, List[Flashcard]]:
    """
    Produce the flashcard batch of a completed quiz.

    Returns:
        ``(quiz, cards)`` where ``quiz`` is a copy flagged ``has_flashcards``
        and ``cards`` holds one card per question, in question order.

    Raises:
        QuizNotCompletedError: the quiz has no score yet
        DuplicateFlashcardGenerationError: the quiz already has its batch
    """
    if not quiz.is_attempted:
        raise QuizNotCompletedError(quiz.id)
    if quiz.has_flashcards:
        raise DuplicateFlashcardGenerationError(quiz.id)

    now = ensure_utc(now) if now else utcnow()
    cards = [
        new_flashcard(
            card_id=f"{FlashcardDefaultConfig.FLASHCARD_ID_PREFIX}{question.id}",
            front=question.text,
            back=build_back(question, placeholder),
            now=now,
            quiz_id=quiz.id,
        )
        for question in quiz.questions
    ]
    return dataclasses.replace(quiz, has_flashcards=True), cards


def build_manual_flashcard(
    front: str,
    back: str,
    now: Optional[datetime.datetime] = None,
    quiz_id: Optional[str] = None,
) -> Flashcard:
    """One learner-authored card; front and back are both required."""
    if not (front or "").strip() or not (back or "").strip():
        raise ValidationError("Flashcard front and back are required")
    now = ensure_utc(now) if now else utcnow()
    return new_flashcard(uuid.uuid4().hex, front, back, now, quiz_id=quiz_id)
