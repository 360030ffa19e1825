# File: quizzy_app/modules/quiz/interface.py
from typing import Any, Dict, Optional
import datetime

from .engine.core import QuizSessionEngine
from .logics.answer_matching import summarize_results
from .schemas import Quiz, QuizAttemptState


class QuizInterface:
    """Public API of the Quiz module for other modules."""

    @staticmethod
    def load_quiz(document: Dict[str, Any]) -> Quiz:
        """Build a Quiz from its stored document."""
        return Quiz.from_dict(document)

    @staticmethod
    def open_attempt(quiz: Quiz) -> QuizAttemptState:
        return QuizSessionEngine.open_attempt(quiz)

    @staticmethod
    def submit(state: QuizAttemptState, now: Optional[datetime.datetime] = None) -> QuizAttemptState:
        return QuizSessionEngine.submit(state, now=now)

    @staticmethod
    def get_results(quiz: Quiz) -> Dict[str, Any]:
        """Score and per-question tally of a completed quiz; ``None`` score if unattempted."""
        summary = summarize_results(quiz.questions) if quiz.is_attempted else None
        return {
            'quiz_id': quiz.id,
            'score': quiz.score,
            'time_spent_minutes': quiz.time_spent_minutes,
            'summary': summary,
        }
