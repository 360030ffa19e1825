# File: quiz/engine/core.py
# QuizSessionEngine - state machine driving one quiz attempt

from __future__ import annotations

import dataclasses
import datetime
import logging
from typing import Optional

from quizzy_app.utils.time_utils import ensure_utc, utcnow
from ..logics.answer_matching import calculate_score, has_answer, is_answer_correct
from ..schemas import AttemptStatus, Quiz, QuizAttemptState

logger = logging.getLogger(__name__)


class QuizSessionEngine:
    """
    Pure transitions for a single quiz attempt: intro -> active -> completed.

    Every method takes a ``QuizAttemptState`` and returns the next one.
    A rejected transition (wrong status, unanswered current question)
    returns the *same* object, so ``new is old`` means nothing changed.
    """

    @staticmethod
    def open_attempt(quiz: Quiz) -> QuizAttemptState:
        """
        Build the initial state for a quiz being opened.

        An already scored quiz goes straight to ``completed`` with its answers
        rehydrated from each question's stored ``user_answer``.
        """
        if quiz.is_attempted:
            answers = {q.id: q.user_answer or "" for q in quiz.questions}
            return QuizAttemptState(quiz=quiz, status=AttemptStatus.COMPLETED, answers=answers)
        return QuizAttemptState(quiz=quiz, status=AttemptStatus.INTRO)

    @staticmethod
    def start_quiz(state: QuizAttemptState, now: Optional[datetime.datetime] = None) -> QuizAttemptState:
        if state.status is not AttemptStatus.INTRO:
            logger.debug("start_quiz ignored for quiz %s in status %s", state.quiz.id, state.status.value)
            return state
        return dataclasses.replace(
            state,
            status=AttemptStatus.ACTIVE,
            current_index=0,
            answers={},
            started_at=ensure_utc(now) if now else utcnow(),
        )

    @staticmethod
    def answer(state: QuizAttemptState, question_id: str, value: Optional[str]) -> QuizAttemptState:
        """Record (or overwrite) the answer for ``question_id``; the pointer does not move."""
        if state.status is not AttemptStatus.ACTIVE:
            logger.debug("answer ignored for quiz %s in status %s", state.quiz.id, state.status.value)
            return state
        if state.quiz.get_question(question_id) is None:
            logger.debug("answer ignored: quiz %s has no question %s", state.quiz.id, question_id)
            return state
        answers = dict(state.answers)
        answers[question_id] = "" if value is None else str(value)
        return dataclasses.replace(state, answers=answers)

    @staticmethod
    def answer_current(state: QuizAttemptState, value: Optional[str]) -> QuizAttemptState:
        """Answer whichever question is in view."""
        question = state.current_question
        if question is None:
            return state
        return QuizSessionEngine.answer(state, question.id, value)

    @staticmethod
    def has_answered_current(state: QuizAttemptState) -> bool:
        question = state.current_question
        if question is None:
            # Nothing to gate on in an empty quiz.
            return True
        return has_answer(state.answers.get(question.id))

    @classmethod
    def can_advance(cls, state: QuizAttemptState) -> bool:
        return (
            state.status is AttemptStatus.ACTIVE
            and not state.is_last_question
            and cls.has_answered_current(state)
        )

    @classmethod
    def can_submit(cls, state: QuizAttemptState) -> bool:
        return state.status is AttemptStatus.ACTIVE and cls.has_answered_current(state)

    @classmethod
    def next_question(cls, state: QuizAttemptState) -> QuizAttemptState:
        if state.status is not AttemptStatus.ACTIVE:
            logger.debug("next ignored for quiz %s in status %s", state.quiz.id, state.status.value)
            return state
        if not cls.has_answered_current(state):
            logger.debug("next ignored: question %d of quiz %s unanswered", state.current_index, state.quiz.id)
            return state
        last_index = max(state.question_count - 1, 0)
        new_index = min(state.current_index + 1, last_index)
        if new_index == state.current_index:
            return state
        return dataclasses.replace(state, current_index=new_index)

    @staticmethod
    def previous_question(state: QuizAttemptState) -> QuizAttemptState:
        if state.status is not AttemptStatus.ACTIVE:
            logger.debug("previous ignored for quiz %s in status %s", state.quiz.id, state.status.value)
            return state
        new_index = max(state.current_index - 1, 0)
        if new_index == state.current_index:
            return state
        return dataclasses.replace(state, current_index=new_index)

    @classmethod
    def submit(cls, state: QuizAttemptState, now: Optional[datetime.datetime] = None) -> QuizAttemptState:
        """
        Grade the attempt and move to ``completed``.

        The gate is the question currently in view, not "every question
        answered"; skipped questions are simply graded as wrong.

        Args:
            state: An ``active`` attempt.
            now: Completion time (default: current UTC time).

        Returns:
            The completed state whose ``quiz`` carries ``score``, per-question
            ``user_answer``/``is_correct`` and the time spent. Any rejected
            call, including a second submit, returns ``state`` unchanged.
        """
        if state.status is not AttemptStatus.ACTIVE:
            logger.debug("submit ignored for quiz %s in status %s", state.quiz.id, state.status.value)
            return state
        if not cls.has_answered_current(state):
            logger.debug("submit ignored: question %d of quiz %s unanswered", state.current_index, state.quiz.id)
            return state

        quiz = state.quiz
        completed_at = ensure_utc(now) if now else utcnow()
        score = calculate_score(quiz.questions, state.answers)

        graded = tuple(
            dataclasses.replace(
                q,
                user_answer=state.answers.get(q.id, ""),
                is_correct=is_answer_correct(q, state.answers.get(q.id)),
            )
            for q in quiz.questions
        )

        time_spent = quiz.time_spent_minutes
        if state.started_at is not None:
            elapsed = (completed_at - ensure_utc(state.started_at)).total_seconds()
            time_spent += max(0, round(elapsed / 60))

        completed_quiz = dataclasses.replace(
            quiz,
            questions=graded,
            score=score,
            completed_at=completed_at,
            time_spent_minutes=time_spent,
        )
        logger.info("Quiz %s completed with score %d", quiz.id, score)
        return dataclasses.replace(state, quiz=completed_quiz, status=AttemptStatus.COMPLETED)
