# File: quizzy_app/modules/session/services/session_service.py
"""
Learning Session Service
========================
Drives the learning core against its collaborators: loads quizzes,
persists completed attempts, produces flashcard batches and records
reviews. All grading and scheduling is delegated to the pure engines;
this layer only does I/O *after* a transition has succeeded.

Lifecycle::

    state = service.open_quiz(quiz_id)
    state = QuizSessionEngine.start_quiz(state)
    state = QuizSessionEngine.answer(state, question_id, "Paris")
    state = service.submit_attempt(state)          # persists + quiz_completed
    cards = service.generate_flashcards(quiz_id)   # once per quiz
    card  = service.review_flashcard(card.id, 3)
"""

from __future__ import annotations

import dataclasses
import datetime
import logging
from typing import Any, List, Mapping, Optional

from quizzy_app.core.errors import NotFoundError, QuotaExceededError
from quizzy_app.core.signals import card_reviewed, flashcards_generated, quiz_completed, quiz_deleted
from quizzy_app.modules.flashcard.config import FlashcardDefaultConfig
from quizzy_app.modules.flashcard.events import init_events as init_flashcard_events
from quizzy_app.modules.flashcard.logics.bridge import build_flashcards_for_quiz, build_manual_flashcard
from quizzy_app.modules.quiz.interface import QuizInterface
from quizzy_app.modules.quiz.schemas import AttemptStatus, Quiz, QuizAttemptState
from quizzy_app.modules.srs.interface import SrsInterface
from quizzy_app.modules.srs.schemas import DeckStats, Flashcard, Rating
from ..ports import FlashcardRepository, QuizRepository, QuotaGate

logger = logging.getLogger(__name__)


class LearningSessionService:
    """Orchestrates quiz attempts, flashcard batches and reviews."""

    def __init__(
        self,
        quizzes: QuizRepository,
        flashcards: FlashcardRepository,
        quota_gate: Optional[QuotaGate] = None,
        auto_generate_flashcards: bool = FlashcardDefaultConfig.FLASHCARD_AUTO_GENERATE,
        explanation_placeholder: str = FlashcardDefaultConfig.FLASHCARD_EXPLANATION_PLACEHOLDER,
    ):
        self.quizzes = quizzes
        self.flashcards = flashcards
        self.quota_gate = quota_gate
        self.auto_generate_flashcards = auto_generate_flashcards
        self.explanation_placeholder = explanation_placeholder

        if auto_generate_flashcards:
            # The quiz_completed receiver does the generating; make sure it is
            # connected even when no app has been created.
            init_flashcard_events()

    @classmethod
    def from_config(cls, config: Mapping[str, Any], store, quota_gate: Optional[QuotaGate] = None) -> 'LearningSessionService':
        """Build a service whose quiz and flashcard storage is ``store``."""
        return cls(
            quizzes=store,
            flashcards=store,
            quota_gate=quota_gate,
            auto_generate_flashcards=bool(config.get(
                'FLASHCARD_AUTO_GENERATE', FlashcardDefaultConfig.FLASHCARD_AUTO_GENERATE)),
            explanation_placeholder=config.get(
                'FLASHCARD_EXPLANATION_PLACEHOLDER', FlashcardDefaultConfig.FLASHCARD_EXPLANATION_PLACEHOLDER),
        )

    # ── quiz attempts ────────────────────────────────────────────────

    def _require_quiz(self, quiz_id: str) -> Quiz:
        quiz = self.quizzes.get_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError(f"Quiz {quiz_id} not found", resource='quiz')
        return quiz

    def import_quiz(self, document: Mapping[str, Any]) -> Quiz:
        """Store a quiz handed over by the generation collaborator as a document."""
        quiz = QuizInterface.load_quiz(dict(document))
        self.quizzes.save_quiz(quiz)
        logger.info("Imported quiz %s with %d questions", quiz.id, len(quiz.questions))
        return quiz

    def get_quiz_results(self, quiz_id: str) -> dict:
        return QuizInterface.get_results(self._require_quiz(quiz_id))

    def open_quiz(self, quiz_id: str) -> QuizAttemptState:
        """Load a quiz and build its attempt state (intro, or completed if scored)."""
        return QuizInterface.open_attempt(self._require_quiz(quiz_id))

    def submit_attempt(self, state: QuizAttemptState, now: Optional[datetime.datetime] = None) -> QuizAttemptState:
        """
        Submit the attempt and persist the completed quiz.

        A rejected submit (wrong status, unanswered current question, second
        submit) returns ``state`` untouched and performs no I/O.
        """
        completed = QuizInterface.submit(state, now=now)
        if completed is state or completed.status is not AttemptStatus.COMPLETED:
            return state

        self.quizzes.save_quiz(completed.quiz)
        quiz_completed.send(self, quiz=completed.quiz)

        # A quiz_completed subscriber may have generated the flashcard batch.
        stored = self.quizzes.get_quiz(completed.quiz.id)
        if stored is not None and stored.has_flashcards and not completed.quiz.has_flashcards:
            completed = dataclasses.replace(
                completed, quiz=dataclasses.replace(completed.quiz, has_flashcards=True)
            )
        return completed

    def delete_quiz(self, quiz_id: str) -> int:
        """Remove a quiz and cascade to its flashcards; returns cards removed."""
        if not self.quizzes.delete_quiz(quiz_id):
            raise NotFoundError(f"Quiz {quiz_id} not found", resource='quiz')
        removed = self.flashcards.delete_flashcards_for_quiz(quiz_id)
        logger.info("Deleted quiz %s and %d flashcards", quiz_id, removed)
        quiz_deleted.send(self, quiz_id=quiz_id, flashcards_removed=removed)
        return removed

    # ── flashcards ───────────────────────────────────────────────────

    def generate_flashcards(self, quiz_id: str, now: Optional[datetime.datetime] = None) -> List[Flashcard]:
        """
        Derive and store the flashcard batch of a completed quiz.

        Raises:
            NotFoundError: unknown quiz
            QuizNotCompletedError: the quiz has not been scored
            DuplicateFlashcardGenerationError: the batch already exists
            QuotaExceededError: the quota gate refused
        """
        quiz = self._require_quiz(quiz_id)
        flagged_quiz, cards = build_flashcards_for_quiz(quiz, now=now, placeholder=self.explanation_placeholder)

        if self.quota_gate is not None and not self.quota_gate.consume(QuotaGate.FLASHCARD_GENERATION):
            logger.warning("Flashcard quota exhausted, quiz %s left without cards", quiz_id)
            raise QuotaExceededError(kind=QuotaGate.FLASHCARD_GENERATION)

        saved = self.flashcards.save_flashcards(cards)
        self.quizzes.save_quiz(flagged_quiz)
        logger.info("Generated %d flashcards for quiz %s", len(saved), quiz_id)
        flashcards_generated.send(self, quiz_id=quiz_id, flashcards=saved)
        return saved

    def create_flashcard(
        self,
        front: str,
        back: str,
        quiz_id: Optional[str] = None,
        now: Optional[datetime.datetime] = None,
    ) -> Flashcard:
        card = build_manual_flashcard(front, back, now=now, quiz_id=quiz_id)
        self.flashcards.save_flashcards([card])
        return card

    def get_quiz_flashcards(self, quiz_id: str) -> List[Flashcard]:
        return self.flashcards.list_flashcards(quiz_id=quiz_id)

    def review_flashcard(self, card_id: str, rating, now: Optional[datetime.datetime] = None) -> Flashcard:
        """
        Reschedule a card from the learner's rating and store it.

        Raises:
            InvalidRatingError: rating outside 1-4 (nothing is stored)
            NotFoundError: unknown card
        """
        rating = Rating.parse(rating)
        card = self.flashcards.get_flashcard(card_id)
        if card is None:
            raise NotFoundError(f"Flashcard {card_id} not found", resource='flashcard')

        updated = SrsInterface.schedule(card, rating, now=now)
        self.flashcards.update_flashcard(updated)
        card_reviewed.send(self, card=updated, rating=int(rating))
        return updated

    def get_due_flashcards(self, now: Optional[datetime.datetime] = None, quiz_id: Optional[str] = None) -> List[Flashcard]:
        return SrsInterface.get_due_cards(self.flashcards.list_flashcards(quiz_id=quiz_id), now)

    def get_review_queue(self, now: Optional[datetime.datetime] = None, quiz_id: Optional[str] = None) -> List[Flashcard]:
        return SrsInterface.get_review_queue(self.flashcards.list_flashcards(quiz_id=quiz_id), now)

    def get_deck_stats(self, now: Optional[datetime.datetime] = None, quiz_id: Optional[str] = None) -> DeckStats:
        return SrsInterface.get_deck_stats(self.flashcards.list_flashcards(quiz_id=quiz_id), now)
