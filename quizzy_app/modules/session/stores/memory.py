# File: quizzy_app/modules/session/stores/memory.py
from typing import Any, Dict, List, Optional, Sequence

from quizzy_app.modules.quiz.schemas import Quiz
from quizzy_app.modules.srs.schemas import Flashcard
from ..ports import FlashcardRepository, QuizRepository


class InMemoryLearningStore(QuizRepository, FlashcardRepository):
    """
    In-memory store using Python dicts of stored documents.

    Values are kept in their document form (``to_dict``) and rebuilt on
    read, the way a document database would hand them back.

    WARNING: All data is lost on restart. Use only for development/testing.
    """

    def __init__(self):
        self._quizzes: Dict[str, Dict[str, Any]] = {}
        self._flashcards: Dict[str, Dict[str, Any]] = {}

    # ── quizzes ──────────────────────────────────────────────────────

    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        doc = self._quizzes.get(quiz_id)
        return Quiz.from_dict(doc) if doc is not None else None

    def save_quiz(self, quiz: Quiz) -> Quiz:
        self._quizzes[quiz.id] = quiz.to_dict()
        return quiz

    def delete_quiz(self, quiz_id: str) -> bool:
        return self._quizzes.pop(quiz_id, None) is not None

    # ── flashcards ───────────────────────────────────────────────────

    def get_flashcard(self, card_id: str) -> Optional[Flashcard]:
        doc = self._flashcards.get(card_id)
        return Flashcard.from_dict(doc) if doc is not None else None

    def list_flashcards(self, quiz_id: Optional[str] = None) -> List[Flashcard]:
        return [
            Flashcard.from_dict(doc)
            for doc in self._flashcards.values()
            if quiz_id is None or doc.get('quizId') == quiz_id
        ]

    def save_flashcards(self, cards: Sequence[Flashcard]) -> List[Flashcard]:
        for card in cards:
            self._flashcards[card.id] = card.to_dict()
        return list(cards)

    def update_flashcard(self, card: Flashcard) -> Flashcard:
        self._flashcards[card.id] = card.to_dict()
        return card

    def delete_flashcards_for_quiz(self, quiz_id: str) -> int:
        doomed = [card_id for card_id, doc in self._flashcards.items() if doc.get('quizId') == quiz_id]
        for card_id in doomed:
            del self._flashcards[card_id]
        return len(doomed)
