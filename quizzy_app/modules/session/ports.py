# File: quizzy_app/modules/session/ports.py
"""
Collaborator Ports
==================
Abstract contracts for the services the learning core hands its results
to. The session service only talks to these interfaces; it never knows
which storage or quota backend is plugged in.

Design principles
-----------------
* **Plain values in / out** – quizzes and flashcards cross the boundary as
  the frozen schema dataclasses, never as storage-specific records.
* **Upsert by id** – saving an existing id replaces it.
* **Cascade by reference** – removing a quiz removes the flashcards whose
  ``quiz_id`` points at it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from quizzy_app.modules.quiz.schemas import Quiz
from quizzy_app.modules.srs.schemas import Flashcard


class QuizRepository(ABC):
    """Storage contract for quizzes."""

    @abstractmethod
    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        """Return the quiz or ``None``."""
        ...

    @abstractmethod
    def save_quiz(self, quiz: Quiz) -> Quiz:
        """Create or replace the quiz with ``quiz.id``."""
        ...

    @abstractmethod
    def delete_quiz(self, quiz_id: str) -> bool:
        """Remove the quiz; ``False`` if it did not exist."""
        ...


class FlashcardRepository(ABC):
    """Storage contract for flashcards."""

    @abstractmethod
    def get_flashcard(self, card_id: str) -> Optional[Flashcard]:
        ...

    @abstractmethod
    def list_flashcards(self, quiz_id: Optional[str] = None) -> List[Flashcard]:
        """All cards, or only those derived from ``quiz_id``."""
        ...

    @abstractmethod
    def save_flashcards(self, cards: Sequence[Flashcard]) -> List[Flashcard]:
        """Bulk insert (or replace) a batch."""
        ...

    @abstractmethod
    def update_flashcard(self, card: Flashcard) -> Flashcard:
        ...

    @abstractmethod
    def delete_flashcards_for_quiz(self, quiz_id: str) -> int:
        """Cascade delete; returns the number of cards removed."""
        ...


class QuotaGate(ABC):
    """
    Daily quota collaborator.

    ``consume`` must confirm that quota remains for ``kind`` and decrement
    it in one step, returning ``False`` when none is left.
    """

    FLASHCARD_GENERATION = 'flashcard'

    @abstractmethod
    def consume(self, kind: str) -> bool:
        ...
