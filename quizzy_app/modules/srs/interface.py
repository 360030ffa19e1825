# File: quizzy_app/modules/srs/interface.py
from typing import Dict, Iterable, List, Optional
import datetime

from .engine.core import Sm2Scheduler
from .logics.due_selection import deck_stats, order_for_review, select_due_cards
from .schemas import DeckStats, Flashcard, Rating


class SrsInterface:
    """Public API for the SRS module."""

    @staticmethod
    def schedule(card: Flashcard, rating, now: Optional[datetime.datetime] = None) -> Flashcard:
        """Process a review and return the rescheduled card."""
        return Sm2Scheduler.schedule(card, rating, now=now)

    @staticmethod
    def predict_next_intervals(card: Flashcard) -> Dict[Rating, str]:
        return Sm2Scheduler.predict_next_intervals(card)

    @staticmethod
    def get_due_cards(cards: Iterable[Flashcard], now: Optional[datetime.datetime] = None) -> List[Flashcard]:
        return select_due_cards(cards, now)

    @staticmethod
    def get_review_queue(cards: Iterable[Flashcard], now: Optional[datetime.datetime] = None) -> List[Flashcard]:
        return order_for_review(cards, now)

    @staticmethod
    def get_deck_stats(cards: Iterable[Flashcard], now: Optional[datetime.datetime] = None) -> DeckStats:
        return deck_stats(cards, now)
