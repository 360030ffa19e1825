"""Due-card selection and deck statistics."""

import datetime
from typing import Iterable, List, Optional

from quizzy_app.utils.time_utils import ensure_utc, utcnow
from ..schemas import DeckStats, Flashcard

_EPOCH = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


def _due_key(card: Flashcard):
    return (card.next_review or _EPOCH, card.id)


def select_due_cards(cards: Iterable[Flashcard], now: Optional[datetime.datetime] = None) -> List[Flashcard]:
    """
    Every card with ``next_review <= now``.

    Ordered most-overdue first, which is unrelated to creation order.
    """
    now = ensure_utc(now) if now else utcnow()
    return sorted((c for c in cards if c.is_due(now)), key=_due_key)


def order_for_review(cards: Iterable[Flashcard], now: Optional[datetime.datetime] = None) -> List[Flashcard]:
    """All cards, due ones first, then the rest by upcoming due date."""
    now = ensure_utc(now) if now else utcnow()
    cards = list(cards)
    due = select_due_cards(cards, now)
    due_ids = {c.id for c in due}
    upcoming = sorted((c for c in cards if c.id not in due_ids), key=_due_key)
    return due + upcoming


def deck_stats(cards: Iterable[Flashcard], now: Optional[datetime.datetime] = None) -> DeckStats:
    now = ensure_utc(now) if now else utcnow()
    stats = DeckStats()
    for card in cards:
        stats.total += 1
        if card.is_due(now):
            stats.due += 1
        elif stats.next_due_at is None or card.next_review < stats.next_due_at:
            stats.next_due_at = card.next_review
        if card.is_new:
            stats.new += 1
        else:
            stats.learned += 1
    return stats
