# File: quizzy_app/modules/srs/schemas.py
from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

from quizzy_app.utils.time_utils import ensure_utc, from_epoch_ms, to_epoch_ms, utcnow
from .config import SrsDefaultConfig
from .exceptions import InvalidCardStateError, InvalidRatingError


class Rating(IntEnum):
    """Four-button review scale."""
    FORGOT = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @classmethod
    def parse(cls, value: Any) -> 'Rating':
        """
        Validate a tapped rating.

        Only the integers 1-4 (or Rating members) are accepted; booleans,
        floats and out-of-range values raise ``InvalidRatingError`` rather
        than being clamped.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRatingError(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidRatingError(value) from None

    @classmethod
    def from_label(cls, label: str) -> 'Rating':
        """Map a button label ("forgot", "again", "good" ...) to a rating."""
        key = str(label or '').strip().lower()
        if key == 'again':
            return cls.FORGOT
        try:
            return cls[key.upper()]
        except KeyError:
            raise InvalidRatingError(label) from None


@dataclass(frozen=True)
class Flashcard:
    """One spaced-repetition item and its scheduling state."""
    id: str
    front: str
    back: str
    quiz_id: Optional[str] = None
    interval: int = 0
    ease_factor: float = SrsDefaultConfig.SRS_DEFAULT_EASE_FACTOR
    repetition: int = 0
    next_review: Optional[datetime.datetime] = None
    created_at: Optional[datetime.datetime] = None

    def __post_init__(self):
        if isinstance(self.interval, bool) or not isinstance(self.interval, int) or self.interval < 0:
            raise InvalidCardStateError(f"interval must be a non-negative integer, got {self.interval!r}", self.id)
        if isinstance(self.repetition, bool) or not isinstance(self.repetition, int) or self.repetition < 0:
            raise InvalidCardStateError(f"repetition must be a non-negative integer, got {self.repetition!r}", self.id)
        if (isinstance(self.ease_factor, bool) or not isinstance(self.ease_factor, (int, float))
                or not self.ease_factor >= SrsDefaultConfig.SRS_MIN_EASE_FACTOR):
            raise InvalidCardStateError(
                f"ease_factor must be a number >= {SrsDefaultConfig.SRS_MIN_EASE_FACTOR}, got {self.ease_factor!r}",
                self.id,
            )
        object.__setattr__(self, 'next_review', ensure_utc(self.next_review))
        object.__setattr__(self, 'created_at', ensure_utc(self.created_at))

    @property
    def is_new(self) -> bool:
        """Never successfully reviewed."""
        return self.interval == 0

    def is_due(self, now: Optional[datetime.datetime] = None) -> bool:
        """Due iff ``next_review <= now``; a card without a due date is due."""
        if self.next_review is None:
            return True
        return self.next_review <= ensure_utc(now or utcnow())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Flashcard':
        card_id = data.get('id') or data.get('_id')
        if not card_id:
            raise InvalidCardStateError("Flashcard document has no id")
        quiz_id = data.get('quizId')
        ease = data.get('easeFactor')
        return cls(
            id=str(card_id),
            front=data.get('front', ''),
            back=data.get('back', ''),
            quiz_id=str(quiz_id) if quiz_id else None,
            interval=int(data.get('interval') or 0),
            ease_factor=float(ease) if ease is not None else SrsDefaultConfig.SRS_DEFAULT_EASE_FACTOR,
            repetition=int(data.get('repetition') or 0),
            next_review=from_epoch_ms(data.get('nextReview')),
            created_at=from_epoch_ms(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'quizId': self.quiz_id,
            'front': self.front,
            'back': self.back,
            'interval': self.interval,
            'easeFactor': self.ease_factor,
            'repetition': self.repetition,
            'nextReview': to_epoch_ms(self.next_review),
            'createdAt': to_epoch_ms(self.created_at),
        }


@dataclass
class DeckStats:
    """Counts shown on the review screen."""
    total: int = 0
    due: int = 0
    new: int = 0
    learned: int = 0
    next_due_at: Optional[datetime.datetime] = None
