"""
SRS Engine - Pure Spaced Repetition Scheduling

Simplified SM-2 scheduler for flashcards rated on a four-button scale.
No storage access - only calculations based on inputs.

This engine provides:
- Next interval / ease factor / due date for a rating
- Interval previews for the rating buttons
"""

from __future__ import annotations

import dataclasses
import datetime
import logging
import math
from typing import Dict, Optional

from quizzy_app.utils.time_utils import add_days, ensure_utc, utcnow
from ..config import SrsDefaultConfig
from ..schemas import Flashcard, Rating

logger = logging.getLogger(__name__)


class Sm2Scheduler:
    """
    Pure calculation engine for flashcard reviews.
    All methods are static and use only provided inputs.
    """

    @staticmethod
    def next_interval(interval: int, ease_factor: float, rating: Rating) -> int:
        """
        Interval in days after a review.

        Args:
            interval: Current interval in days (0 = never reviewed)
            ease_factor: Current ease factor (before this review updates it)
            rating: Validated rating

        Returns:
            New interval, always >= 1
        """
        if rating == Rating.FORGOT:
            return SrsDefaultConfig.SRS_LAPSE_INTERVAL_DAYS
        if interval == 0:
            return SrsDefaultConfig.SRS_FIRST_INTERVAL_DAYS
        if interval == 1:
            return SrsDefaultConfig.SRS_SECOND_INTERVAL_DAYS
        return math.ceil(interval * ease_factor)

    @staticmethod
    def next_ease_factor(ease_factor: float, rating: Rating) -> float:
        """
        SM-2 ease update on the 4-point scale:
        EF' = EF + (0.1 - (4-r) * (0.08 + (4-r)*0.02)), floored at 1.3.

        "Forgot" leaves the ease factor untouched.
        """
        if rating == Rating.FORGOT:
            return ease_factor
        miss = 4 - int(rating)
        new_ef = ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
        return max(SrsDefaultConfig.SRS_MIN_EASE_FACTOR, new_ef)

    @classmethod
    def schedule(cls, card: Flashcard, rating, now: Optional[datetime.datetime] = None) -> Flashcard:
        """
        Review ``card`` with ``rating`` and return the rescheduled copy.

        The input card is never modified.

        Raises:
            InvalidRatingError: rating is not one of 1, 2, 3, 4
        """
        rating = Rating.parse(rating)
        now = ensure_utc(now) if now else utcnow()

        interval = cls.next_interval(card.interval, card.ease_factor, rating)
        ease_factor = cls.next_ease_factor(card.ease_factor, rating)

        updated = dataclasses.replace(
            card,
            interval=interval,
            ease_factor=ease_factor,
            repetition=card.repetition + 1,
            next_review=add_days(now, interval),
        )
        logger.debug(
            "Card %s rated %s: interval %d -> %d, ease %.2f -> %.2f",
            card.id, rating.name, card.interval, interval, card.ease_factor, ease_factor,
        )
        return updated

    @classmethod
    def predict_next_intervals(cls, card: Flashcard) -> Dict[Rating, str]:
        """
        Predict the interval each rating button would produce, without
        scheduling. Returns a dict mapping Rating -> display string (e.g. '3d').
        """
        def _fmt_ivl(days: int) -> str:
            if days >= 365:
                return f"{round(days / 365.0, 1)}y"
            if days >= 30:
                return f"{round(days / 30.0, 1)}mo"
            return f"{days}d"

        return {
            rating: _fmt_ivl(cls.next_interval(card.interval, card.ease_factor, rating))
            for rating in Rating
        }
