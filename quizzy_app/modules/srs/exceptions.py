from quizzy_app.core.errors import ValidationError


class SrsError(ValidationError):
    """Base exception for the SRS module."""
    pass


class InvalidRatingError(SrsError):
    """Raised when the provided rating is not valid (must be 1-4)."""

    def __init__(self, rating):
        super().__init__(
            message=f"Rating must be one of 1, 2, 3, 4; got {rating!r}",
            errors={'rating': repr(rating)},
            code='INVALID_RATING'
        )
        self.rating = rating


class InvalidCardStateError(SrsError):
    """Raised when a flashcard's scheduling fields are out of range."""

    def __init__(self, message: str, card_id: str = None):
        super().__init__(
            message=message,
            errors={'card_id': card_id} if card_id else None,
            code='INVALID_CARD_STATE'
        )
