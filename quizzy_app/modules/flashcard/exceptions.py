from quizzy_app.core.errors import QuizzyError


class FlashcardError(QuizzyError):
    """Base exception for the flashcard module."""
    pass


class DuplicateFlashcardGenerationError(FlashcardError):
    """Raised when a quiz already has its flashcard batch."""

    def __init__(self, quiz_id: str):
        super().__init__(
            message=f"Flashcards were already generated for quiz {quiz_id}",
            code='FLASHCARDS_ALREADY_GENERATED',
            status_code=409,
            details={'quiz_id': quiz_id}
        )
        self.quiz_id = quiz_id


class QuizNotCompletedError(FlashcardError):
    """Raised when flashcards are requested for a quiz that has no score yet."""

    def __init__(self, quiz_id: str):
        super().__init__(
            message=f"Quiz {quiz_id} must be completed before generating flashcards",
            code='QUIZ_NOT_COMPLETED',
            status_code=409,
            details={'quiz_id': quiz_id}
        )
        self.quiz_id = quiz_id
