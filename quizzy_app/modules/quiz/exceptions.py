from quizzy_app.core.errors import ValidationError


class InvalidQuestionError(ValidationError):
    """Raised when a question or quiz document violates its shape rules."""

    def __init__(self, message: str, question_id: str = None):
        super().__init__(
            message=message,
            errors={'question_id': question_id} if question_id else None,
            code='INVALID_QUESTION'
        )
