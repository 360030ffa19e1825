"""
Error types for Quizzy

Provides:
- A base exception carrying a machine-readable code
- A consistent dictionary form for collaborators that surface errors
"""

from typing import Optional, Dict, Any


class QuizzyError(Exception):
    """Base exception class for Quizzy."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for a JSON payload."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class NotFoundError(QuizzyError):
    """Resource not found."""

    def __init__(self, message: str = 'Resource not found', resource: str = None):
        super().__init__(
            message=message,
            code='NOT_FOUND',
            status_code=404,
            details={'resource': resource} if resource else None
        )


class ValidationError(QuizzyError):
    """Input validation failed."""

    def __init__(self, message: str = 'Validation failed', errors: Dict = None, code: str = 'VALIDATION_ERROR'):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details={'errors': errors} if errors else None
        )


class QuotaExceededError(QuizzyError):
    """The quota collaborator refused the operation."""

    def __init__(self, message: str = 'Daily quota exhausted', kind: str = None):
        super().__init__(
            message=message,
            code='QUOTA_EXCEEDED',
            status_code=429,
            details={'kind': kind} if kind else None
        )
