# modules/flashcard/events.py
import logging

from quizzy_app.core.errors import QuotaExceededError
from quizzy_app.core.signals import quiz_completed

logger = logging.getLogger(__name__)


def init_events(app=None):
    """
    Subscribe to the quiz lifecycle so a completed quiz can spawn its
    flashcard batch without the quiz module knowing about flashcards.

    Safe to call repeatedly; blinker keeps a single connection per receiver.
    """
    quiz_completed.connect(handle_quiz_completion)


def handle_quiz_completion(sender, quiz=None, **extra):
    """
    Auto-generate the batch when the sending service has it enabled.

    ``sender`` is the ``LearningSessionService`` that completed the quiz.
    """
    if quiz is None or not getattr(sender, 'auto_generate_flashcards', False):
        return
    if quiz.has_flashcards:
        return
    try:
        sender.generate_flashcards(quiz.id)
    except QuotaExceededError as e:
        logger.warning("Skipped automatic flashcards for quiz %s: %s", quiz.id, e.message)
