"""
Central Signal Registry for Event-Driven Architecture.

Modules publish lifecycle events here and subscribe to each other's events
without importing one another.

Usage:
    # Publisher (sender)
    from quizzy_app.core.signals import card_reviewed
    card_reviewed.send(service, card=updated_card, rating=3)

    # Subscriber (receiver) - in module's events.py
    @quiz_completed.connect
    def on_quiz_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

learning_signals = Namespace()

# Signal: Fired once when a quiz attempt transitions to completed
# Payload: quiz (the completed Quiz value)
quiz_completed = learning_signals.signal('quiz_completed')

# Signal: Fired after a flashcard batch has been derived and stored
# Payload: quiz_id, flashcards (list of Flashcard)
flashcards_generated = learning_signals.signal('flashcards_generated')

# Signal: Fired after a flashcard has been rescheduled and stored
# Payload: card (updated Flashcard), rating (int)
card_reviewed = learning_signals.signal('card_reviewed')

# ============================================
# Content Signals
# ============================================
content_signals = Namespace()

# Signal: Fired when a quiz and its flashcards are removed
# Payload: quiz_id, flashcards_removed (int)
quiz_deleted = content_signals.signal('quiz_deleted')
