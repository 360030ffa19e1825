"""Flashcards derived from quizzes, plus manual cards."""

from .config import FlashcardDefaultConfig

module_metadata = {
    'name': 'Flashcards',
    'category': 'Learning',
    'enabled': True
}


def setup_module(app):
    for key in dir(FlashcardDefaultConfig):
        if key.isupper():
            app.config.setdefault(key, getattr(FlashcardDefaultConfig, key))

    from .events import init_events
    init_events(app)
