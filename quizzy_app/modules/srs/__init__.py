"""Spaced repetition: flashcard state, SM-2 scheduling and due selection."""

from .config import SrsDefaultConfig

module_metadata = {
    'name': 'Spaced Repetition',
    'category': 'System',
    'enabled': True
}


def setup_module(app):
    """Apply the scheduler defaults to the app config."""
    for key in dir(SrsDefaultConfig):
        if key.isupper():
            app.config.setdefault(key, getattr(SrsDefaultConfig, key))
