"""Quiz module: question model, answer matching and the attempt state machine."""

from .config import QuizDefaultConfig

module_metadata = {
    'name': 'Quizzes',
    'category': 'Learning',
    'enabled': True
}


def setup_module(app):
    """Apply the quiz defaults to the app config."""
    for key in dir(QuizDefaultConfig):
        if key.isupper():
            app.config.setdefault(key, getattr(QuizDefaultConfig, key))
