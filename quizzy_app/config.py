# File: quizzy_app/config.py

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Quizzy application configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-replace-in-production'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or None
    LOG_JSON = _env_flag('LOG_JSON')

    # Flashcards generated from completed quizzes
    FLASHCARD_AUTO_GENERATE = _env_flag('FLASHCARD_AUTO_GENERATE')
    FLASHCARD_EXPLANATION_PLACEHOLDER = os.environ.get(
        'FLASHCARD_EXPLANATION_PLACEHOLDER', 'No explanation provided.'
    )
