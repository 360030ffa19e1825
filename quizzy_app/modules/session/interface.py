# File: quizzy_app/modules/session/interface.py
from flask import current_app

from .services.session_service import LearningSessionService

EXTENSION_KEY = 'quizzy_learning'


class SessionInterface:
    """Access point to the learning session service bound to the running app."""

    @staticmethod
    def get_service(app=None) -> LearningSessionService:
        app = app or current_app
        return app.extensions[EXTENSION_KEY]
