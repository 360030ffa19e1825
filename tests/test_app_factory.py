import logging

import pytest

from quizzy_app.core.errors import QuizzyError, ValidationError
from quizzy_app.core.logging_config import ROOT_LOGGER_NAME
from quizzy_app.core.module_registry import DEFAULT_MODULES, ModuleDefinition
from quizzy_app.modules.session.interface import EXTENSION_KEY, SessionInterface
from quizzy_app.modules.session.services.session_service import LearningSessionService


class TestCreateApp:

    def test_module_defaults_applied(self, app):
        assert app.config['QUIZ_MCQ_OPTION_COUNT'] == 4
        assert app.config['SRS_MIN_EASE_FACTOR'] == 1.3
        assert app.config['FLASHCARD_EXPLANATION_PLACEHOLDER'] == 'No explanation provided.'

    def test_service_bound_to_app(self, app):
        service = SessionInterface.get_service()
        assert isinstance(service, LearningSessionService)
        assert app.extensions[EXTENSION_KEY] is service
        assert service.auto_generate_flashcards is False

    def test_package_logger_configured(self, app):
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert logger.level == logging.INFO
        assert all(not isinstance(h, logging.FileHandler) for h in logger.handlers)


class TestModuleRegistry:

    def test_session_module_registered_last(self):
        assert [m.import_path for m in DEFAULT_MODULES][-1] == 'quizzy_app.modules.session'

    def test_load_module_requires_setup_hook(self):
        definition = ModuleDefinition('quizzy_app.modules.quiz.config')
        with pytest.raises(TypeError, match='setup_module'):
            definition.load_module()


class TestErrors:

    def test_to_dict(self):
        error = ValidationError('Bad input', errors={'front': 'required'})
        assert error.to_dict() == {
            'success': False,
            'message': 'Bad input',
            'code': 'VALIDATION_ERROR',
            'details': {'errors': {'front': 'required'}},
        }
        assert isinstance(error, QuizzyError)
        assert error.status_code == 400
