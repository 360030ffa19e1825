import datetime
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from quizzy_app import create_app
from quizzy_app.config import Config
from quizzy_app.modules.quiz.schemas import Question, QuestionType, Quiz
from quizzy_app.modules.session.services.session_service import LearningSessionService
from quizzy_app.modules.session.stores.memory import InMemoryLearningStore

NOW = datetime.datetime(2024, 5, 1, 9, 0, tzinfo=datetime.timezone.utc)


class TestConfig(Config):
    TESTING = True
    LOG_DIR = None
    LOG_JSON = False
    LOG_LEVEL = 'INFO'
    FLASHCARD_AUTO_GENERATE = False


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    return InMemoryLearningStore()


@pytest.fixture
def service(store):
    return LearningSessionService(quizzes=store, flashcards=store)


def make_mcq(question_id='q1', correct='Paris', explanation=None, marks=1):
    return Question(
        id=question_id,
        text=f'Question {question_id}?',
        type=QuestionType.MCQ,
        correct_answer=correct,
        options=('Paris', 'London', 'Rome', 'Berlin'),
        explanation=explanation,
        marks=marks,
    )


def make_short(question_id='q2', correct='Oxygen', explanation=None):
    return Question(
        id=question_id,
        text=f'Question {question_id}?',
        type=QuestionType.SHORT_ANSWER,
        correct_answer=correct,
        explanation=explanation,
    )


@pytest.fixture
def capital_quiz():
    """One MCQ question whose answer is Paris."""
    return Quiz(id='quiz-1', title='Capitals', topic='Geography', questions=(make_mcq(),))


@pytest.fixture
def two_question_quiz():
    return Quiz(
        id='quiz-2',
        title='Mixed',
        topic='General',
        questions=(make_mcq('q1', explanation='Capital of France.'), make_short('q2')),
    )
