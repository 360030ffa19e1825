"""
Tests for deriving flashcards from completed quizzes.
"""

import dataclasses

import pytest

from quizzy_app.core.errors import ValidationError
from quizzy_app.modules.flashcard.exceptions import DuplicateFlashcardGenerationError, QuizNotCompletedError
from quizzy_app.modules.flashcard.logics.bridge import (
    build_back,
    build_flashcards_for_quiz,
    build_manual_flashcard,
)
from quizzy_app.modules.quiz.schemas import Question, QuestionType

from conftest import make_mcq, make_short


@pytest.fixture
def completed_quiz(two_question_quiz):
    return dataclasses.replace(two_question_quiz, score=50)


class TestBuildBack:

    def test_answer_and_explanation(self):
        assert build_back(make_mcq(explanation='Capital of France.')) == 'Paris\n\nCapital of France.'

    def test_placeholder_when_no_explanation(self):
        assert build_back(make_short(explanation='  ')) == 'Oxygen\n\nNo explanation provided.'

    def test_custom_placeholder(self):
        assert build_back(make_short(), placeholder='n/a') == 'Oxygen\n\nn/a'

    def test_multi_select_answer_listed(self):
        question = Question(
            id='ms', text='?', type=QuestionType.MCQ,
            correct_answer={'Rome', 'Paris'}, options=('Paris', 'London', 'Rome', 'Berlin'),
        )
        assert build_back(question).startswith('Paris, Rome\n\n')


class TestBuildFlashcardsForQuiz:

    def test_one_card_per_question(self, completed_quiz, now):
        flagged, cards = build_flashcards_for_quiz(completed_quiz, now=now)

        assert flagged.has_flashcards is True
        assert completed_quiz.has_flashcards is False
        assert [c.id for c in cards] == ['fc_q1', 'fc_q2']
        assert cards[0].front == 'Question q1?'
        assert cards[0].back == 'Paris\n\nCapital of France.'
        assert cards[1].back == 'Oxygen\n\nNo explanation provided.'

    def test_cards_are_fresh_and_due_now(self, completed_quiz, now):
        _, cards = build_flashcards_for_quiz(completed_quiz, now=now)
        for card in cards:
            assert (card.interval, card.ease_factor, card.repetition) == (0, 2.5, 0)
            assert card.next_review == now
            assert card.quiz_id == completed_quiz.id

    def test_deterministic(self, completed_quiz, now):
        assert build_flashcards_for_quiz(completed_quiz, now=now) == build_flashcards_for_quiz(completed_quiz, now=now)

    def test_second_batch_rejected(self, completed_quiz, now):
        flagged, _ = build_flashcards_for_quiz(completed_quiz, now=now)
        with pytest.raises(DuplicateFlashcardGenerationError):
            build_flashcards_for_quiz(flagged, now=now)

    def test_unscored_quiz_rejected(self, two_question_quiz):
        with pytest.raises(QuizNotCompletedError) as exc_info:
            build_flashcards_for_quiz(two_question_quiz)
        assert exc_info.value.code == 'QUIZ_NOT_COMPLETED'


class TestManualFlashcard:

    def test_creates_new_card(self, now):
        card = build_manual_flashcard('Front', 'Back', now=now)
        assert card.front == 'Front'
        assert card.is_new
        assert card.quiz_id is None
        assert len(card.id) == 32

    def test_blank_side_rejected(self):
        with pytest.raises(ValidationError):
            build_manual_flashcard('Front', '   ')
