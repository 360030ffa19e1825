"""
Tests for the quiz attempt state machine.

Tests cover:
- intro -> active -> completed transitions
- The answer-before-advance gate
- Scoring on submit and rehydration of scored quizzes
"""

import datetime

import pytest

from quizzy_app.modules.quiz.engine.core import QuizSessionEngine
from quizzy_app.modules.quiz.schemas import AttemptStatus, Quiz, QuizAttemptState

from conftest import make_mcq, make_short


def _active(quiz, now=None):
    return QuizSessionEngine.start_quiz(QuizSessionEngine.open_attempt(quiz), now=now)


class TestStartQuiz:

    def test_open_unattempted_quiz_is_intro(self, capital_quiz):
        state = QuizSessionEngine.open_attempt(capital_quiz)
        assert state.status is AttemptStatus.INTRO
        assert state.current_index == 0
        assert dict(state.answers) == {}

    def test_start_moves_to_active(self, capital_quiz, now):
        state = _active(capital_quiz, now)
        assert state.status is AttemptStatus.ACTIVE
        assert state.started_at == now

    def test_second_start_changes_nothing(self, two_question_quiz):
        state = _active(two_question_quiz)
        state = QuizSessionEngine.answer_current(state, 'Paris')
        state = QuizSessionEngine.next_question(state)

        again = QuizSessionEngine.start_quiz(state)

        assert again is state
        assert again.current_index == 1
        assert again.answers == {'q1': 'Paris'}

    def test_answer_ignored_before_start(self, capital_quiz):
        state = QuizSessionEngine.open_attempt(capital_quiz)
        assert QuizSessionEngine.answer(state, 'q1', 'Paris') is state


class TestAnswerAndNavigation:

    def test_answer_does_not_move_pointer(self, two_question_quiz):
        state = QuizSessionEngine.answer(_active(two_question_quiz), 'q1', 'Rome')
        assert state.current_index == 0
        assert state.answers['q1'] == 'Rome'

    def test_answer_overwrites(self, two_question_quiz):
        state = _active(two_question_quiz)
        state = QuizSessionEngine.answer(state, 'q1', 'Rome')
        state = QuizSessionEngine.answer(state, 'q1', 'Paris')
        assert state.answers['q1'] == 'Paris'

    def test_unknown_question_is_ignored(self, two_question_quiz):
        state = _active(two_question_quiz)
        assert QuizSessionEngine.answer(state, 'nope', 'x') is state

    def test_answers_cannot_be_mutated(self, two_question_quiz):
        state = QuizSessionEngine.answer(_active(two_question_quiz), 'q1', 'Paris')
        with pytest.raises(TypeError):
            state.answers['q1'] = 'Rome'

    def test_next_blocked_until_answered(self, two_question_quiz):
        state = _active(two_question_quiz)
        assert not QuizSessionEngine.can_advance(state)
        assert QuizSessionEngine.next_question(state) is state

    def test_whitespace_answer_does_not_count(self, two_question_quiz):
        state = QuizSessionEngine.answer_current(_active(two_question_quiz), '   ')
        assert QuizSessionEngine.next_question(state) is state

    def test_next_after_answer(self, two_question_quiz):
        state = QuizSessionEngine.answer_current(_active(two_question_quiz), 'Paris')
        assert QuizSessionEngine.can_advance(state)
        state = QuizSessionEngine.next_question(state)
        assert state.current_index == 1
        assert state.current_question.id == 'q2'

    def test_next_stays_on_last_question(self, capital_quiz):
        state = QuizSessionEngine.answer_current(_active(capital_quiz), 'Paris')
        assert state.is_last_question
        assert not QuizSessionEngine.can_advance(state)
        assert QuizSessionEngine.next_question(state).current_index == 0

    def test_previous_keeps_answers(self, two_question_quiz):
        state = QuizSessionEngine.answer_current(_active(two_question_quiz), 'Paris')
        state = QuizSessionEngine.next_question(state)
        state = QuizSessionEngine.previous_question(state)
        assert state.current_index == 0
        assert state.answers == {'q1': 'Paris'}
        assert QuizSessionEngine.previous_question(state) is state

    def test_progress(self, two_question_quiz):
        state = QuizSessionEngine.answer_current(_active(two_question_quiz), 'Paris')
        assert state.progress() == {'current': 1, 'total': 2, 'answered': 1}


class TestSubmit:

    def test_single_correct_mcq_scores_100(self, capital_quiz):
        state = QuizSessionEngine.answer_current(_active(capital_quiz), 'Paris')
        done = QuizSessionEngine.submit(state)

        assert done.status is AttemptStatus.COMPLETED
        assert done.quiz.score == 100
        assert done.quiz.questions[0].is_correct is True
        assert done.quiz.questions[0].user_answer == 'Paris'

    def test_one_of_two_correct_scores_50(self, two_question_quiz):
        state = QuizSessionEngine.answer_current(_active(two_question_quiz), 'Paris')
        state = QuizSessionEngine.next_question(state)
        state = QuizSessionEngine.answer_current(state, 'Nitrogen')
        done = QuizSessionEngine.submit(state)

        assert done.quiz.score == 50
        assert [q.is_correct for q in done.quiz.questions] == [True, False]

    def test_submit_blocked_when_current_unanswered(self, capital_quiz):
        state = _active(capital_quiz)
        assert not QuizSessionEngine.can_submit(state)
        assert QuizSessionEngine.submit(state) is state

    def test_submit_gates_on_current_question_only(self, two_question_quiz):
        state = _active(two_question_quiz)
        state = QuizSessionEngine.answer(state, 'q1', 'Paris')
        state = QuizSessionEngine.next_question(state)
        state = QuizSessionEngine.answer(state, 'q2', 'Oxygen')
        state = QuizSessionEngine.previous_question(state)
        state = QuizSessionEngine.answer(state, 'q1', '')

        # q1 is in view and now blank, so the gate holds
        assert QuizSessionEngine.submit(state) is state

    def test_skipped_question_graded_wrong(self):
        quiz = Quiz(id='quiz-3', title='Skip', questions=(make_mcq('q1'), make_short('q2')))
        state = _active(quiz)
        state = QuizSessionEngine.answer(state, 'q1', 'Paris')
        state = QuizSessionEngine.next_question(state)
        state = QuizSessionEngine.answer(state, 'q2', 'Oxygen')
        state = QuizSessionEngine.answer(state, 'q1', '')
        done = QuizSessionEngine.submit(state)

        assert done.status is AttemptStatus.COMPLETED
        assert done.quiz.score == 50
        assert done.quiz.questions[0].is_correct is False

    def test_second_submit_is_noop(self, capital_quiz):
        state = QuizSessionEngine.answer_current(_active(capital_quiz), 'Paris')
        done = QuizSessionEngine.submit(state)
        assert QuizSessionEngine.submit(done) is done

    def test_completed_state_rejects_edits(self, capital_quiz):
        done = QuizSessionEngine.submit(QuizSessionEngine.answer_current(_active(capital_quiz), 'Paris'))
        assert QuizSessionEngine.answer(done, 'q1', 'Rome') is done
        assert QuizSessionEngine.next_question(done) is done
        assert QuizSessionEngine.previous_question(done) is done
        assert QuizSessionEngine.start_quiz(done) is done

    def test_input_state_untouched(self, capital_quiz):
        state = QuizSessionEngine.answer_current(_active(capital_quiz), 'Paris')
        QuizSessionEngine.submit(state)
        assert state.status is AttemptStatus.ACTIVE
        assert state.quiz.score is None

    def test_time_spent_recorded(self, capital_quiz, now):
        state = QuizSessionEngine.answer_current(_active(capital_quiz, now), 'Paris')
        done = QuizSessionEngine.submit(state, now=now + datetime.timedelta(minutes=7, seconds=10))
        assert done.quiz.time_spent_minutes == 7
        assert done.quiz.completed_at == now + datetime.timedelta(minutes=7, seconds=10)

    def test_empty_quiz_submits_with_zero(self):
        state = _active(Quiz(id='empty', title='Empty'))
        assert QuizSessionEngine.can_submit(state)
        done = QuizSessionEngine.submit(state)
        assert done.status is AttemptStatus.COMPLETED
        assert done.quiz.score == 0


class TestRehydration:

    def test_scored_quiz_opens_completed(self, capital_quiz):
        done = QuizSessionEngine.submit(QuizSessionEngine.answer_current(_active(capital_quiz), 'Paris'))

        reopened = QuizSessionEngine.open_attempt(done.quiz)

        assert reopened.status is AttemptStatus.COMPLETED
        assert reopened.answers == {'q1': 'Paris'}
        assert QuizSessionEngine.start_quiz(reopened) is reopened

    def test_plain_state_defaults(self, capital_quiz):
        state = QuizAttemptState(quiz=capital_quiz)
        assert state.status is AttemptStatus.INTRO
        assert state.started_at is None
