# File: quizzy_app/modules/quiz/schemas.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from quizzy_app.utils.time_utils import from_epoch_ms, to_epoch_ms
from .config import QuizDefaultConfig
from .exceptions import InvalidQuestionError

CorrectAnswer = Union[str, FrozenSet[str]]


def _label_key(label: Any) -> str:
    return re.sub(r'[^a-z]', '', str(label or '').lower())


class QuestionType(Enum):
    """Closed set of question kinds; every consumer dispatches over all of them."""
    MCQ = "MCQ"
    TRUE_FALSE = "TrueFalse"
    SHORT_ANSWER = "ShortAnswer"
    ESSAY = "Essay"
    FILL_IN_THE_BLANK = "FillInTheBlank"

    @classmethod
    def from_label(cls, label: Any) -> 'QuestionType':
        """Map a stored or generated label ("True/False", "Long Answer" ...) onto the enum."""
        if isinstance(label, cls):
            return label
        try:
            return _QUESTION_TYPE_ALIASES[_label_key(label)]
        except KeyError:
            raise InvalidQuestionError(f"Unknown question type {label!r}") from None

    @property
    def is_free_text(self) -> bool:
        return self in (QuestionType.SHORT_ANSWER, QuestionType.ESSAY, QuestionType.FILL_IN_THE_BLANK)


_QUESTION_TYPE_ALIASES: Dict[str, QuestionType] = {
    'mcq': QuestionType.MCQ,
    'multiplechoice': QuestionType.MCQ,
    'multipleselect': QuestionType.MCQ,
    'truefalse': QuestionType.TRUE_FALSE,
    'shortanswer': QuestionType.SHORT_ANSWER,
    'essay': QuestionType.ESSAY,
    'longanswer': QuestionType.ESSAY,
    'fillintheblank': QuestionType.FILL_IN_THE_BLANK,
    'fillintheblanks': QuestionType.FILL_IN_THE_BLANK,
}


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXAM_STYLE = "ExamStyle"

    @classmethod
    def from_label(cls, label: Any) -> 'Difficulty':
        if isinstance(label, cls):
            return label
        if label is None or label == '':
            return cls.MEDIUM
        key = _label_key(label)
        for member in cls:
            if _label_key(member.value) == key:
                return member
        raise InvalidQuestionError(f"Unknown difficulty {label!r}")


class AttemptStatus(Enum):
    INTRO = "intro"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Question:
    """One item of a quiz. ``user_answer``/``is_correct`` are filled in at submit."""
    id: str
    text: str
    type: QuestionType
    correct_answer: CorrectAnswer
    options: Tuple[str, ...] = ()
    explanation: Optional[str] = None
    marks: int = QuizDefaultConfig.QUIZ_DEFAULT_MARKS
    user_answer: str = ""
    is_correct: Optional[bool] = None

    def __post_init__(self):
        object.__setattr__(self, 'type', QuestionType.from_label(self.type))
        object.__setattr__(self, 'options', tuple(self.options or ()))
        if isinstance(self.correct_answer, (set, frozenset, list, tuple)):
            object.__setattr__(self, 'correct_answer', frozenset(str(v) for v in self.correct_answer))
        elif self.correct_answer is None:
            object.__setattr__(self, 'correct_answer', "")

        if isinstance(self.marks, bool) or not isinstance(self.marks, int) or self.marks < 1:
            raise InvalidQuestionError(f"marks must be a positive integer, got {self.marks!r}", self.id)

        expected = QuizDefaultConfig.QUIZ_MCQ_OPTION_COUNT
        if self.type is QuestionType.MCQ and len(self.options) != expected:
            raise InvalidQuestionError(
                f"MCQ question needs exactly {expected} options, got {len(self.options)}", self.id
            )

    @property
    def is_multi_select(self) -> bool:
        return isinstance(self.correct_answer, frozenset)

    @property
    def display_options(self) -> Tuple[str, ...]:
        """Choices the learner picks from; empty for free-text questions."""
        if self.type is QuestionType.TRUE_FALSE:
            return tuple(QuizDefaultConfig.QUIZ_TRUE_FALSE_OPTIONS)
        if self.type is QuestionType.MCQ:
            return self.options
        return ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Question':
        question_id = data.get('id') or data.get('_id')
        if not question_id:
            raise InvalidQuestionError("Question document has no id")
        marks = data.get('marks')
        return cls(
            id=str(question_id),
            text=data.get('text', ''),
            type=QuestionType.from_label(data.get('type')),
            correct_answer=data.get('correctAnswer'),
            options=tuple(data.get('options') or ()),
            explanation=data.get('explanation'),
            marks=int(marks) if marks is not None else QuizDefaultConfig.QUIZ_DEFAULT_MARKS,
            user_answer=data.get('userAnswer') or "",
            is_correct=data.get('isCorrect'),
        )

    def to_dict(self) -> Dict[str, Any]:
        correct = sorted(self.correct_answer) if self.is_multi_select else self.correct_answer
        return {
            'id': self.id,
            'text': self.text,
            'type': self.type.value,
            'options': list(self.options),
            'correctAnswer': correct,
            'explanation': self.explanation,
            'marks': self.marks,
            'userAnswer': self.user_answer,
            'isCorrect': self.is_correct,
        }


@dataclass(frozen=True)
class Quiz:
    """A fixed, ordered sequence of questions plus run metadata."""
    id: str
    title: str
    topic: str = ""
    questions: Tuple[Question, ...] = ()
    difficulty: Difficulty = Difficulty.MEDIUM
    total_marks: Optional[int] = None
    exam_style: Optional[str] = None
    score: Optional[int] = None
    has_flashcards: bool = False
    time_spent_minutes: int = 0
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, 'questions', tuple(self.questions))
        object.__setattr__(self, 'difficulty', Difficulty.from_label(self.difficulty))

        seen = set()
        for question in self.questions:
            if question.id in seen:
                raise InvalidQuestionError("Duplicate question id in quiz", question.id)
            seen.add(question.id)

        if self.score is not None and (
                isinstance(self.score, bool) or not isinstance(self.score, int) or not 0 <= self.score <= 100):
            raise InvalidQuestionError(f"score must be an integer within 0-100, got {self.score!r}")

    @property
    def is_attempted(self) -> bool:
        return self.score is not None

    @property
    def available_marks(self) -> int:
        return sum(q.marks for q in self.questions)

    def get_question(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Quiz':
        quiz_id = data.get('id') or data.get('_id')
        if not quiz_id:
            raise InvalidQuestionError("Quiz document has no id")
        score = data.get('score')
        return cls(
            id=str(quiz_id),
            title=data.get('title', ''),
            topic=data.get('topic', ''),
            questions=tuple(Question.from_dict(q) for q in data.get('questions') or ()),
            difficulty=Difficulty.from_label(data.get('difficulty')),
            total_marks=data.get('totalMarks'),
            exam_style=data.get('examStyle'),
            score=int(score) if score is not None else None,
            has_flashcards=bool(data.get('isFlashcardSet', False)),
            time_spent_minutes=int(data.get('timeSpentMinutes') or 0),
            completed_at=from_epoch_ms(data.get('completedAt')),
            created_at=from_epoch_ms(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        doc = {
            'id': self.id,
            'title': self.title,
            'topic': self.topic,
            'difficulty': self.difficulty.value,
            'totalMarks': self.total_marks,
            'examStyle': self.exam_style,
            'questions': [q.to_dict() for q in self.questions],
            'isFlashcardSet': self.has_flashcards,
            'timeSpentMinutes': self.time_spent_minutes,
            'completedAt': to_epoch_ms(self.completed_at),
            'createdAt': to_epoch_ms(self.created_at),
        }
        # An absent score is what marks a quiz as not yet attempted.
        if self.score is not None:
            doc['score'] = self.score
        return doc


@dataclass(frozen=True)
class QuizAttemptState:
    """
    Transient snapshot of one learner working through a quiz.

    Never mutated: every transition in ``QuizSessionEngine`` returns a new
    instance, or the very same instance when the transition is rejected.
    """
    quiz: Quiz
    status: AttemptStatus = AttemptStatus.INTRO
    current_index: int = 0
    answers: Mapping[str, str] = field(default_factory=dict)
    started_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, 'answers', MappingProxyType(dict(self.answers)))

    @property
    def question_count(self) -> int:
        return len(self.quiz.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if not self.quiz.questions:
            return None
        return self.quiz.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= self.question_count - 1

    def progress(self) -> Dict[str, int]:
        """Position for the presentation layer, 1-based like the UI shows it."""
        return {
            'current': min(self.current_index + 1, self.question_count),
            'total': self.question_count,
            'answered': sum(1 for q in self.quiz.questions if (self.answers.get(q.id) or '').strip()),
        }
