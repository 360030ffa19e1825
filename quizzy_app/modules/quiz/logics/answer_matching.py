"""
Answer Matching - Pure grading rules for quiz questions.

No state, no I/O: given a question and the learner's raw submission,
decide whether it is correct and derive the attempt score.
"""

from typing import Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Sequence

from ..config import QuizDefaultConfig
from ..schemas import Question, QuestionType


def normalize_answer(value: Optional[str]) -> str:
    """Lower-case and trim; ``None`` normalizes to the empty string."""
    if value is None:
        return ""
    return str(value).strip().lower()


def has_answer(value: Optional[str]) -> bool:
    """True when the submission is non-empty after trimming."""
    return bool(value is not None and str(value).strip())


def encode_selection(values: Iterable[str], separator: str = QuizDefaultConfig.QUIZ_MULTI_SELECT_SEPARATOR) -> str:
    """Join multi-select choices into the single string an answer is stored as."""
    return separator.join(str(v) for v in values)


def decode_selection(raw: Optional[str], separator: str = QuizDefaultConfig.QUIZ_MULTI_SELECT_SEPARATOR) -> FrozenSet[str]:
    if not raw:
        return frozenset()
    return frozenset(part for part in (normalize_answer(p) for p in str(raw).split(separator)) if part)


def _normalized_match(question: Question, raw: Optional[str]) -> bool:
    return normalize_answer(raw) == normalize_answer(question.correct_answer)


def _selection_match(question: Question, raw: Optional[str]) -> bool:
    expected = frozenset(normalize_answer(v) for v in question.correct_answer)
    return decode_selection(raw) == expected


def _match_choice(question: Question, raw: Optional[str]) -> bool:
    if question.is_multi_select:
        return _selection_match(question, raw)
    # The raw exact match is an extra acceptance path, OR'd with the normalized one.
    return _normalized_match(question, raw) or (raw is not None and raw == question.correct_answer)


def _match_text(question: Question, raw: Optional[str]) -> bool:
    if question.is_multi_select:
        return _selection_match(question, raw)
    return _normalized_match(question, raw)


_MATCHERS: Dict[QuestionType, Callable[[Question, Optional[str]], bool]] = {
    QuestionType.MCQ: _match_choice,
    QuestionType.TRUE_FALSE: _match_text,
    QuestionType.SHORT_ANSWER: _match_text,
    QuestionType.ESSAY: _match_text,
    QuestionType.FILL_IN_THE_BLANK: _match_text,
}

_unmatched = set(QuestionType) - set(_MATCHERS)
if _unmatched:
    raise RuntimeError(f"No answer matcher registered for {sorted(t.value for t in _unmatched)}")


def is_answer_correct(question: Question, raw_answer: Optional[str]) -> bool:
    """Grade one submission against ``question.correct_answer``."""
    return _MATCHERS[question.type](question, raw_answer)


def calculate_score(questions: Sequence[Question], answers: Mapping[str, str]) -> int:
    """
    Percentage of correctly answered questions.

    Returns:
        ``round(100 * correct / total)`` as an int in [0, 100]; 0 for an
        empty quiz.
    """
    total = len(questions)
    if total == 0:
        return 0
    correct = sum(1 for q in questions if is_answer_correct(q, answers.get(q.id)))
    # Half-up rounding so 0.5 always rounds away from zero.
    return int(100 * correct / total + 0.5)


def summarize_results(questions: Sequence[Question]) -> Dict[str, int]:
    """Tally a graded question list (``is_correct`` already set)."""
    correct = [q for q in questions if q.is_correct]
    return {
        'correct': len(correct),
        'incorrect': len(questions) - len(correct),
        'total': len(questions),
        'marks_earned': sum(q.marks for q in correct),
        'marks_available': sum(q.marks for q in questions),
    }
