"""
Immutable values passed between the repositories, services and API layer.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence, Tuple

from .exceptions import ValidationFailure

UNANSWERED = -1


@dataclass(frozen=True)
class Question:
    text: str
    options: Tuple[str, ...]
    correct_answer: Optional[int]
    explanation: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class ExamSummary:
    id: int
    title: str
    description: str
    created_by: int
    time_limit: Optional[int]


@dataclass(frozen=True)
class Exam:
    title: str
    description: str
    created_by: int
    questions: Tuple[Question, ...]
    time_limit: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def max_score(self) -> int:
        return len(self.questions)

    def summary(self) -> ExamSummary:
        return ExamSummary(
            id=self.id,
            title=self.title,
            description=self.description,
            created_by=self.created_by,
            time_limit=self.time_limit,
        )


@dataclass(frozen=True)
class ExamResult:
    exam_id: int
    student_id: int
    student_name: str
    score: int
    max_score: int
    answers: Tuple[int, ...]
    time_taken: Optional[int] = None
    id: Optional[int] = None
    completed_at: Optional[datetime] = None

    @property
    def percentage(self) -> float:
        if self.max_score == 0:
            return 0.0
        return (self.score / self.max_score) * 100


@dataclass
class ExamBuilder:
    """
    Collects exam fields and questions, then builds a validated immutable Exam.

    Every failed invariant is reported at once through ValidationFailure,
    keyed by field (questions are keyed by position).
    """
    title: str = ''
    description: str = ''
    time_limit: Optional[int] = None
    _questions: list = field(default_factory=list)

    def add_question(self, text: str, options: Sequence[str], correct_answer: int,
                     explanation: Optional[str] = None) -> 'ExamBuilder':
        self._questions.append((text, options, correct_answer, explanation))
        return self

    def build(self, created_by: int) -> Exam:
        errors = {}
        if not (self.title or '').strip():
            errors['title'] = ['Title is required.']
        if self.time_limit is not None and (isinstance(self.time_limit, bool) or
                                            not isinstance(self.time_limit, int) or
                                            self.time_limit < 1):
            errors['timeLimit'] = ['Time limit must be a positive number of minutes.']
        if not self._questions:
            errors['questions'] = ['An exam needs at least one question.']

        questions = []
        for index, (text, options, correct_answer, explanation) in enumerate(self._questions):
            problems = _question_problems(text, options, correct_answer)
            if problems:
                errors[f'questions[{index}]'] = problems
                continue
            questions.append(Question(
                text=text.strip(),
                options=tuple(options),
                correct_answer=correct_answer,
                explanation=explanation or None,
            ))

        if errors:
            raise ValidationFailure(errors)

        return Exam(
            title=self.title.strip(),
            description=(self.description or '').strip(),
            created_by=created_by,
            questions=tuple(questions),
            time_limit=self.time_limit,
        )


def _question_problems(text, options, correct_answer):
    problems = []
    if not (text or '').strip():
        problems.append('Question text is required.')
    if options is None or len(options) < 2:
        problems.append('A question needs at least two options.')
    elif any(not isinstance(o, str) or not o.strip() for o in options):
        problems.append('All options must have text.')
    if isinstance(correct_answer, bool) or not isinstance(correct_answer, int):
        problems.append('Correct answer must be an option index.')
    elif options is not None and not 0 <= correct_answer < len(options):
        problems.append(f'Correct answer {correct_answer} is outside the {len(options)} options.')
    return problems
