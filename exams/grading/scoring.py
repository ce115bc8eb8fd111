"""
Positional scoring of multiple-choice answers.

Answers are matched to questions by position, not by question id: the order
of the submitted answers must be the order the questions were served in.
"""
from dataclasses import dataclass
from typing import Sequence

from exams.domain import Exam

GRADE_BANDS = (
    (90, 'excellent'),
    (70, 'good'),
    (60, 'pass'),
)


@dataclass(frozen=True)
class ScoreResult:
    score: int
    max_score: int

    @property
    def percentage(self) -> float:
        if self.max_score == 0:
            return 0.0
        return (self.score / self.max_score) * 100

    @property
    def grade(self) -> str:
        return grade_band(self.percentage)


def score(exam: Exam, answers: Sequence[int]) -> int:
    """Count answers equal to the correct option at the same position."""
    total = 0
    for i, question in enumerate(exam.questions):
        if i < len(answers) and answers[i] == question.correct_answer:
            total += 1
    return total


def score_exam(exam: Exam, answers: Sequence[int]) -> ScoreResult:
    return ScoreResult(score=score(exam, answers), max_score=exam.max_score)


def grade_band(percentage: float) -> str:
    for threshold, label in GRADE_BANDS:
        if percentage >= threshold:
            return label
    return 'fail'
