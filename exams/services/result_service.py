"""
Exam submission, scoring and result review.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from exams import authorization
from exams.authorization import Principal
from exams.domain import Exam, ExamResult, UNANSWERED
from exams.exceptions import NotFound
from exams.grading import score_exam
from exams.repositories.base import ExamRepository, ResultRepository, UserDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExamStatistics:
    exam_id: int
    attempts: int
    average_percentage: float
    highest_percentage: float
    lowest_percentage: float


class ResultService:

    def __init__(self, exams: ExamRepository, results: ResultRepository, users: UserDirectory):
        self.exams = exams
        self.results = results
        self.users = users

    def submit_exam(self, principal: Principal, exam_id, answers: Sequence[Optional[int]],
                    time_taken: Optional[int] = None) -> ExamResult:
        """
        Score a student's answers against the stored exam and record the attempt.

        The score is always computed here; nothing score-related is taken from
        the caller. Repeated submissions create separate results.
        """
        authorization.ensure_can_submit(principal)

        exam = self.exams.get(exam_id)
        if exam is None:
            raise NotFound("Exam not found.")

        student_name = self.users.display_name(principal.id)
        if student_name is None:
            raise NotFound("Student not found.")

        normalized = tuple(UNANSWERED if a is None else a for a in answers)
        outcome = score_exam(exam, normalized)

        result = self.results.add(ExamResult(
            exam_id=exam.id,
            student_id=principal.id,
            student_name=student_name,
            score=outcome.score,
            max_score=outcome.max_score,
            time_taken=time_taken,
            answers=normalized,
        ))

        if len(normalized) != exam.max_score:
            logger.warning(f"Result {result.id}: {len(normalized)} answers for "
                           f"{exam.max_score} questions on exam {exam.id}")
        logger.info(f"Student {principal.id} submitted exam {exam.id}: "
                    f"{outcome.score}/{outcome.max_score}")
        return result

    def list_results_by_student(self, principal: Principal, student_id) -> List[ExamResult]:
        authorization.ensure_can_list_student_results(principal, student_id)
        return self.results.list_by_student(student_id)

    def list_results_by_exam(self, principal: Principal, exam_id) -> List[ExamResult]:
        self._owned_exam(principal, exam_id)
        return self.results.list_by_exam(exam_id)

    def get_exam_statistics(self, principal: Principal, exam_id) -> ExamStatistics:
        exam = self._owned_exam(principal, exam_id)
        percentages = [r.percentage for r in self.results.list_by_exam(exam.id)]
        if not percentages:
            return ExamStatistics(exam.id, 0, 0.0, 0.0, 0.0)
        return ExamStatistics(
            exam_id=exam.id,
            attempts=len(percentages),
            average_percentage=round(sum(percentages) / len(percentages), 2),
            highest_percentage=round(max(percentages), 2),
            lowest_percentage=round(min(percentages), 2),
        )

    def _owned_exam(self, principal: Principal, exam_id) -> Exam:
        # Role first, then existence, then ownership.
        authorization.ensure_is_teacher(principal)
        exam = self.exams.get(exam_id)
        if exam is None:
            raise NotFound("Exam not found.")
        authorization.ensure_owns_exam(principal, exam)
        return exam
