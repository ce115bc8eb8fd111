"""
Exam authoring and retrieval.
"""
import logging
from typing import List, Optional, Sequence

from exams import authorization
from exams.authorization import Principal
from exams.domain import Exam, ExamBuilder, ExamSummary
from exams.exceptions import NotFound
from exams.repositories.base import ExamRepository, ResultRepository
from exams.visibility import redact_for_role

logger = logging.getLogger(__name__)


class ExamService:

    def __init__(self, exams: ExamRepository, results: Optional[ResultRepository] = None):
        self.exams = exams
        self.results = results

    def create_exam(self, principal: Principal, title: str, description: str,
                    time_limit: Optional[int], questions: Sequence[dict]) -> Exam:
        """
        Validate and store a new exam owned by the calling teacher.

        Each question is a mapping with ``text``, ``options``, ``correct_answer``
        and an optional ``explanation``.
        """
        authorization.ensure_can_create_exam(principal)

        builder = ExamBuilder(title=title, description=description, time_limit=time_limit)
        for question in questions:
            builder.add_question(
                text=question.get('text', ''),
                options=question.get('options'),
                correct_answer=question.get('correct_answer'),
                explanation=question.get('explanation'),
            )
        exam = self.exams.add(builder.build(created_by=principal.id))

        logger.info(f"Exam {exam.id} '{exam.title}' created by teacher {principal.id} "
                    f"with {len(exam.questions)} questions")
        return exam

    def list_exams(self) -> List[ExamSummary]:
        """Catalog view: every exam without its questions."""
        return [exam.summary() for exam in self.exams.list_all()]

    def list_available_exams(self, principal: Principal) -> List[ExamSummary]:
        """
        Catalog minus the exams the calling student already completed.

        Only narrows what is listed; submitting a completed exam again is still allowed.
        """
        catalog = self.list_exams()
        if not principal.is_student or self.results is None:
            return catalog
        completed = {str(r.exam_id) for r in self.results.list_by_student(principal.id)}
        return [exam for exam in catalog if str(exam.id) not in completed]

    def get_exam(self, principal: Principal, exam_id) -> Exam:
        exam = self.exams.get(exam_id)
        if exam is None:
            raise NotFound("Exam not found.")
        return redact_for_role(exam, principal.role)

    def list_exams_by_teacher(self, principal: Principal, teacher_id) -> List[Exam]:
        authorization.ensure_can_list_teacher_exams(principal, teacher_id)
        return self.exams.list_by_creator(teacher_id)
