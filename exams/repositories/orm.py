"""
Django ORM adapters for the persistence ports.
"""
from __future__ import annotations

import functools
import logging
from typing import List, Optional

from django.contrib.auth.models import User
from django.db import DatabaseError, transaction

from exams import domain
from exams.exceptions import InternalFailure
from exams.models import Exam, Question, ExamResult

from .base import ExamRepository, ResultRepository, UserDirectory

logger = logging.getLogger(__name__)


def _guard_storage(method):
    """Turn database faults into InternalFailure after logging them."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DatabaseError:
            logger.exception(f"Storage failure in {type(self).__name__}.{method.__name__}")
            raise InternalFailure()
    return wrapper


def _as_pk(value) -> Optional[int]:
    try:
        pk = int(value)
    except (TypeError, ValueError):
        return None
    return pk if pk > 0 else None


def _to_exam(exam: Exam) -> domain.Exam:
    return domain.Exam(
        id=exam.id,
        title=exam.title,
        description=exam.description,
        created_by=exam.created_by_id,
        time_limit=exam.time_limit,
        created_at=exam.created_at,
        questions=tuple(
            domain.Question(
                id=q.id,
                text=q.text,
                options=tuple(q.options),
                correct_answer=q.correct_answer,
                explanation=q.explanation,
            )
            for q in exam.questions.all()
        ),
    )


def _to_result(result: ExamResult) -> domain.ExamResult:
    return domain.ExamResult(
        id=result.id,
        exam_id=result.exam_id,
        student_id=result.student_id,
        student_name=result.student_name,
        score=result.score,
        max_score=result.max_score,
        time_taken=result.time_taken,
        answers=tuple(result.answers),
        completed_at=result.completed_at,
    )


class OrmExamRepository(ExamRepository):

    def _queryset(self):
        return Exam.objects.prefetch_related('questions').order_by('-created_at', '-id')

    @_guard_storage
    @transaction.atomic
    def add(self, exam: domain.Exam) -> domain.Exam:
        record = Exam.objects.create(
            title=exam.title,
            description=exam.description,
            created_by_id=exam.created_by,
            time_limit=exam.time_limit,
        )
        Question.objects.bulk_create([
            Question(
                exam=record,
                order=position,
                text=q.text,
                options=list(q.options),
                correct_answer=q.correct_answer,
                explanation=q.explanation,
            )
            for position, q in enumerate(exam.questions)
        ])
        return _to_exam(self._queryset().get(pk=record.pk))

    @_guard_storage
    def get(self, exam_id) -> Optional[domain.Exam]:
        pk = _as_pk(exam_id)
        if pk is None:
            return None
        record = self._queryset().filter(pk=pk).first()
        return _to_exam(record) if record else None

    @_guard_storage
    def list_all(self) -> List[domain.Exam]:
        return [_to_exam(e) for e in self._queryset()]

    @_guard_storage
    def list_by_creator(self, teacher_id) -> List[domain.Exam]:
        pk = _as_pk(teacher_id)
        if pk is None:
            return []
        return [_to_exam(e) for e in self._queryset().filter(created_by_id=pk)]


class OrmResultRepository(ResultRepository):

    @_guard_storage
    def add(self, result: domain.ExamResult) -> domain.ExamResult:
        record = ExamResult.objects.create(
            exam_id=result.exam_id,
            student_id=result.student_id,
            student_name=result.student_name,
            score=result.score,
            max_score=result.max_score,
            time_taken=result.time_taken,
            answers=list(result.answers),
        )
        return _to_result(record)

    @_guard_storage
    def list_by_student(self, student_id) -> List[domain.ExamResult]:
        pk = _as_pk(student_id)
        if pk is None:
            return []
        queryset = ExamResult.objects.filter(student_id=pk).order_by('-completed_at', '-id')
        return [_to_result(r) for r in queryset]

    @_guard_storage
    def list_by_exam(self, exam_id) -> List[domain.ExamResult]:
        pk = _as_pk(exam_id)
        if pk is None:
            return []
        queryset = ExamResult.objects.filter(exam_id=pk).order_by('-score', 'completed_at', 'id')
        return [_to_result(r) for r in queryset]


class OrmUserDirectory(UserDirectory):

    @_guard_storage
    def display_name(self, user_id) -> Optional[str]:
        pk = _as_pk(user_id)
        user = User.objects.filter(pk=pk).first() if pk else None
        if user is None:
            return None
        return user.get_full_name() or user.username
