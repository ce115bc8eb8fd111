"""
In-memory adapters for the persistence ports.

State is held per instance; two repositories never share data.
"""
from __future__ import annotations

import dataclasses
import itertools
from typing import Dict, List, Optional

from django.utils import timezone

from exams.domain import Exam, ExamResult

from .base import ExamRepository, ResultRepository, UserDirectory


class InMemoryExamRepository(ExamRepository):

    def __init__(self):
        self._exams: Dict[int, Exam] = {}
        self._ids = itertools.count(1)
        self._question_ids = itertools.count(1)

    def add(self, exam: Exam) -> Exam:
        stored = dataclasses.replace(
            exam,
            id=next(self._ids),
            created_at=timezone.now(),
            questions=tuple(
                dataclasses.replace(q, id=next(self._question_ids)) for q in exam.questions
            ),
        )
        self._exams[stored.id] = stored
        return stored

    def get(self, exam_id) -> Optional[Exam]:
        for key, exam in self._exams.items():
            if str(key) == str(exam_id):
                return exam
        return None

    def list_all(self) -> List[Exam]:
        return sorted(self._exams.values(), key=lambda e: e.id, reverse=True)

    def list_by_creator(self, teacher_id) -> List[Exam]:
        return [e for e in self.list_all() if str(e.created_by) == str(teacher_id)]


class InMemoryResultRepository(ResultRepository):

    def __init__(self, clock=timezone.now):
        self._results: List[ExamResult] = []
        self._ids = itertools.count(1)
        self._clock = clock

    def add(self, result: ExamResult) -> ExamResult:
        stored = dataclasses.replace(result, id=next(self._ids), completed_at=self._clock())
        self._results.append(stored)
        return stored

    def list_by_student(self, student_id) -> List[ExamResult]:
        matches = [r for r in self._results if str(r.student_id) == str(student_id)]
        return sorted(matches, key=lambda r: (r.completed_at, r.id), reverse=True)

    def list_by_exam(self, exam_id) -> List[ExamResult]:
        matches = [r for r in self._results if str(r.exam_id) == str(exam_id)]
        return sorted(matches, key=lambda r: (-r.score, r.completed_at, r.id))


class InMemoryUserDirectory(UserDirectory):

    def __init__(self, names: Optional[Dict[int, str]] = None):
        self._names = dict(names or {})

    def register(self, user_id, name: str):
        self._names[user_id] = name

    def display_name(self, user_id) -> Optional[str]:
        for key, name in self._names.items():
            if str(key) == str(user_id):
                return name
        return None
