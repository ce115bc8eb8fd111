"""
Persistence ports used by the exam and result services.

Services only talk to storage through these interfaces; adapters live in
orm.py (Django models) and memory.py (instance-held dicts).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from exams.domain import Exam, ExamResult


class ExamRepository(ABC):

    @abstractmethod
    def add(self, exam: Exam) -> Exam:
        """Persist a new exam with its questions and return it with ids assigned."""

    @abstractmethod
    def get(self, exam_id) -> Optional[Exam]:
        """Return the full exam, or None when no exam has that id."""

    @abstractmethod
    def list_all(self) -> List[Exam]:
        pass

    @abstractmethod
    def list_by_creator(self, teacher_id) -> List[Exam]:
        pass


class ResultRepository(ABC):

    @abstractmethod
    def add(self, result: ExamResult) -> ExamResult:
        """Persist a new result, assigning its id and completion time."""

    @abstractmethod
    def list_by_student(self, student_id) -> List[ExamResult]:
        """Results of one student, most recent first."""

    @abstractmethod
    def list_by_exam(self, exam_id) -> List[ExamResult]:
        """Results of one exam, highest score first."""


class UserDirectory(ABC):

    @abstractmethod
    def display_name(self, user_id) -> Optional[str]:
        """Name to snapshot on results, or None when the user does not exist."""
