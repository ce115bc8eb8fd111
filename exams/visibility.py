"""
Role-based redaction of exam payloads.
"""
import dataclasses

from .domain import Exam
from .models.user_profile import UserProfile


def redact_for_role(exam: Exam, role: str) -> Exam:
    """
    Return the exam as the given role may see it.

    Students get a copy with every question's correct answer removed.
    Explanations are left in place. The stored exam is never modified.
    """
    if role != UserProfile.Role.STUDENT:
        return exam
    return dataclasses.replace(
        exam,
        questions=tuple(
            dataclasses.replace(question, correct_answer=None)
            for question in exam.questions
        ),
    )
