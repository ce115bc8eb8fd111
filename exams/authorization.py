"""
Authorization gate for exam and result operations.

Each check either returns quietly or raises Forbidden. Checks have no side
effects beyond logging the denial.
"""
import logging
from dataclasses import dataclass

from .exceptions import Forbidden
from .models.user_profile import UserProfile

logger = logging.getLogger(__name__)

Role = UserProfile.Role


@dataclass(frozen=True)
class Principal:
    id: int
    role: str
    name: str = ''

    @property
    def is_teacher(self):
        return self.role == Role.TEACHER

    @property
    def is_student(self):
        return self.role == Role.STUDENT


def principal_from_user(user) -> Principal:
    profile = getattr(user, 'profile', None)
    if not user or not user.is_authenticated or profile is None or profile.role not in Role.values:
        raise Forbidden("Your account has no exam role.")
    return Principal(
        id=user.id,
        role=profile.role,
        name=user.get_full_name() or user.username,
    )


def same_identity(a, b) -> bool:
    """Identities arrive as ints from storage and as strings from URLs."""
    return str(a) == str(b)


def _deny(principal, rule):
    logger.warning(f"Denied {rule} for principal {principal.id} ({principal.role})")
    raise Forbidden()


def ensure_can_create_exam(principal: Principal):
    if not principal.is_teacher:
        _deny(principal, 'create_exam')


def ensure_can_list_teacher_exams(principal: Principal, teacher_id):
    if not (principal.is_teacher and same_identity(principal.id, teacher_id)):
        _deny(principal, 'list_exams_by_teacher')


def ensure_can_submit(principal: Principal):
    if not principal.is_student:
        _deny(principal, 'submit_exam')


def ensure_can_list_student_results(principal: Principal, student_id):
    if principal.is_teacher:
        return
    if not (principal.is_student and same_identity(principal.id, student_id)):
        _deny(principal, 'list_results_by_student')


def ensure_is_teacher(principal: Principal):
    if not principal.is_teacher:
        _deny(principal, 'list_results_by_exam')


def ensure_owns_exam(principal: Principal, exam):
    if not (principal.is_teacher and same_identity(principal.id, exam.created_by)):
        _deny(principal, 'list_results_by_exam')
