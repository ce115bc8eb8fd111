from .exam import Exam
from .question import Question
from .result import ExamResult
from .user_profile import UserProfile

__all__ = ['Exam', 'Question', 'ExamResult', 'UserProfile']
