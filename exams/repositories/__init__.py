from .base import ExamRepository, ResultRepository, UserDirectory
from .orm import OrmExamRepository, OrmResultRepository, OrmUserDirectory
from .memory import InMemoryExamRepository, InMemoryResultRepository, InMemoryUserDirectory

__all__ = [
    'ExamRepository', 'ResultRepository', 'UserDirectory',
    'OrmExamRepository', 'OrmResultRepository', 'OrmUserDirectory',
    'InMemoryExamRepository', 'InMemoryResultRepository', 'InMemoryUserDirectory',
]
