from .exam_service import ExamService
from .result_service import ResultService, ExamStatistics
from .factory import get_exam_service, get_result_service

__all__ = [
    'ExamService', 'ResultService', 'ExamStatistics',
    'get_exam_service', 'get_result_service',
]
