from exams.repositories import OrmExamRepository, OrmResultRepository, OrmUserDirectory
from .exam_service import ExamService
from .result_service import ResultService


def get_exam_service() -> ExamService:
    return ExamService(exams=OrmExamRepository(), results=OrmResultRepository())


def get_result_service() -> ResultService:
    return ResultService(
        exams=OrmExamRepository(),
        results=OrmResultRepository(),
        users=OrmUserDirectory(),
    )
