from exam_service.exams.bank import QuestionBank
from exam_service.exams.config import (
    ExamConfig,
    get_exam,
    load_exam_catalog,
    load_exam_config,
)
from exam_service.exams.exceptions import ExamExpiredError, ExamNotFoundError

__all__ = [
    "ExamConfig",
    "ExamExpiredError",
    "ExamNotFoundError",
    "get_exam",
    "load_exam_catalog",
    "load_exam_config",
    "QuestionBank",
]
