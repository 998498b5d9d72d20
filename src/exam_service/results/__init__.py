from exam_service.results.data_models import CandidateInfo, ResultSubmission
from exam_service.results.sink import (
    JsonlResultSink,
    ResultSink,
    build_submission,
)

__all__ = [
    "build_submission",
    "CandidateInfo",
    "JsonlResultSink",
    "ResultSink",
    "ResultSubmission",
]
