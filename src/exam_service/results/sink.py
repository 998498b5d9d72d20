import logging
from abc import ABC, abstractmethod
from pathlib import Path

from exam_service.results.data_models import CandidateInfo, ResultSubmission
from exam_service.session import ExamSession, SessionStatus

logger = logging.getLogger(__name__)


def build_submission(
    exam_code: str, candidate: CandidateInfo, session: ExamSession
) -> ResultSubmission:
    """
    Build the result payload for a completed session.

    Raises:
        ValueError: If the session has not completed.
    """
    if session.status != SessionStatus.COMPLETED or session.result is None:
        raise ValueError(
            f"Session must be completed to submit, got {session.status}"
        )
    return ResultSubmission(
        exam_code=exam_code,
        candidate=candidate,
        result=session.result,
        answers=session.answers,
        timed_out=session.timed_out,
    )


class ResultSink(ABC):
    @abstractmethod
    def write(self, submission: ResultSubmission) -> None: ...


class JsonlResultSink(ResultSink):
    """Append each submission as one JSON document per line."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def write(self, submission: ResultSubmission) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a") as f:
            f.write(submission.model_dump_json() + "\n")
        logger.info(
            f"Saved result for {submission.candidate.name} "
            f"({submission.exam_code}) to {self.path}"
        )

    def read_all(self) -> list[ResultSubmission]:
        if not self.path.exists():
            return []
        with open(self.path) as f:
            return [
                ResultSubmission.model_validate_json(line)
                for line in f
                if line.strip()
            ]
