from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exam_service.core.constants import DEFAULT_MOBILE
from exam_service.scoring import ScoreResult


class CandidateInfo(BaseModel):
    name: str = Field(min_length=1)
    mobile: str = DEFAULT_MOBILE

    @field_validator("name", "mobile", mode="before")
    @classmethod
    def strip_whitespace(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("mobile")
    @classmethod
    def default_blank_mobile(cls, value: str) -> str:
        return value or DEFAULT_MOBILE


class ResultSubmission(BaseModel):
    """
    Completed attempt as handed to a result sink.

    Attributes:
        exam_code: Code of the exam taken.
        candidate: Who took it.
        submitted_at: UTC time the payload was built.
        result: Score breakdown.
        answers: Selected option per record, None when unanswered.
        timed_out: True if the session was submitted on timeout.
    """

    model_config = ConfigDict(frozen=True)

    exam_code: str
    candidate: CandidateInfo
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    result: ScoreResult
    answers: list[int | None]
    timed_out: bool = False
