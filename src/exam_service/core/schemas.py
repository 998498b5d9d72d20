"""
Row schemas for question records as they arrive from a spreadsheet-style
record source (one column per field, options as "Option A".."Option D").
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exam_service.core.constants import OPTION_LETTERS
from exam_service.core.data_models import QuestionRecord


def _correct_to_index(correct: str | int | None) -> int | None:
    """Map a letter ("B") or numeric index to a 0-based option index."""
    if correct is None:
        return None
    if isinstance(correct, int):
        return correct
    value = correct.strip().upper()
    if value == "":
        return None
    if value in OPTION_LETTERS:
        return OPTION_LETTERS.index(value)
    if value.isdigit():
        return int(value)
    raise ValueError(f"Invalid correct answer: '{correct}'")


class QuestionRowSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="ID", min_length=1)
    subject: str = Field(default="", alias="Subject")
    question: str = Field(default="", alias="Question")
    option_a: str | None = Field(default=None, alias="Option A")
    option_b: str | None = Field(default=None, alias="Option B")
    option_c: str | None = Field(default=None, alias="Option C")
    option_d: str | None = Field(default=None, alias="Option D")
    correct: str | int | None = Field(default=None, alias="Correct")
    is_sub_question: bool = Field(default=False, alias="Is Sub Question")
    parent_question_id: str | None = Field(
        default=None, alias="Parent Question ID"
    )
    sub_question_order: int | None = Field(
        default=None, alias="Sub Question Order"
    )

    @field_validator("is_sub_question", mode="before")
    @classmethod
    def normalize_flag(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return value in {"true", "yes", "1", "y", "t"}
        return value

    @field_validator("correct")
    @classmethod
    def validate_correct(cls, value: str | int | None) -> str | int | None:
        _correct_to_index(value)
        return value

    def to_domain(self) -> QuestionRecord:
        options = [
            opt or ""
            for opt in (self.option_a, self.option_b, self.option_c, self.option_d)
        ]
        # Drop trailing blanks; blanks in the middle keep option positions
        while options and not options[-1].strip():
            options.pop()

        return QuestionRecord(
            id=self.id,
            subject=self.subject,
            prompt_text=self.question,
            options=tuple(options),
            correct_index=_correct_to_index(self.correct),
            is_sub_question=self.is_sub_question,
            parent_id=self.parent_question_id or None,
            sub_order=self.sub_question_order,
        )
