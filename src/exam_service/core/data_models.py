"""
Data models for exam questions.

This module defines the data structures for:
- QuestionRecord: One question, passage or sub-question as loaded for an exam
- QuestionNumber: Display metadata derived for a record's position
"""

from dataclasses import dataclass, field
from enum import StrEnum

from exam_service.core.constants import MAX_OPTIONS


class QuestionRole(StrEnum):
    STANDALONE = "standalone"
    PASSAGE = "passage"
    SUB_QUESTION = "sub_question"


@dataclass(frozen=True)
class QuestionRecord:
    """
    A single question record, read-only for the life of an exam.

    A record with at least one non-empty option is scorable. A record with
    no non-empty options but with prompt text is a passage: a grouping
    header that introduces sub-questions and is never scored.

    Attributes:
        id: Identifier, unique within an exam's question list.
        subject: Subject label for display.
        prompt_text: Question (or passage) text.
        options: Option texts in display order, at most four.
        correct_index: Index into options of the correct answer. Only
            meaningful for scorable records.
        is_sub_question: True when the record belongs to a passage.
        parent_id: Id of the parent passage. Only set for sub-questions.
        sub_order: Position within the parent's group of sub-questions.
    """

    id: str
    subject: str = ""
    prompt_text: str = ""
    options: tuple[str, ...] = field(default_factory=tuple)
    correct_index: int | None = None
    is_sub_question: bool = False
    parent_id: str | None = None
    sub_order: int | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must be non-empty")
        if len(self.options) > MAX_OPTIONS:
            raise ValueError(
                f"At most {MAX_OPTIONS} options supported, got {len(self.options)}"
            )
        # Accept lists from callers but store an immutable tuple
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options))

    @property
    def is_scorable(self) -> bool:
        """True if the record has at least one non-empty option."""
        return any(option.strip() for option in self.options if option)

    @property
    def is_passage(self) -> bool:
        """True for non-scorable records that carry prompt text."""
        return not self.is_scorable and bool(self.prompt_text.strip())

    @property
    def n_options(self) -> int:
        return len(self.options)


@dataclass(frozen=True)
class QuestionNumber:
    """
    Display metadata for one record.

    Attributes:
        display: Question number as shown to the candidate, e.g. "3" or "2.1".
        role: Role the record plays in the exam hierarchy.
    """

    display: str
    role: QuestionRole
