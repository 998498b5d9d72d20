from dataclasses import dataclass
from enum import StrEnum


class IssueKind(StrEnum):
    ORPHAN_SUB_QUESTION = "orphan_sub_question"
    DUPLICATE_SUB_ORDER = "duplicate_sub_order"
    DEFAULTED_SUB_ORDER = "defaulted_sub_order"
    PARENT_NOT_PASSAGE = "parent_not_passage"
    DUPLICATE_ID = "duplicate_id"


@dataclass(frozen=True)
class HierarchyIssue:
    """A data-quality anomaly the resolver tolerates but callers may report."""

    kind: IssueKind
    index: int
    record_id: str
    message: str


@dataclass(frozen=True)
class DisplayGroup:
    """
    One presentation unit: a passage with its sub-questions, or a single
    standalone record.

    Attributes:
        head_index: Index of the passage (or the standalone record).
        member_indices: Indices of the sub-questions resolved to the passage,
            in record order. Empty for standalone records.
    """

    head_index: int
    member_indices: tuple[int, ...] = ()

    @property
    def indices(self) -> tuple[int, ...]:
        return (self.head_index, *self.member_indices)
