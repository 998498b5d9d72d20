"""
Question numbering for flat record lists.

Records reference their parent passage by id rather than by object, so the
record list acts as a read-only arena and every function here is a pure
function of (records, index).
"""

from collections.abc import Sequence

from exam_service.core.constants import DEFAULT_SUB_ORDER
from exam_service.core.data_models import (
    QuestionNumber,
    QuestionRecord,
    QuestionRole,
)
from exam_service.hierarchy.data_models import DisplayGroup


def build_id_positions(records: Sequence[QuestionRecord]) -> dict[str, int]:
    """Map each id to the 0-based position of the FIRST record carrying it."""
    positions: dict[str, int] = {}
    for ix, record in enumerate(records):
        positions.setdefault(record.id, ix)
    return positions


def effective_sub_order(record: QuestionRecord) -> int:
    """
    Order of a sub-question within its group.

    Absent, zero and negative orders all fall back to DEFAULT_SUB_ORDER, so
    an explicit order of 0 numbers the same as a missing one.
    """
    if record.sub_order and record.sub_order > 0:
        return record.sub_order
    return DEFAULT_SUB_ORDER


def resolve_parent_index(
    record: QuestionRecord, id_positions: dict[str, int]
) -> int | None:
    """Index of the record's parent, or None for non-sub-questions and orphans."""
    if not record.is_sub_question or not record.parent_id:
        return None
    return id_positions.get(record.parent_id)


def _resolve(
    records: Sequence[QuestionRecord],
    index: int,
    id_positions: dict[str, int],
) -> QuestionNumber:
    record = records[index]
    parent_ix = resolve_parent_index(record, id_positions)

    if parent_ix is None:
        role = (
            QuestionRole.PASSAGE
            if record.is_passage
            else QuestionRole.STANDALONE
        )
        return QuestionNumber(display=str(index + 1), role=role)

    return QuestionNumber(
        display=f"{parent_ix + 1}.{effective_sub_order(record)}",
        role=QuestionRole.SUB_QUESTION,
    )


def resolve_question_number(
    records: Sequence[QuestionRecord], index: int
) -> QuestionNumber:
    """
    Resolve the display number and role of the record at index.

    Standalone records and passages are numbered by their 1-based position.
    Sub-questions are numbered "<parent position>.<order>". A sub-question
    whose parent id matches no record is numbered as a standalone record.
    Duplicate orders within a group produce duplicate display strings.

    Raises:
        IndexError: If index does not address a record.
    """
    if not 0 <= index < len(records):
        raise IndexError(
            f"index {index} out of range for {len(records)} records"
        )
    return _resolve(records, index, build_id_positions(records))


def resolve_all(records: Sequence[QuestionRecord]) -> list[QuestionNumber]:
    """Resolve every record, building the id lookup once."""
    id_positions = build_id_positions(records)
    return [_resolve(records, ix, id_positions) for ix in range(len(records))]


def _group_root(
    records: Sequence[QuestionRecord],
    index: int,
    id_positions: dict[str, int],
) -> int:
    """Follow parent links to the record that heads index's group."""
    seen = {index}
    current = index
    while True:
        parent_ix = resolve_parent_index(records[current], id_positions)
        if parent_ix is None:
            return current
        if parent_ix in seen:
            # Cyclic parent links: the lowest index in the walk heads the group
            return min(seen)
        seen.add(parent_ix)
        current = parent_ix


def passage_groups(records: Sequence[QuestionRecord]) -> list[DisplayGroup]:
    """
    Group records into presentation units.

    Each sub-question joins the group headed by its resolved ancestor; every
    other record heads its own group. Groups are ordered by head index and
    every record belongs to exactly one group.
    """
    id_positions = build_id_positions(records)
    groups: dict[int, list[int]] = {}

    for ix in range(len(records)):
        root = _group_root(records, ix, id_positions)
        members = groups.setdefault(root, [])
        if root != ix:
            members.append(ix)

    return [
        DisplayGroup(head_index=head, member_indices=tuple(groups[head]))
        for head in sorted(groups)
    ]
