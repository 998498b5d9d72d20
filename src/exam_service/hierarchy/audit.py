"""
Data-quality checks for question hierarchies.

The resolver degrades gracefully on imperfect data (orphans fall back to
standalone numbering, duplicate orders produce duplicate numbers). This
module reports those cases so the caller can surface them without the exam
becoming unpresentable.
"""

import logging
from collections import defaultdict
from collections.abc import Sequence

from exam_service.core.data_models import QuestionRecord
from exam_service.hierarchy.data_models import HierarchyIssue, IssueKind
from exam_service.hierarchy.resolver import (
    build_id_positions,
    effective_sub_order,
    resolve_parent_index,
)

logger = logging.getLogger(__name__)


def audit_hierarchy(records: Sequence[QuestionRecord]) -> list[HierarchyIssue]:
    """
    Find anomalies in a record list.

    Returns:
        Issues in record order. An empty list means the hierarchy is clean.
    """
    id_positions = build_id_positions(records)
    issues: list[HierarchyIssue] = []
    # (parent index, order) -> sub-question indices
    orders: dict[tuple[int, int], list[int]] = defaultdict(list)

    for ix, record in enumerate(records):
        if id_positions[record.id] != ix:
            issues.append(
                HierarchyIssue(
                    kind=IssueKind.DUPLICATE_ID,
                    index=ix,
                    record_id=record.id,
                    message=(
                        f"id '{record.id}' already used at position "
                        f"{id_positions[record.id] + 1}"
                    ),
                )
            )

        if not record.is_sub_question:
            continue

        parent_ix = resolve_parent_index(record, id_positions)
        if parent_ix is None:
            issues.append(
                HierarchyIssue(
                    kind=IssueKind.ORPHAN_SUB_QUESTION,
                    index=ix,
                    record_id=record.id,
                    message=(
                        f"parent '{record.parent_id}' not found, "
                        "numbered as a standalone question"
                    ),
                )
            )
            continue

        if not records[parent_ix].is_passage:
            issues.append(
                HierarchyIssue(
                    kind=IssueKind.PARENT_NOT_PASSAGE,
                    index=ix,
                    record_id=record.id,
                    message=f"parent '{record.parent_id}' is not a passage",
                )
            )

        if not (record.sub_order and record.sub_order > 0):
            issues.append(
                HierarchyIssue(
                    kind=IssueKind.DEFAULTED_SUB_ORDER,
                    index=ix,
                    record_id=record.id,
                    message=(
                        f"sub order {record.sub_order!r} is not a positive "
                        f"integer, numbered as {effective_sub_order(record)}"
                    ),
                )
            )

        orders[(parent_ix, effective_sub_order(record))].append(ix)

    for (parent_ix, order), indices in orders.items():
        if len(indices) < 2:
            continue
        for ix in indices[1:]:
            issues.append(
                HierarchyIssue(
                    kind=IssueKind.DUPLICATE_SUB_ORDER,
                    index=ix,
                    record_id=records[ix].id,
                    message=(
                        f"number {parent_ix + 1}.{order} already used by "
                        f"'{records[indices[0]].id}'"
                    ),
                )
            )

    issues.sort(key=lambda issue: issue.index)
    return issues


def log_hierarchy_issues(issues: Sequence[HierarchyIssue]) -> None:
    for issue in issues:
        logger.warning(
            f"Question {issue.index + 1} ({issue.record_id}): "
            f"{issue.kind.value}: {issue.message}"
        )
