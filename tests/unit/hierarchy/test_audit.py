import logging

import pytest

from exam_service.core.data_models import QuestionRecord
from exam_service.hierarchy.audit import audit_hierarchy, log_hierarchy_issues
from exam_service.hierarchy.data_models import IssueKind


def _question(record_id: str) -> QuestionRecord:
    return QuestionRecord(id=record_id, prompt_text="Q", options=("A", "B"))


def _passage(record_id: str) -> QuestionRecord:
    return QuestionRecord(id=record_id, prompt_text="Passage text")


def _sub(
    record_id: str, parent_id: str, order: int | None = 1
) -> QuestionRecord:
    return QuestionRecord(
        id=record_id,
        prompt_text="Sub",
        options=("A", "B"),
        is_sub_question=True,
        parent_id=parent_id,
        sub_order=order,
    )


class TestAuditHierarchy:
    def test_clean_hierarchy(self) -> None:
        records = [
            _question("Q1"),
            _passage("P1"),
            _sub("S1", "P1", 1),
            _sub("S2", "P1", 2),
        ]
        assert audit_hierarchy(records) == []

    def test_orphan(self) -> None:
        issues = audit_hierarchy([_question("Q1"), _sub("S1", "NONEXISTENT")])
        assert [(i.kind, i.index, i.record_id) for i in issues] == [
            (IssueKind.ORPHAN_SUB_QUESTION, 1, "S1")
        ]

    def test_duplicate_sub_order(self) -> None:
        records = [_passage("P1"), _sub("S1", "P1", 2), _sub("S2", "P1", 2)]
        issues = audit_hierarchy(records)
        assert [(i.kind, i.record_id) for i in issues] == [
            (IssueKind.DUPLICATE_SUB_ORDER, "S2")
        ]
        assert "1.2" in issues[0].message

    def test_defaulted_orders_collide(self) -> None:
        records = [_passage("P1"), _sub("S1", "P1", 0), _sub("S2", "P1", None)]
        kinds = [i.kind for i in audit_hierarchy(records)]
        assert kinds == [
            IssueKind.DEFAULTED_SUB_ORDER,
            IssueKind.DEFAULTED_SUB_ORDER,
            IssueKind.DUPLICATE_SUB_ORDER,
        ]

    def test_parent_not_passage(self) -> None:
        issues = audit_hierarchy([_question("Q1"), _sub("S1", "Q1", 1)])
        assert [i.kind for i in issues] == [IssueKind.PARENT_NOT_PASSAGE]

    def test_duplicate_id(self) -> None:
        issues = audit_hierarchy([_question("Q1"), _question("Q1")])
        assert [(i.kind, i.index) for i in issues] == [
            (IssueKind.DUPLICATE_ID, 1)
        ]

    def test_issues_sorted_by_index(self) -> None:
        records = [
            _passage("P1"),
            _sub("S1", "MISSING"),
            _sub("S2", "P1", 0),
        ]
        assert [i.index for i in audit_hierarchy(records)] == [1, 2]


def test_log_hierarchy_issues_warns(caplog: pytest.LogCaptureFixture) -> None:
    issues = audit_hierarchy([_sub("S1", "MISSING")])
    with caplog.at_level(logging.WARNING, logger="exam_service"):
        log_hierarchy_issues(issues)
    assert "orphan_sub_question" in caplog.text
