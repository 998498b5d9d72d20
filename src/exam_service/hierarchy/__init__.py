from exam_service.hierarchy.audit import audit_hierarchy, log_hierarchy_issues
from exam_service.hierarchy.data_models import (
    DisplayGroup,
    HierarchyIssue,
    IssueKind,
)
from exam_service.hierarchy.resolver import (
    passage_groups,
    resolve_all,
    resolve_question_number,
)

__all__ = [
    "audit_hierarchy",
    "DisplayGroup",
    "HierarchyIssue",
    "IssueKind",
    "log_hierarchy_issues",
    "passage_groups",
    "resolve_all",
    "resolve_question_number",
]
