"""
Core shared types and loaders for the exam service.

The question record model defined here is consumed by the hierarchy
resolver, the scoring engine and the exam session, and is independent of
how the records were stored.
"""

from exam_service.core.data_models import (
    QuestionNumber,
    QuestionRecord,
    QuestionRole,
)

__all__ = [
    "QuestionNumber",
    "QuestionRecord",
    "QuestionRole",
]
