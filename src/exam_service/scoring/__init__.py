from exam_service.scoring.batch import BatchScores, score_answer_matrix
from exam_service.scoring.data_models import ItemStatus, ScoreResult
from exam_service.scoring.engine import (
    classify_item,
    is_valid_answer,
    score_attempt,
)
from exam_service.scoring.marking import (
    DEFAULT_MARKING_SCHEME,
    MarkingScheme,
    marks_label,
)

__all__ = [
    "BatchScores",
    "classify_item",
    "DEFAULT_MARKING_SCHEME",
    "is_valid_answer",
    "ItemStatus",
    "MarkingScheme",
    "marks_label",
    "score_answer_matrix",
    "score_attempt",
    "ScoreResult",
]
