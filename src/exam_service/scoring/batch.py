"""
Vectorised scoring of many answer sheets against one exam.

Produces the same numbers as calling score_attempt once per candidate,
with answer sheets encoded as an int8 matrix where UNANSWERED_VALUE marks a
skipped question.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from exam_service.core.data_models import QuestionRecord
from exam_service.scoring.marking import DEFAULT_MARKING_SCHEME, MarkingScheme


@dataclass(frozen=True)
class BatchScores:
    """
    Per-candidate totals, each of shape (n_candidates,).
    """

    scores: NDArray[np.float64]
    correct: NDArray[np.int64]
    wrong: NDArray[np.int64]
    skipped: NDArray[np.int64]

    @property
    def answered(self) -> NDArray[np.int64]:
        result: NDArray[np.int64] = self.correct + self.wrong
        return result

    @property
    def n_candidates(self) -> int:
        return int(self.scores.shape[0])


def _item_arrays(
    records: Sequence[QuestionRecord],
) -> tuple[NDArray[np.bool_], NDArray[np.int64], NDArray[np.int64]]:
    scorable = np.array([r.is_scorable for r in records], dtype=np.bool_)
    n_options = np.array([r.n_options for r in records], dtype=np.int64)
    # Valid answers are never negative, so -1 can never match
    correct_ix = np.array(
        [
            r.correct_index if r.correct_index is not None else -1
            for r in records
        ],
        dtype=np.int64,
    )
    return scorable, n_options, correct_ix


def score_answer_matrix(
    records: Sequence[QuestionRecord],
    responses: NDArray[np.integer],
    scheme: MarkingScheme = DEFAULT_MARKING_SCHEME,
) -> BatchScores:
    """
    Score every row of a response matrix.

    Args:
        records: Question records in exam order.
        responses: Array of shape (n_candidates, n_items) of option indices.
            Negative or out-of-range values count as unanswered.
        scheme: Marks per correct / wrong answer.

    Raises:
        ValueError: If responses is not 2D or its width differs from the
            number of records.
    """
    if responses.ndim != 2:
        raise ValueError(f"responses must be 2D, got shape {responses.shape}")
    if responses.shape[1] != len(records):
        raise ValueError(
            f"responses have {responses.shape[1]} items but exam has "
            f"{len(records)} records"
        )

    scorable, n_options, correct_ix = _item_arrays(records)
    answers = responses.astype(np.int64)

    valid = (answers >= 0) & (answers < n_options) & scorable
    is_correct = valid & (answers == correct_ix)
    is_wrong = valid & ~is_correct
    is_skipped = scorable & ~valid

    correct = is_correct.sum(axis=1).astype(np.int64)
    wrong = is_wrong.sum(axis=1).astype(np.int64)
    skipped = is_skipped.sum(axis=1).astype(np.int64)
    scores = correct * scheme.correct + wrong * scheme.wrong

    return BatchScores(
        scores=scores.astype(np.float64),
        correct=correct,
        wrong=wrong,
        skipped=skipped,
    )
