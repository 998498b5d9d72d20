import numpy as np
import pytest

from exam_service.core.constants import UNANSWERED_VALUE
from exam_service.core.data_models import QuestionRecord
from exam_service.scoring.batch import score_answer_matrix
from exam_service.scoring.engine import score_attempt


def _records() -> list[QuestionRecord]:
    return [
        QuestionRecord(id="Q1", options=("A", "B", "C", "D"), correct_index=0),
        QuestionRecord(id="P1", prompt_text="Passage"),
        QuestionRecord(
            id="S1",
            options=("A", "B"),
            correct_index=1,
            is_sub_question=True,
            parent_id="P1",
            sub_order=1,
        ),
        QuestionRecord(id="Q2", options=("A", "B", "C"), correct_index=None),
    ]


class TestScoreAnswerMatrix:
    def test_matches_per_attempt_scoring(self) -> None:
        records = _records()
        rng = np.random.default_rng(42)
        responses = rng.integers(-1, 5, size=(50, len(records))).astype(
            np.int8
        )

        batch = score_answer_matrix(records, responses)

        for ix in range(responses.shape[0]):
            expected = score_attempt(records, responses[ix].tolist())
            assert batch.scores[ix] == expected.score
            assert batch.correct[ix] == expected.correct
            assert batch.wrong[ix] == expected.wrong
            assert batch.skipped[ix] == expected.skipped
            assert batch.answered[ix] == expected.answered

    def test_known_values(self) -> None:
        responses = np.array(
            [
                [0, 0, 1, UNANSWERED_VALUE],
                [1, UNANSWERED_VALUE, 0, 2],
                [UNANSWERED_VALUE] * 4,
            ],
            dtype=np.int8,
        )
        batch = score_answer_matrix(_records(), responses)

        np.testing.assert_array_equal(batch.scores, [2.0, -0.75, 0.0])
        np.testing.assert_array_equal(batch.correct, [2, 0, 0])
        np.testing.assert_array_equal(batch.wrong, [0, 3, 0])
        np.testing.assert_array_equal(batch.skipped, [1, 0, 3])
        assert batch.n_candidates == 3

    def test_width_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="exam has 4 records"):
            score_answer_matrix(_records(), np.zeros((2, 3), dtype=np.int8))

    def test_not_2d_raises(self) -> None:
        with pytest.raises(ValueError, match="must be 2D"):
            score_answer_matrix(_records(), np.zeros(4, dtype=np.int8))
