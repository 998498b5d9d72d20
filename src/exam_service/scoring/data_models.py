from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ItemStatus(StrEnum):
    PASSAGE = "passage"
    UNANSWERED = "unanswered"
    CORRECT = "correct"
    WRONG = "wrong"


class ScoreResult(BaseModel):
    """
    Outcome of scoring one attempt.

    Attributes:
        score: Exact sum of per-item contributions, never rounded.
        answered: Number of valid-answered scorable items (correct + wrong).
        correct: Number of correct answers.
        wrong: Number of wrong answers.
        skipped: Number of scorable items without a valid answer.
        per_item: Status of every record, index-aligned with the records.
    """

    model_config = ConfigDict(frozen=True)

    score: float
    answered: int
    correct: int
    wrong: int
    skipped: int
    per_item: tuple[ItemStatus, ...]

    @property
    def n_scorable(self) -> int:
        return self.answered + self.skipped
