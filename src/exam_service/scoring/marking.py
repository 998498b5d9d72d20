from dataclasses import dataclass

from exam_service.core.constants import CORRECT_MARK, UNANSWERED_MARK, WRONG_MARK
from exam_service.core.data_models import QuestionRecord

NO_MARKS_LABEL = "No Marks"


@dataclass(frozen=True)
class MarkingScheme:
    """
    Marks awarded per scorable item.

    Attributes:
        correct: Contribution of a correct answer.
        wrong: Contribution of a wrong answer (negative marking).
        unanswered: Contribution of an unanswered item. Skipping is never
            penalised, so this must be zero.
    """

    correct: float = CORRECT_MARK
    wrong: float = WRONG_MARK
    unanswered: float = UNANSWERED_MARK

    def __post_init__(self) -> None:
        if self.correct <= 0:
            raise ValueError(f"correct must be > 0, got {self.correct}")
        if self.wrong > 0:
            raise ValueError(f"wrong must be <= 0, got {self.wrong}")
        if self.unanswered != 0:
            raise ValueError(
                f"unanswered must be 0, got {self.unanswered}"
            )


DEFAULT_MARKING_SCHEME = MarkingScheme()


def marks_label(
    record: QuestionRecord, scheme: MarkingScheme = DEFAULT_MARKING_SCHEME
) -> str:
    """Marks hint shown next to a question, e.g. "+1 / -0.25"."""
    if not record.is_scorable:
        return NO_MARKS_LABEL
    return f"{scheme.correct:+g} / {scheme.wrong:+g}"
