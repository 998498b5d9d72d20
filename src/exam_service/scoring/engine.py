"""
Negative-marking scoring of a single attempt.

Pure functions with no timer or session state, so partial and aborted
attempts can be scored the same way as submitted ones.
"""

import logging
from collections.abc import Mapping, Sequence
from numbers import Integral

from exam_service.core.data_models import QuestionRecord
from exam_service.scoring.data_models import ItemStatus, ScoreResult
from exam_service.scoring.marking import DEFAULT_MARKING_SCHEME, MarkingScheme

logger = logging.getLogger(__name__)

Answers = Sequence[object] | Mapping[int, object]


def is_valid_answer(record: QuestionRecord, answer: object) -> bool:
    """
    True if answer is an integer option index within the record's options.

    Missing values, negative sentinels, out-of-range indices and
    non-integers (floats, strings, booleans) all count as unanswered.
    """
    if isinstance(answer, bool) or not isinstance(answer, Integral):
        return False
    return 0 <= int(answer) < record.n_options


def classify_item(record: QuestionRecord, answer: object) -> ItemStatus:
    if not record.is_scorable:
        return ItemStatus.PASSAGE
    if not is_valid_answer(record, answer):
        return ItemStatus.UNANSWERED
    # A scorable record without a correct index can only be answered wrongly
    if answer == record.correct_index:
        return ItemStatus.CORRECT
    return ItemStatus.WRONG


def _answer_at(answers: Answers, index: int) -> object:
    if isinstance(answers, Mapping):
        return answers.get(index)
    return answers[index] if index < len(answers) else None


def _warn_on_extra_answers(answers: Answers, n_records: int) -> None:
    if isinstance(answers, Mapping):
        extra = [k for k in answers if not 0 <= k < n_records]
    else:
        extra = list(range(n_records, len(answers)))
    if extra:
        logger.warning(
            f"Ignoring {len(extra)} answers with no matching question"
        )


def score_attempt(
    records: Sequence[QuestionRecord],
    answers: Answers,
    scheme: MarkingScheme = DEFAULT_MARKING_SCHEME,
) -> ScoreResult:
    """
    Score an attempt under negative marking.

    Args:
        records: Question records in exam order.
        answers: Selected option index per record, index-aligned with
            records (a sequence, or a mapping from record index). Indices
            with no entry are unanswered.
        scheme: Marks per correct / wrong answer.

    Returns:
        ScoreResult with the exact score and per-item statuses. Passages are
        excluded from every count.
    """
    _warn_on_extra_answers(answers, len(records))

    score = 0.0
    counts = dict.fromkeys(ItemStatus, 0)
    per_item: list[ItemStatus] = []

    for ix, record in enumerate(records):
        status = classify_item(record, _answer_at(answers, ix))
        if status == ItemStatus.CORRECT:
            score += scheme.correct
        elif status == ItemStatus.WRONG:
            score += scheme.wrong
        counts[status] += 1
        per_item.append(status)

    correct = counts[ItemStatus.CORRECT]
    wrong = counts[ItemStatus.WRONG]
    return ScoreResult(
        score=score,
        answered=correct + wrong,
        correct=correct,
        wrong=wrong,
        skipped=counts[ItemStatus.UNANSWERED],
        per_item=tuple(per_item),
    )
