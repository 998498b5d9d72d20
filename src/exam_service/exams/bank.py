import logging
from collections.abc import Iterable

from exam_service.core.data_models import QuestionRecord
from exam_service.exams.config import ExamConfig

logger = logging.getLogger(__name__)


class QuestionBank:
    """
    In-memory record source: looks up question records by id and assembles
    an exam's record list in the exam's order.
    """

    def __init__(self, records: Iterable[QuestionRecord]) -> None:
        self._records: dict[str, QuestionRecord] = {}
        for record in records:
            if record.id in self._records:
                logger.warning(
                    f"Duplicate question id '{record.id}', keeping the first"
                )
                continue
            self._records[record.id] = record

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def get(self, record_id: str) -> QuestionRecord | None:
        return self._records.get(record_id)

    def records_for_exam(self, config: ExamConfig) -> list[QuestionRecord]:
        """
        Records for config.question_ids, in that order.

        Ids with no record are skipped so the rest of the exam can still be
        taken; a sub-question whose passage was skipped becomes an orphan.
        """
        records: list[QuestionRecord] = []
        for record_id in config.question_ids:
            record = self._records.get(record_id)
            if record is None:
                logger.warning(
                    f"Exam {config.exam_code}: could not find question "
                    f"'{record_id}'"
                )
                continue
            records.append(record)
        return records
