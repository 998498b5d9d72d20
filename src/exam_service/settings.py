from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

from exam_service.core.constants import CORRECT_MARK, WRONG_MARK
from exam_service.scoring.marking import MarkingScheme

EXAM_ENV_PREFIX = "EXAM_"


class ExamSettings(BaseSettings):
    model_config = {"env_prefix": EXAM_ENV_PREFIX}

    tick_interval_ms: int = 1000
    correct_mark: float = CORRECT_MARK
    wrong_mark: float = WRONG_MARK
    results_path: Path = Path("data") / "results" / "results.jsonl"

    def marking_scheme(self) -> MarkingScheme:
        return MarkingScheme(correct=self.correct_mark, wrong=self.wrong_mark)


@lru_cache(maxsize=1)
def get_settings() -> ExamSettings:
    return ExamSettings()
