"""
Exam definitions loaded from YAML using OmegaConf structured configs.

Example:

    exam_code: ENG101
    title: English Comprehension
    duration_minutes: 15
    expiry: "2026-12-31T23:59:00"
    question_ids: [P1, S1, S2, Q1]
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

from omegaconf import MISSING, OmegaConf
from omegaconf.errors import MissingMandatoryValue

from exam_service.exams.exceptions import ExamExpiredError, ExamNotFoundError

# Expiry times without an offset are India Standard Time
DEFAULT_EXPIRY_TZ = timezone(timedelta(hours=5, minutes=30), name="IST")
MS_PER_MINUTE = 60_000


def parse_expiry(expiry: str) -> datetime:
    parsed = datetime.fromisoformat(expiry)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=DEFAULT_EXPIRY_TZ)
    return parsed


@dataclass
class ExamConfig:
    """Configuration for one exam.

    Attributes:
        exam_code: Code candidates enter to take the exam.
        title: Display title.
        duration_minutes: Time allowed once the exam is started.
        expiry: ISO-8601 time after which the exam can no longer be started.
        question_ids: Question record ids in display order.
    """

    exam_code: str = MISSING
    title: str = MISSING
    duration_minutes: int = MISSING
    expiry: str | None = None
    question_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.exam_code:
            raise ValueError("exam_code must be non-empty")
        if self.duration_minutes <= 0:
            raise ValueError(
                f"duration_minutes must be > 0, got {self.duration_minutes}"
            )
        if not self.question_ids:
            raise ValueError("Exam must have at least 1 question")
        if self.expiry is not None:
            parse_expiry(self.expiry)

    @property
    def duration_ms(self) -> int:
        return self.duration_minutes * MS_PER_MINUTE

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once now reaches the expiry. A naive now is read as IST."""
        if self.expiry is None:
            return False
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=DEFAULT_EXPIRY_TZ)
        return now >= parse_expiry(self.expiry)

    def ensure_available(self, now: datetime | None = None) -> None:
        """Raise ExamExpiredError if the exam can no longer be started."""
        if self.expiry is not None and self.is_expired(now):
            raise ExamExpiredError(self.exam_code, self.expiry)


def load_exam_config(yaml_path: Path) -> ExamConfig:
    """Load and validate an exam definition from YAML.

    Raises:
        FileNotFoundError: If yaml_path doesn't exist
        ValueError: If the definition is invalid
    """
    schema = OmegaConf.structured(ExamConfig)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Exam config not found: {yaml_path}")

    user_config = OmegaConf.load(yaml_path)
    config = OmegaConf.merge(schema, user_config)

    try:
        result = OmegaConf.to_object(config)
    except MissingMandatoryValue as e:
        raise ValueError(f"Invalid exam config {yaml_path}: {e}") from e
    assert isinstance(result, ExamConfig)

    return result


def load_exam_catalog(exams_dir: Path) -> dict[str, ExamConfig]:
    """Load every *.yaml exam definition in a directory, keyed by exam code."""
    catalog: dict[str, ExamConfig] = {}
    for path in sorted(exams_dir.glob("*.yaml")):
        config = load_exam_config(path)
        if config.exam_code in catalog:
            raise ValueError(f"Duplicate exam code: {config.exam_code}")
        catalog[config.exam_code] = config
    return catalog


def get_exam(catalog: dict[str, ExamConfig], exam_code: str) -> ExamConfig:
    config = catalog.get(exam_code)
    if config is None:
        raise ExamNotFoundError(exam_code)
    return config
