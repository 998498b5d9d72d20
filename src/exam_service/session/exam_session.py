"""
Timed exam session.

State machine:

    NOT_STARTED --start--> IN_PROGRESS --submit / timeout--> SUBMITTING
        --> COMPLETED

    IN_PROGRESS --abandon--> ABANDONED
    IN_PROGRESS, ABANDONED --reset--> NOT_STARTED

Mutating operations are expected to be applied one at a time by a single
writer (a UI thread or one event loop). Every operation first checks the
wall-clock deadline, so a late tick cannot let an answer slip in after time
is up. Once COMPLETED, every mutating call is a no-op and submit() returns
the stored result.
"""

import logging
from collections.abc import Callable, Sequence
from numbers import Integral

from exam_service.core.data_models import QuestionNumber, QuestionRecord
from exam_service.hierarchy import (
    audit_hierarchy,
    log_hierarchy_issues,
    resolve_all,
)
from exam_service.scoring import (
    DEFAULT_MARKING_SCHEME,
    MarkingScheme,
    ScoreResult,
    is_valid_answer,
    score_attempt,
)
from exam_service.session.answers import AnswerBuffer
from exam_service.session.clock import Clock, monotonic_ms
from exam_service.session.state import SessionStatus

logger = logging.getLogger(__name__)

CompletionCallback = Callable[["ExamSession", ScoreResult], None]


class ExamSession:
    def __init__(
        self,
        clock: Clock = monotonic_ms,
        scheme: MarkingScheme = DEFAULT_MARKING_SCHEME,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self._clock = clock
        self._scheme = scheme
        self._on_complete = on_complete
        self._clear()

    def _clear(self) -> None:
        self._status = SessionStatus.NOT_STARTED
        self._records: tuple[QuestionRecord, ...] = ()
        self._numbers: list[QuestionNumber] = []
        self._answers = AnswerBuffer(0)
        self._current_index = 0
        self._duration_ms = 0.0
        self._started_at: float | None = None
        self._final_remaining_ms: float | None = None
        self._result: ScoreResult | None = None
        self._timed_out = False

    # --- Read-only views ---

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def records(self) -> tuple[QuestionRecord, ...]:
        return self._records

    @property
    def numbers(self) -> list[QuestionNumber]:
        """Display numbers for every record, resolved once at start."""
        return list(self._numbers)

    @property
    def answers(self) -> list[int | None]:
        return self._answers.snapshot()

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_record(self) -> QuestionRecord | None:
        if not self._records:
            return None
        return self._records[self._current_index]

    @property
    def current_number(self) -> QuestionNumber | None:
        if not self._numbers:
            return None
        return self._numbers[self._current_index]

    @property
    def started_at(self) -> float | None:
        return self._started_at

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @property
    def result(self) -> ScoreResult | None:
        return self._result

    @property
    def timed_out(self) -> bool:
        """True if the session was submitted because time ran out."""
        return self._timed_out

    @property
    def remaining_time_ms(self) -> float:
        """
        Time left, computed from the start time and the clock rather than
        from counted ticks. Frozen once the session is submitted.
        """
        if self._final_remaining_ms is not None:
            return self._final_remaining_ms
        if self._started_at is None:
            return 0.0
        return max(0.0, self._started_at + self._duration_ms - self._clock())

    # --- Transitions ---

    def start(
        self, records: Sequence[QuestionRecord], duration_ms: float
    ) -> bool:
        """
        Begin the exam.

        Returns:
            False if the session has already been started.

        Raises:
            ValueError: If there are no records or duration_ms is not
                positive.
        """
        if self._status != SessionStatus.NOT_STARTED:
            logger.debug(f"Ignoring start() in state {self._status}")
            return False
        if len(records) == 0:
            raise ValueError("Cannot start an exam with no questions")
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be > 0, got {duration_ms}")

        self._records = tuple(records)
        self._numbers = resolve_all(self._records)
        log_hierarchy_issues(audit_hierarchy(self._records))

        self._answers = AnswerBuffer(len(self._records))
        self._current_index = 0
        self._duration_ms = float(duration_ms)
        self._started_at = self._clock()
        self._status = SessionStatus.IN_PROGRESS

        logger.info(
            f"Exam started: {len(self._records)} records, "
            f"{self._duration_ms / 1000:.0f}s"
        )
        return True

    def _expire_if_due(self) -> None:
        if (
            self._status == SessionStatus.IN_PROGRESS
            and self.remaining_time_ms <= 0
        ):
            logger.info("Time is up, submitting")
            self._submit(timed_out=True)

    def _is_index(self, index: object) -> bool:
        if isinstance(index, bool) or not isinstance(index, Integral):
            logger.debug(f"Ignoring non-integer question index {index!r}")
            return False
        return True

    def _accepting_input(self, operation: str) -> bool:
        self._expire_if_due()
        if self._status != SessionStatus.IN_PROGRESS:
            logger.debug(f"Ignoring {operation} in state {self._status}")
            return False
        return True

    def select_answer(self, index: int, option_index: int | None) -> bool:
        """
        Record an answer for the question at index. None clears it.

        Returns:
            True if the answer was recorded. Answers for passages, unknown
            indices or invalid options are ignored.
        """
        if not self._accepting_input("select_answer()"):
            return False
        if not self._is_index(index):
            return False
        if not 0 <= index < len(self._records):
            logger.debug(f"Ignoring answer for out-of-range index {index}")
            return False

        record = self._records[index]
        if not record.is_scorable:
            logger.debug(f"Ignoring answer for passage '{record.id}'")
            return False
        if option_index is not None and not is_valid_answer(
            record, option_index
        ):
            logger.debug(
                f"Ignoring invalid option {option_index!r} for '{record.id}'"
            )
            return False

        self._answers.set(index, option_index)
        return True

    def go_to(self, index: int) -> int:
        """Move to index, clamped to the first / last question."""
        if not self._accepting_input("go_to()"):
            return self._current_index
        if not self._is_index(index):
            return self._current_index
        self._current_index = min(max(int(index), 0), len(self._records) - 1)
        return self._current_index

    def next_question(self) -> int:
        return self.go_to(self._current_index + 1)

    def previous_question(self) -> int:
        return self.go_to(self._current_index - 1)

    def tick(self) -> float:
        """
        Timer entry point. Submits automatically once time is up.

        Ticks may arrive late or be coalesced; only the clock matters.

        Returns:
            Remaining time in milliseconds.
        """
        self._expire_if_due()
        return self.remaining_time_ms

    def submit(self) -> ScoreResult | None:
        """
        Score the attempt and complete the session.

        Returns:
            The result. On a completed session, the stored result is returned
            again without rescoring. None if the session is not in progress.
        """
        if self._status == SessionStatus.COMPLETED:
            logger.debug("Session already completed, returning stored result")
            return self._result
        if self._status != SessionStatus.IN_PROGRESS:
            logger.debug(f"Ignoring submit() in state {self._status}")
            return None
        return self._submit(timed_out=self.remaining_time_ms <= 0)

    def _submit(self, timed_out: bool) -> ScoreResult:
        self._status = SessionStatus.SUBMITTING
        self._final_remaining_ms = self.remaining_time_ms
        self._timed_out = timed_out

        result = score_attempt(
            self._records, self._answers.snapshot(), self._scheme
        )
        self._result = result
        self._status = SessionStatus.COMPLETED

        logger.info(
            f"Exam submitted{' on timeout' if timed_out else ''}: "
            f"score={result.score}, correct={result.correct}, "
            f"wrong={result.wrong}, skipped={result.skipped}"
        )

        if self._on_complete is not None:
            try:
                self._on_complete(self, result)
            except Exception:
                logger.exception("Completion callback failed")

        return result

    def abandon(self) -> bool:
        """
        Cancel an attempt in progress. Answers are discarded, never scored.

        The deadline is checked first: if time ran out before any tick
        noticed it, the attempt is auto-submitted and scored instead, and
        abandon() returns False. The deadline wins over a late cancel.
        """
        if not self._accepting_input("abandon()"):
            return False
        self._final_remaining_ms = self.remaining_time_ms
        self._answers.clear()
        self._status = SessionStatus.ABANDONED
        logger.info("Exam abandoned")
        return True

    def reset(self) -> bool:
        """
        Return to NOT_STARTED, discarding answers.

        Completed sessions are immutable and cannot be reset. The deadline is
        checked first, so an in-progress session whose time has run out is
        auto-submitted and scored, and reset() then returns False.
        """
        self._expire_if_due()
        if self._status not in (
            SessionStatus.IN_PROGRESS,
            SessionStatus.ABANDONED,
        ):
            logger.debug(f"Ignoring reset() in state {self._status}")
            return False
        self._clear()
        logger.info("Exam session reset")
        return True
