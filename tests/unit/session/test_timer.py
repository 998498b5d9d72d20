import asyncio

import pytest

from exam_service.core.data_models import QuestionRecord
from exam_service.session.exam_session import ExamSession
from exam_service.session.state import SessionStatus
from exam_service.session.timer import run_timer

DURATION_MS = 5_000


def _started_session(clock) -> ExamSession:
    session = ExamSession(clock=clock)
    session.start(
        [QuestionRecord(id="Q1", options=("A", "B"), correct_index=1)],
        DURATION_MS,
    )
    return session


class TestRunTimer:
    @pytest.mark.asyncio
    async def test_submits_on_timeout(self, clock) -> None:
        session = _started_session(clock)
        session.select_answer(0, 1)
        timer = asyncio.create_task(run_timer(session, 0))

        await asyncio.sleep(0)
        assert session.status == SessionStatus.IN_PROGRESS

        clock.advance(DURATION_MS)
        result = await asyncio.wait_for(timer, timeout=1)

        assert result is not None
        assert result.score == 1.0
        assert session.timed_out is True

    @pytest.mark.asyncio
    async def test_stops_after_manual_submit(self, clock) -> None:
        session = _started_session(clock)
        timer = asyncio.create_task(run_timer(session, 0))
        await asyncio.sleep(0)

        submitted = session.submit()
        result = await asyncio.wait_for(timer, timeout=1)

        assert result is submitted
        assert session.timed_out is False

    @pytest.mark.asyncio
    async def test_returns_none_when_abandoned(self, clock) -> None:
        session = _started_session(clock)
        timer = asyncio.create_task(run_timer(session, 0))
        await asyncio.sleep(0)

        session.abandon()

        assert await asyncio.wait_for(timer, timeout=1) is None

    @pytest.mark.asyncio
    async def test_not_started_returns_immediately(self, clock) -> None:
        assert await run_timer(ExamSession(clock=clock), 0) is None

    @pytest.mark.asyncio
    async def test_negative_interval_raises(self, clock) -> None:
        with pytest.raises(ValueError, match="interval_s"):
            await run_timer(_started_session(clock), -1)
