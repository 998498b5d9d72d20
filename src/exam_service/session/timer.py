import asyncio
import logging

from exam_service.scoring import ScoreResult
from exam_service.session.exam_session import ExamSession
from exam_service.session.state import SessionStatus

logger = logging.getLogger(__name__)


async def run_timer(
    session: ExamSession, interval_s: float
) -> ScoreResult | None:
    """
    Tick the session every interval_s seconds until it leaves IN_PROGRESS.

    Must run on the same event loop that applies user input to the session,
    so ticks and answers are serialized.

    Returns:
        The session result if it completed, None if it was abandoned or
        reset.
    """
    if interval_s < 0:
        raise ValueError(f"interval_s must be >= 0, got {interval_s}")

    while session.status == SessionStatus.IN_PROGRESS:
        session.tick()
        if session.status != SessionStatus.IN_PROGRESS:
            break
        await asyncio.sleep(interval_s)

    logger.debug(f"Timer stopped in state {session.status}")
    return session.result
