from exam_service.session.answers import AnswerBuffer
from exam_service.session.clock import Clock, monotonic_ms
from exam_service.session.exam_session import CompletionCallback, ExamSession
from exam_service.session.state import SessionStatus
from exam_service.session.timer import run_timer

__all__ = [
    "AnswerBuffer",
    "Clock",
    "CompletionCallback",
    "ExamSession",
    "monotonic_ms",
    "run_timer",
    "SessionStatus",
]
