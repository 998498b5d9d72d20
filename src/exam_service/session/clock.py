import time
from collections.abc import Callable

# Returns monotonic "now" in milliseconds
Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0
