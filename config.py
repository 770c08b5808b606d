"""
TourGpX — Tour to GPX Converter
Runtime configuration and the overall conversion deadline.
"""

from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Callable

from errors import DeadlineExceeded


@dataclass(frozen=True)
class Configuration:
    """Settings passed explicitly into the pipeline."""
    user_agent: str = "komootgpx"
    http_timeout: float = 10.0     # seconds, per request
    max_retries: int = 3           # total attempts
    retry_interval: float = 2.0    # seconds between attempts
    deadline: float = 30.0         # seconds for the whole conversion


def default_config() -> Configuration:
    return Configuration()


class Deadline:
    """Fixed point in time after which the conversion must stop."""

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self):
        if self.expired:
            raise DeadlineExceeded("deadline exceeded")
