"""Wall-clock source for the state machine"""
import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current unix time in whole seconds"""
        ...


class SystemClock:
    def now(self) -> int:
        return int(time.time())
