# core/clock.py
"""
Clock abstraction so date arithmetic can be pinned in tests
"""
from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]

def system_clock() -> datetime:
    """Current local wall-clock time"""
    return datetime.now()

def fixed_clock(moment: datetime) -> Clock:
    """Clock that always returns ``moment``"""
    def _now() -> datetime:
        return moment
    return _now
