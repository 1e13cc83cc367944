from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def get_clock() -> Clock:
    """Wall clock used by submission rules; overridden in tests."""
    return datetime.now
