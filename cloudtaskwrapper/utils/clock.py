"""
Time utilities for task scheduling.
"""
import time
from typing import Callable, Optional


Clock = Callable[[], float]


def system_clock() -> float:
    """Current wall-clock time in epoch seconds."""
    return time.time()


def schedule_in_minutes(minutes: float, clock: Optional[Clock] = None) -> int:
    """
    Compute an absolute schedule time from a relative offset.
    
    Args:
        minutes: Minutes from now
        clock: Time source returning epoch seconds (default: system clock)
        
    Returns:
        Epoch seconds, truncated to a whole second
        
    Example:
        schedule_in_minutes(10, clock=lambda: 1_700_000_000.0)  # 1700000600
    """
    if clock is None:
        clock = system_clock
    
    return int(clock() + minutes * 60)
