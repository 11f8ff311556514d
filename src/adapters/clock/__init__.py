"""Clock adapters - Logical height sources."""

from .logical import IntervalClock, LogicalClock

__all__ = ["IntervalClock", "LogicalClock"]
