"""
Logical clock adapters - Implement Clock protocol.

Heights are block-style counters, not wall-clock time. The domain only
ever sees the integer height.
"""

import time
from collections.abc import Callable


class LogicalClock:
    """
    Manually advanced height counter.

    Starts at ``genesis_height`` and only moves forward via advance().
    """

    def __init__(self, genesis_height: int = 0) -> None:
        if genesis_height < 0:
            raise ValueError(f"genesis_height must be non-negative, got {genesis_height}")
        self._height = genesis_height

    def current_height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move the height forward by ``blocks`` and return the new height."""
        if blocks < 0:
            raise ValueError(f"blocks must be non-negative, got {blocks}")
        self._height += blocks
        return self._height


class IntervalClock:
    """
    Height derived from elapsed monotonic time.

    One block is produced every ``block_interval_seconds`` since the clock
    was created, offset by ``genesis_height``.
    """

    def __init__(
        self,
        block_interval_seconds: float,
        genesis_height: int = 0,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if block_interval_seconds <= 0:
            raise ValueError("block_interval_seconds must be positive")
        self._interval = block_interval_seconds
        self._genesis_height = genesis_height
        self._monotonic = monotonic
        self._started = monotonic()

    def current_height(self) -> int:
        elapsed = self._monotonic() - self._started
        return self._genesis_height + int(elapsed // self._interval)
