"""
Shared fixtures for adversarial tests.

Provides a registry whose ledger records transfers thread-safely, so
concurrent attacks can be checked against the fees actually charged.
"""

import threading

import pytest

from src.adapters.clock.logical import LogicalClock
from src.domain.registry import RegistryService

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial

AUTHORITY = "ST2TEST"


class RecordingLedger:
    """Ledger that accepts every transfer and keeps a record of it."""

    def __init__(self) -> None:
        self.transfers: list[tuple[int, str, str]] = []
        self._lock = threading.Lock()

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        with self._lock:
            self.transfers.append((amount, sender, recipient))
        return True


@pytest.fixture
def recording_ledger() -> RecordingLedger:
    return RecordingLedger()


@pytest.fixture
def shared_registry(recording_ledger: RecordingLedger) -> RegistryService:
    """Registry with an authority, shared across attacker threads."""
    registry = RegistryService(ledger=recording_ledger, clock=LogicalClock())
    registry.set_authority(AUTHORITY).unwrap()
    return registry
