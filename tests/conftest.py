"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Mocked ledger collaborator
- Manually advanced logical clock
- Registry service with and without an authority
"""

from unittest.mock import Mock

import pytest

from src.adapters.clock.logical import LogicalClock
from src.domain.registry import RegistryService

AUTHORITY = "ST2TEST"
CREATOR = "ST1TEST"
STRANGER = "ST3FAKE"


@pytest.fixture
def ledger() -> Mock:
    """Ledger mock that accepts every transfer."""
    mock = Mock()
    mock.transfer.return_value = True
    return mock


@pytest.fixture
def clock() -> LogicalClock:
    return LogicalClock()


@pytest.fixture
def registry(ledger: Mock, clock: LogicalClock) -> RegistryService:
    """Registry with no authority configured."""
    return RegistryService(ledger=ledger, clock=clock)


@pytest.fixture
def authorized_registry(registry: RegistryService) -> RegistryService:
    """Registry with AUTHORITY installed."""
    registry.set_authority(AUTHORITY).unwrap()
    return registry
