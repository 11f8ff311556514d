"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from its collaborators, plus the result values every mutating registry
operation returns. Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .exceptions import OperationFailed


class ErrorKind(str, Enum):
    """
    Failure kinds reported by registry operations.

    Every failure is local and recoverable by the caller: the registry
    state is unchanged after any failed operation.
    """

    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    INVALID_PSEUDONYM = "INVALID_PSEUDONYM"
    INVALID_PUBKEY = "INVALID_PUBKEY"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    IDENTITY_ALREADY_EXISTS = "IDENTITY_ALREADY_EXISTS"
    IDENTITY_NOT_FOUND = "IDENTITY_NOT_FOUND"
    INVALID_MAX_IDENTITIES = "INVALID_MAX_IDENTITIES"
    MAX_IDENTITIES_EXCEEDED = "MAX_IDENTITIES_EXCEEDED"
    INVALID_METADATA = "INVALID_METADATA"
    AUTHORITY_NOT_VERIFIED = "AUTHORITY_NOT_VERIFIED"
    INVALID_ATTRIBUTE = "INVALID_ATTRIBUTE"
    INVALID_RECOVERY_KEY = "INVALID_RECOVERY_KEY"
    INVALID_CREATION_FEE = "INVALID_CREATION_FEE"
    FEE_TRANSFER_FAILED = "FEE_TRANSFER_FAILED"

    @property
    def code(self) -> int:
        """Numeric error code (stable across releases)."""
        return _ERROR_CODES[self]


_ERROR_CODES = {
    ErrorKind.NOT_AUTHORIZED: 100,
    ErrorKind.INVALID_PSEUDONYM: 101,
    ErrorKind.INVALID_PUBKEY: 102,
    ErrorKind.INVALID_TIMESTAMP: 103,
    ErrorKind.IDENTITY_ALREADY_EXISTS: 104,
    ErrorKind.IDENTITY_NOT_FOUND: 105,
    ErrorKind.INVALID_MAX_IDENTITIES: 106,
    ErrorKind.MAX_IDENTITIES_EXCEEDED: 107,
    ErrorKind.INVALID_METADATA: 109,
    ErrorKind.AUTHORITY_NOT_VERIFIED: 110,
    ErrorKind.INVALID_ATTRIBUTE: 111,
    ErrorKind.INVALID_RECOVERY_KEY: 112,
    ErrorKind.INVALID_CREATION_FEE: 113,
    ErrorKind.FEE_TRANSFER_FAILED: 114,
}


@dataclass(frozen=True)
class Result:
    """
    Tagged success/failure value returned by mutating operations.

    Expected validation failures are never raised; callers inspect
    ``ok`` / ``error`` or opt in to exceptions via ``unwrap()``.
    """

    ok: bool
    value: Any = None
    error: ErrorKind | None = None

    @classmethod
    def success(cls, value: Any = True) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "Result":
        return cls(ok=False, error=error)

    def unwrap(self) -> Any:
        """
        Return the success value.

        Raises:
            OperationFailed: If the result is a failure
        """
        if not self.ok:
            raise OperationFailed(self.error)
        return self.value


class Ledger(Protocol):
    """Port interface for the fee-transfer collaborator."""

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        """
        Move ``amount`` units from ``sender`` to ``recipient``.

        Retry and rollback semantics belong to the ledger, not the registry.

        Args:
            amount: Non-negative number of units
            sender: Principal paying the fee
            recipient: Principal receiving the fee (the authority)

        Returns:
            True if the ledger accepted the transfer, False otherwise
        """
        ...


class Clock(Protocol):
    """Port interface for the logical clock."""

    def current_height(self) -> int:
        """
        Return the current logical (block) height.

        Heights are expected to be monotonically non-decreasing.
        """
        ...
