"""
Authority gate - One-time authority and the policy it controls.

The authority transitions from unset to set exactly once. Policy
parameters (capacity, creation fee) may only be changed by the
established authority.
"""

import logging

from .ports import ErrorKind, Result
from .records import (
    BURN_PRINCIPAL,
    DEFAULT_CREATION_FEE,
    DEFAULT_MAX_IDENTITIES,
    RegistryConfig,
)

logger = logging.getLogger(__name__)


class AuthorityGate:
    """Holds the authority reference and the mutable registry policy."""

    def __init__(
        self,
        max_identities: int = DEFAULT_MAX_IDENTITIES,
        creation_fee: int = DEFAULT_CREATION_FEE,
        burn_principal: str = BURN_PRINCIPAL,
    ) -> None:
        self._authority: str | None = None
        self._max_identities = max_identities
        self._creation_fee = creation_fee
        self._burn_principal = burn_principal

    @property
    def authority(self) -> str | None:
        return self._authority

    @property
    def max_identities(self) -> int:
        return self._max_identities

    @property
    def creation_fee(self) -> int:
        return self._creation_fee

    def has_authority(self) -> bool:
        return self._authority is not None

    def config(self) -> RegistryConfig:
        return RegistryConfig(
            authority=self._authority,
            max_identities=self._max_identities,
            creation_fee=self._creation_fee,
        )

    def set_authority(self, principal: str) -> Result:
        """
        Fix the authority principal. Succeeds at most once.

        Args:
            principal: Principal to install as authority

        Returns:
            Result.success(True), or NOT_AUTHORIZED if the principal is the
            burn sentinel or an authority is already set
        """
        if principal == self._burn_principal:
            return Result.failure(ErrorKind.NOT_AUTHORIZED)
        if self._authority is not None:
            return Result.failure(ErrorKind.NOT_AUTHORIZED)
        self._authority = principal
        logger.info("Authority set: %s", principal)
        return Result.success(True)

    def set_max_identities(self, value: int, caller: str) -> Result:
        if value <= 0:
            return Result.failure(ErrorKind.INVALID_MAX_IDENTITIES)
        denied = self._check_caller(caller)
        if denied is not None:
            return denied
        self._max_identities = value
        logger.info("Max identities set to %d by %s", value, caller)
        return Result.success(True)

    def set_creation_fee(self, value: int, caller: str) -> Result:
        if value < 0:
            return Result.failure(ErrorKind.INVALID_CREATION_FEE)
        denied = self._check_caller(caller)
        if denied is not None:
            return denied
        self._creation_fee = value
        logger.info("Creation fee set to %d by %s", value, caller)
        return Result.success(True)

    def _check_caller(self, caller: str) -> Result | None:
        """Policy changes need an established authority, and the caller must be it."""
        if self._authority is None:
            return Result.failure(ErrorKind.AUTHORITY_NOT_VERIFIED)
        if caller != self._authority:
            return Result.failure(ErrorKind.NOT_AUTHORIZED)
        return None
