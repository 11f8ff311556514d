"""
Registry domain service - Identity registry state machine.

This module orchestrates the authority gate and the identity, attribute
and recovery-key stores. Every mutating operation runs the same pipeline,
failing fast at the first violated precondition:

    validation -> authorization -> state mutation -> external side effect

Registration Pipeline (first failure wins)
==========================================

    capacity                MAX_IDENTITIES_EXCEEDED
    pseudonym format        INVALID_PSEUDONYM
    public key format       INVALID_PUBKEY
    metadata format         INVALID_METADATA
    pseudonym uniqueness    IDENTITY_ALREADY_EXISTS
    authority presence      AUTHORITY_NOT_VERIFIED
    logical height          INVALID_TIMESTAMP
    fee transfer            FEE_TRANSFER_FAILED
    commit                  -> new id

The fee is transferred from the caller to the authority before the record
is committed. A failed operation never leaves a partial write behind.

Identity Lifecycle (forward-only)
=================================

    (none) -> active        register_identity
    active -> active        update_identity (pseudonym + metadata)
    active -> deactivated   deactivate_identity (terminal)

Records are never deleted; ids and pseudonym-index entries are only
added, or swapped atomically on rename.
"""

import logging
import threading
from dataclasses import dataclass, field

from .attributes import AttributeStore
from .authority import AuthorityGate
from .identities import IdentityStore
from .ports import Clock, ErrorKind, Ledger, Result
from .records import Attribute, Identity, RecoveryKey, RegistryConfig
from .recovery import RecoveryKeyStore

logger = logging.getLogger(__name__)


@dataclass
class RegistryService:
    """
    Domain service for the identity registry.

    Owns the whole registry state: constructed once, mutated only through
    the operations below. A single re-entrant lock serializes every public
    operation, so concurrent callers observe each one atomically.
    """

    ledger: Ledger
    clock: Clock
    gate: AuthorityGate = field(default_factory=AuthorityGate)
    identities: IdentityStore = field(default_factory=IdentityStore)
    attributes: AttributeStore = field(init=False)
    recovery_keys: RecoveryKeyStore = field(init=False)
    _lock: threading.RLock = field(init=False, repr=False, default_factory=threading.RLock)
    _last_height: int = field(init=False, repr=False, default=0)

    def __post_init__(self) -> None:
        self.attributes = AttributeStore(self.identities)
        self.recovery_keys = RecoveryKeyStore(self.identities)

    # -- authority and policy ------------------------------------------------

    def set_authority(self, principal: str) -> Result:
        with self._lock:
            return self._logged("set_authority", self.gate.set_authority(principal))

    def set_max_identities(self, value: int, caller: str) -> Result:
        with self._lock:
            return self._logged("set_max_identities", self.gate.set_max_identities(value, caller))

    def set_creation_fee(self, value: int, caller: str) -> Result:
        with self._lock:
            return self._logged("set_creation_fee", self.gate.set_creation_fee(value, caller))

    # -- identity lifecycle --------------------------------------------------

    def register_identity(
        self, pseudonym: str, public_key: str, metadata: str, caller: str
    ) -> Result:
        """
        Register a new identity owned by ``caller``.

        Args:
            pseudonym: Unique handle (1-50 characters)
            public_key: Opaque key material (1-256 characters)
            metadata: Free-form text (0-200 characters)
            caller: Authenticated principal, charged the creation fee

        Returns:
            Result.success(id) or Result.failure(kind)
        """
        with self._lock:
            error = self.identities.validate_new(
                pseudonym, public_key, metadata, self.gate.max_identities
            )
            if error is not None:
                return self._rejected("register_identity", error)
            authority = self.gate.authority
            if authority is None:
                return self._rejected("register_identity", ErrorKind.AUTHORITY_NOT_VERIFIED)
            height = self._read_height()
            if height is None:
                return self._rejected("register_identity", ErrorKind.INVALID_TIMESTAMP)

            fee = self.gate.creation_fee
            if not self.ledger.transfer(fee, caller, authority):
                return self._rejected("register_identity", ErrorKind.FEE_TRANSFER_FAILED)

            result = self.identities.register(
                pseudonym, public_key, metadata, caller, height, self.gate.max_identities
            )
            self._last_height = height
            logger.info(
                "Identity %s registered: pseudonym=%s creator=%s fee=%d",
                result.value,
                pseudonym,
                caller,
                fee,
            )
            return result

    def update_identity(
        self, identity_id: int, new_pseudonym: str, new_metadata: str, caller: str
    ) -> Result:
        with self._lock:
            result = self.identities.update(identity_id, new_pseudonym, new_metadata, caller)
            if result.ok:
                logger.info("Identity %d updated: pseudonym=%s", identity_id, new_pseudonym)
            return self._logged("update_identity", result)

    def deactivate_identity(self, identity_id: int, caller: str) -> Result:
        with self._lock:
            result = self.identities.deactivate(identity_id, caller)
            if result.ok:
                logger.info("Identity %d deactivated by %s", identity_id, caller)
            return self._logged("deactivate_identity", result)

    def set_attribute(self, identity_id: int, key: str, value: str, caller: str) -> Result:
        with self._lock:
            error = self.attributes.check(identity_id, key, caller)
            if error is not None:
                return self._rejected("set_attribute", error)
            height = self._read_height()
            if height is None:
                return self._rejected("set_attribute", ErrorKind.INVALID_TIMESTAMP)
            result = self.attributes.set(identity_id, key, value, caller, height)
            self._last_height = height
            return result

    def set_recovery_key(self, identity_id: int, recovery_key: str, caller: str) -> Result:
        with self._lock:
            return self._logged(
                "set_recovery_key", self.recovery_keys.set(identity_id, recovery_key, caller)
            )

    # -- read side -----------------------------------------------------------

    def get_identity(self, identity_id: int) -> Identity | None:
        with self._lock:
            return self.identities.get(identity_id)

    def get_identity_by_pseudonym(self, pseudonym: str) -> Identity | None:
        with self._lock:
            return self.identities.get_by_pseudonym(pseudonym)

    def get_attribute(self, identity_id: int, key: str) -> Attribute | None:
        with self._lock:
            return self.attributes.get(identity_id, key)

    def get_recovery_key(self, identity_id: int) -> RecoveryKey | None:
        with self._lock:
            return self.recovery_keys.get(identity_id)

    def get_identity_count(self) -> int:
        with self._lock:
            return self.identities.count()

    def is_identity_registered(self, pseudonym: str) -> bool:
        with self._lock:
            return self.identities.is_registered(pseudonym)

    def get_config(self) -> RegistryConfig:
        with self._lock:
            return self.gate.config()

    # -- helpers -------------------------------------------------------------

    def _read_height(self) -> int | None:
        """
        Read the logical clock.

        Returns None if the height is negative or lower than one already
        stamped on a record (heights never go backwards).
        """
        height = self.clock.current_height()
        if height < 0 or height < self._last_height:
            return None
        return height

    def _rejected(self, operation: str, error: ErrorKind) -> Result:
        logger.debug("%s rejected: %s", operation, error.value)
        return Result.failure(error)

    def _logged(self, operation: str, result: Result) -> Result:
        if not result.ok:
            logger.debug("%s rejected: %s", operation, result.error.value)
        return result
