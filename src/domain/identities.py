"""
Identity store - Canonical identity records.

Records are keyed by numeric id and indexed by pseudonym. Ids form a
dense sequence starting at 0 and the next-id counter never decreases.
A pseudonym maps to exactly one id at any time.
"""

import logging
from dataclasses import replace

from .exceptions import RegistryCorrupted
from .ports import ErrorKind, Result
from .records import (
    MAX_METADATA_LENGTH,
    MAX_PSEUDONYM_LENGTH,
    MAX_PUBLIC_KEY_LENGTH,
    Identity,
)

logger = logging.getLogger(__name__)


def is_valid_pseudonym(pseudonym: str) -> bool:
    return 0 < len(pseudonym) <= MAX_PSEUDONYM_LENGTH


def is_valid_public_key(public_key: str) -> bool:
    return 0 < len(public_key) <= MAX_PUBLIC_KEY_LENGTH


def is_valid_metadata(metadata: str) -> bool:
    return len(metadata) <= MAX_METADATA_LENGTH


class IdentityStore:
    """
    Owns identity records and the pseudonym index.

    Not thread-safe on its own; RegistryService serializes access.
    """

    def __init__(self) -> None:
        self._next_id = 0
        self._identities: dict[int, Identity] = {}
        self._by_pseudonym: dict[str, int] = {}

    def validate_new(
        self, pseudonym: str, public_key: str, metadata: str, max_identities: int
    ) -> ErrorKind | None:
        """
        Check a prospective registration without writing anything.

        Order: capacity, pseudonym format, public key format,
        metadata format, pseudonym uniqueness.

        Returns:
            The first violated ErrorKind, or None if the registration is valid
        """
        if self._next_id >= max_identities:
            return ErrorKind.MAX_IDENTITIES_EXCEEDED
        if not is_valid_pseudonym(pseudonym):
            return ErrorKind.INVALID_PSEUDONYM
        if not is_valid_public_key(public_key):
            return ErrorKind.INVALID_PUBKEY
        if not is_valid_metadata(metadata):
            return ErrorKind.INVALID_METADATA
        if pseudonym in self._by_pseudonym:
            return ErrorKind.IDENTITY_ALREADY_EXISTS
        return None

    def register(
        self,
        pseudonym: str,
        public_key: str,
        metadata: str,
        creator: str,
        now: int,
        max_identities: int,
    ) -> Result:
        """
        Store a new active identity under the next sequential id.

        Args:
            pseudonym: Unique handle (1-50 characters)
            public_key: Opaque key material (1-256 characters)
            metadata: Free-form text (0-200 characters)
            creator: Principal registering the identity
            now: Logical height stamped as created_at
            max_identities: Capacity limit from the authority gate

        Returns:
            Result.success(id) or the first validation failure
        """
        error = self.validate_new(pseudonym, public_key, metadata, max_identities)
        if error is not None:
            return Result.failure(error)

        identity_id = self._next_id
        self._identities[identity_id] = Identity(
            id=identity_id,
            pseudonym=pseudonym,
            public_key=public_key,
            created_at=now,
            status=True,
            metadata=metadata,
            creator=creator,
        )
        self._by_pseudonym[pseudonym] = identity_id
        self._next_id += 1
        return Result.success(identity_id)

    def authorize(self, identity_id: int, caller: str) -> ErrorKind | None:
        """Check that the identity exists and that ``caller`` created it."""
        identity = self._identities.get(identity_id)
        if identity is None:
            return ErrorKind.IDENTITY_NOT_FOUND
        if identity.creator != caller:
            return ErrorKind.NOT_AUTHORIZED
        return None

    def update(
        self, identity_id: int, new_pseudonym: str, new_metadata: str, caller: str
    ) -> Result:
        """
        Rename an identity and replace its metadata in one step.

        Renaming to the identity's current pseudonym is allowed.
        """
        error = self.authorize(identity_id, caller)
        if error is not None:
            return Result.failure(error)
        if not is_valid_pseudonym(new_pseudonym):
            return Result.failure(ErrorKind.INVALID_PSEUDONYM)
        if not is_valid_metadata(new_metadata):
            return Result.failure(ErrorKind.INVALID_METADATA)
        owner = self._by_pseudonym.get(new_pseudonym)
        if owner is not None and owner != identity_id:
            return Result.failure(ErrorKind.IDENTITY_ALREADY_EXISTS)

        identity = self._identities[identity_id]
        updated = replace(identity, pseudonym=new_pseudonym, metadata=new_metadata)
        del self._by_pseudonym[identity.pseudonym]
        self._by_pseudonym[new_pseudonym] = identity_id
        self._identities[identity_id] = updated
        return Result.success(True)

    def deactivate(self, identity_id: int, caller: str) -> Result:
        """Mark an identity inactive. Repeating the call still succeeds."""
        error = self.authorize(identity_id, caller)
        if error is not None:
            return Result.failure(error)
        identity = self._identities[identity_id]
        self._identities[identity_id] = replace(identity, status=False)
        return Result.success(True)

    def get(self, identity_id: int) -> Identity | None:
        return self._identities.get(identity_id)

    def get_by_pseudonym(self, pseudonym: str) -> Identity | None:
        identity_id = self._by_pseudonym.get(pseudonym)
        if identity_id is None:
            return None
        identity = self._identities.get(identity_id)
        if identity is None:
            raise RegistryCorrupted(f"Pseudonym {pseudonym!r} indexes missing id {identity_id}")
        return identity

    def count(self) -> int:
        """Total identities ever registered, deactivated ones included."""
        return self._next_id

    def is_registered(self, pseudonym: str) -> bool:
        return pseudonym in self._by_pseudonym
