"""Attribute store - Per-identity key/value facts, last write wins."""

from .identities import IdentityStore
from .ports import ErrorKind, Result
from .records import MAX_ATTRIBUTE_KEY_LENGTH, Attribute


class AttributeStore:
    """
    Attributes keyed by the (identity id, attribute key) pair.

    Entries are never deleted, only overwritten.
    """

    def __init__(self, identities: IdentityStore) -> None:
        self._identities = identities
        self._attributes: dict[tuple[int, str], Attribute] = {}

    def check(self, identity_id: int, key: str, caller: str) -> ErrorKind | None:
        error = self._identities.authorize(identity_id, caller)
        if error is not None:
            return error
        if not 0 < len(key) <= MAX_ATTRIBUTE_KEY_LENGTH:
            return ErrorKind.INVALID_ATTRIBUTE
        return None

    def set(self, identity_id: int, key: str, value: str, caller: str, now: int) -> Result:
        error = self.check(identity_id, key, caller)
        if error is not None:
            return Result.failure(error)
        self._attributes[(identity_id, key)] = Attribute(value=value, updated_at=now)
        return Result.success(True)

    def get(self, identity_id: int, key: str) -> Attribute | None:
        return self._attributes.get((identity_id, key))
