"""Recovery key store - At most one recovery key per identity."""

from .identities import IdentityStore
from .ports import ErrorKind, Result
from .records import MAX_RECOVERY_KEY_LENGTH, RecoveryKey


class RecoveryKeyStore:
    def __init__(self, identities: IdentityStore) -> None:
        self._identities = identities
        self._keys: dict[int, RecoveryKey] = {}

    def set(self, identity_id: int, recovery_key: str, caller: str) -> Result:
        """Set or overwrite the recovery key of an identity owned by ``caller``."""
        error = self._identities.authorize(identity_id, caller)
        if error is not None:
            return Result.failure(error)
        if not 0 < len(recovery_key) <= MAX_RECOVERY_KEY_LENGTH:
            return Result.failure(ErrorKind.INVALID_RECOVERY_KEY)
        self._keys[identity_id] = RecoveryKey(recovery_key=recovery_key)
        return Result.success(True)

    def get(self, identity_id: int) -> RecoveryKey | None:
        return self._keys.get(identity_id)
