"""
Registry records - Immutable values held by the stores.

Records are frozen; every mutation replaces the stored record wholesale,
so readers never observe a half-applied change.
"""

from dataclasses import dataclass

# Field limits shared by the stores
MAX_PSEUDONYM_LENGTH = 50
MAX_PUBLIC_KEY_LENGTH = 256
MAX_METADATA_LENGTH = 200
MAX_ATTRIBUTE_KEY_LENGTH = 50
MAX_RECOVERY_KEY_LENGTH = 256

DEFAULT_MAX_IDENTITIES = 10000
DEFAULT_CREATION_FEE = 500
BURN_PRINCIPAL = "SP000000000000000000002Q6VF78"


@dataclass(frozen=True)
class Identity:
    """
    One registered entity.

    ``status`` is True while active; deactivation is one-way.
    """

    id: int
    pseudonym: str
    public_key: str
    created_at: int
    status: bool
    metadata: str
    creator: str


@dataclass(frozen=True)
class Attribute:
    """A named fact attached to an identity (last write wins)."""

    value: str
    updated_at: int


@dataclass(frozen=True)
class RecoveryKey:
    recovery_key: str


@dataclass(frozen=True)
class RegistryConfig:
    """Snapshot of the policy held by the authority gate."""

    authority: str | None
    max_identities: int
    creation_fee: int
