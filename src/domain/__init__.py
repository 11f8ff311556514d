"""
Domain layer - Pure business logic with zero framework imports.

This package contains the state-transition logic of the identity registry:
the authority gate, the identity, attribute and recovery-key stores, and
the registry service that orchestrates them. It defines its own port
interfaces for the ledger and clock collaborators, ensuring true hexagonal
architecture decoupling.
"""

from .attributes import AttributeStore
from .authority import AuthorityGate
from .exceptions import OperationFailed, RegistryCorrupted, RegistryError
from .identities import IdentityStore
from .ports import Clock, ErrorKind, Ledger, Result
from .records import Attribute, Identity, RecoveryKey, RegistryConfig
from .recovery import RecoveryKeyStore
from .registry import RegistryService

__all__ = [
    "Attribute",
    "AttributeStore",
    "AuthorityGate",
    "Clock",
    "ErrorKind",
    "Identity",
    "IdentityStore",
    "Ledger",
    "OperationFailed",
    "RecoveryKey",
    "RecoveryKeyStore",
    "RegistryConfig",
    "RegistryCorrupted",
    "RegistryError",
    "RegistryService",
    "Result",
]
