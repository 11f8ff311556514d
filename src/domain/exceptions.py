"""
Domain exceptions - Semantic error types for the identity registry.

Expected validation failures are returned as values (see ports.Result).
Exceptions are reserved for callers that opt in via Result.unwrap()
and for states the registry should never reach.
"""


class RegistryError(Exception):
    """Base class for registry domain errors."""

    pass


class OperationFailed(RegistryError):
    """A registry operation returned a failure result."""

    def __init__(self, kind) -> None:
        self.kind = kind
        super().__init__(getattr(kind, "value", kind))


class RegistryCorrupted(RegistryError):
    """Internal tables disagree with each other (unreachable by design of the stores)."""

    pass
