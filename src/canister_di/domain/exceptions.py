from typing import List


class CanisterError(Exception):
    """Base exception for container errors."""


class UnregisteredKeyError(CanisterError, LookupError):
    """Raised when a key with no bound factory is resolved.

    Attributes:
        key: The normalized key that was requested.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No factory registered for key: {key!r}")


class InvalidPopError(CanisterError):
    """Raised when popping the context stack would remove the base context."""

    def __init__(self, message: str = "Cannot pop the base context") -> None:
        super().__init__(message)


class CircularDependencyError(CanisterError):
    """Raised when a key is requested while it is already being resolved.

    Attributes:
        dependency_chain: Keys involved in the cycle, first and last being the same key.
    """

    def __init__(self, dependency_chain: List[str]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(dependency_chain)}"
        super().__init__(message)
