from abc import ABC, abstractmethod
from typing import Any, Callable, FrozenSet, List, Mapping

from canister_di.domain.keys import KeyLike

Factory = Callable[["IContainer"], Any]


class IContainer(ABC):
    """Abstract interface for container operations."""

    @abstractmethod
    def register(self, key: KeyLike, factory: Factory) -> "IContainer":
        """Bind a factory to a key, invalidating any previous binding.

        Args:
            key: The key to bind.
            factory: Callable receiving the container and returning the value.
        """

    @abstractmethod
    def register_all(self, factories: Mapping[KeyLike, Factory]) -> "IContainer":
        """Bind every factory of a mapping to its key.

        Args:
            factories: A mapping of keys to factories.
        """

    @abstractmethod
    def resolve(self, key: KeyLike) -> Any:
        """Return the memoized value of a key, computing it on first access.

        Args:
            key: The key to resolve.
        """

    @abstractmethod
    def keys(self) -> List[str]:
        """Return the keys bound in the active context."""


class IResolutionCache(ABC):
    """Abstract interface for the memoization cache."""

    @abstractmethod
    def get_or_create(self, key: str, factory: Callable[[], Any]) -> Any:
        """Return the cached value of a key or create and cache it.

        Args:
            key: The normalized key.
            factory: A callable producing the value on a cache miss.
        """

    @abstractmethod
    def evict(self, key: str) -> bool:
        """Remove a cached value. Returns whether one was present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every cached value."""


class IDependencyGraph(ABC):
    """Abstract interface for the key -> dependents graph."""

    @abstractmethod
    def add_dependent(self, key: str, dependent: str) -> None:
        """Record that ``dependent`` resolved ``key`` while computing itself."""

    @abstractmethod
    def dependents_of(self, key: str) -> FrozenSet[str]:
        """Return the keys recorded as dependents of ``key``."""

    @abstractmethod
    def discard(self, key: str) -> None:
        """Forget every dependent recorded under ``key``."""
