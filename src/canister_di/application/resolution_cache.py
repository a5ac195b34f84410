from typing import Any, Callable, Dict, Iterator

from canister_di.domain import IResolutionCache


class ResolutionCache(IResolutionCache):
    """Memoizes the value of each key after its first resolution.

    Presence is tracked by membership rather than truthiness, so ``None`` and
    other falsy values are memoized like any other result.

    Attributes:
        _values: Cached values by normalized key.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._values: Dict[str, Any] = {}

    def get_or_create(self, key: str, factory: Callable[[], Any]) -> Any:
        """Get the cached value or create and cache a new one.

        Exceptions raised by ``factory`` propagate unchanged and nothing is
        cached, so the next call runs the factory again.

        Args:
            key: The normalized key.
            factory: Function producing the value on a cache miss.

        Returns:
            The memoized value of the key.

        Example:
            >>> cache = ResolutionCache()
            >>> cache.get_or_create("answer", lambda: 42)
            42
            >>> cache.get_or_create("answer", lambda: 0)
            42
        """
        if key not in self._values:
            self._values[key] = factory()
        return self._values[key]

    def evict(self, key: str) -> bool:
        """Remove the cached value of a key.

        Args:
            key: The normalized key.

        Returns:
            True if a value was cached for the key.
        """
        if key in self._values:
            del self._values[key]
            return True
        return False

    def clear(self) -> None:
        """Remove every cached value."""
        self._values.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))
