from typing import Dict, FrozenSet, Set

from canister_di.domain import IDependencyGraph


class DependencyGraph(IDependencyGraph):
    """Records which keys resolved which other keys.

    Edges point from a dependency to its dependents: after ``c`` resolved ``b``,
    ``dependents_of("b")`` contains ``"c"``. The graph is only consulted for
    invalidation, so it stores sets and keeps no ordering.

    Attributes:
        _dependents: Dependent keys by dependency key.
    """

    def __init__(self) -> None:
        self._dependents: Dict[str, Set[str]] = {}

    def add_dependent(self, key: str, dependent: str) -> None:
        """Record that ``dependent`` resolved ``key``.

        Args:
            key: The key that was resolved.
            dependent: The key whose factory requested it.
        """
        self._dependents.setdefault(key, set()).add(dependent)

    def dependents_of(self, key: str) -> FrozenSet[str]:
        """Return a snapshot of the dependents recorded under a key."""
        return frozenset(self._dependents.get(key, ()))

    def discard(self, key: str) -> None:
        """Forget every dependent recorded under a key."""
        self._dependents.pop(key, None)

    def clear(self) -> None:
        """Forget every edge."""
        self._dependents.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._dependents

    def __len__(self) -> int:
        return len(self._dependents)
