import logging
import threading
from typing import Any, Dict, List, Optional, Set

from canister_di.application.dependency_graph import DependencyGraph
from canister_di.application.resolution_cache import ResolutionCache
from canister_di.application.resolution_stack import ResolutionStack
from canister_di.domain import (
    CyclePolicy,
    Factory,
    IContainer,
    Registration,
    UnregisteredKeyError,
)

logger = logging.getLogger(__name__)


class Context:
    """One layer of registrations with its own cache and dependency graph.

    A context owns a registry, a memoization cache, the dependency graph
    discovered while resolving, and a per-thread resolution stack. A single
    reentrant lock guards all of them: a thread already holding it (a factory
    resolving its own dependencies) proceeds directly, other threads wait.
    The lock is held while a factory runs, so a factory that never returns
    blocks every other caller of this context.

    Keys handed to a context are expected to be normalized already.

    Attributes:
        _registry: Registrations by key.
        _cache: Memoized values.
        _graph: Dependents by key, built during resolution.
        _stack: Keys being resolved, per thread.
        _lock: Reentrant lock guarding all of the above.
        _cycle_policy: How a key re-entering its own resolution is handled.
    """

    def __init__(
        self,
        registry: Optional[Dict[str, Registration]] = None,
        cycle_policy: CyclePolicy = CyclePolicy.DETECT,
    ) -> None:
        """Initialize the context.

        Args:
            registry: Optional registrations to start from. The mapping is copied.
            cycle_policy: How a key re-entering its own resolution is handled.
        """
        self._registry: Dict[str, Registration] = dict(registry or {})
        self._cache = ResolutionCache()
        self._graph = DependencyGraph()
        self._stack = ResolutionStack(detect_cycles=cycle_policy == CyclePolicy.DETECT)
        self._lock = threading.RLock()
        self._cycle_policy = cycle_policy

    @property
    def cycle_policy(self) -> CyclePolicy:
        """How a key re-entering its own resolution is handled."""
        return self._cycle_policy

    def register(self, key: str, factory: Factory) -> None:
        """Bind a factory to a key.

        An existing binding is invalidated before it is replaced, so nothing
        computed by the old factory, or computed from its value, survives.

        Args:
            key: The normalized key.
            factory: Callable receiving the container and returning the value.
        """
        registration = Registration(key=key, factory=factory)
        with self._lock:
            replaced = key in self._registry
            if replaced:
                self._invalidate(key)
            self._registry[key] = registration
        logger.debug("Registered %r (replaced=%s)", key, replaced)

    def resolve(self, key: str, container: IContainer) -> Any:
        """Return the value of a key, computing and memoizing it on first access.

        If another key is being resolved on this thread, that key is recorded
        as a dependent of ``key``.

        Args:
            key: The normalized key.
            container: The container handed to the factory.

        Returns:
            The memoized value.

        Raises:
            UnregisteredKeyError: If no factory is bound to the key.
            CircularDependencyError: If cycle detection is on and the key is
                already being resolved on this thread.
        """
        with self._lock:
            registration = self._registry.get(key)
            if registration is None:
                raise UnregisteredKeyError(key)

            caller = self._stack.push(key)
            try:
                if caller is not None:
                    self._graph.add_dependent(key, caller)
                return self._cache.get_or_create(key, lambda: self._invoke(registration, container))
            finally:
                self._stack.pop()

    def _invoke(self, registration: Registration, container: IContainer) -> Any:
        logger.debug("Invoking factory for %r", registration.key)
        return registration.factory(container)

    def _invalidate(self, key: str, visited: Optional[Set[str]] = None) -> None:
        """Evict a key and, transitively, everything that resolved it.

        Edges left over from earlier factories can close a loop in the graph,
        so each key is visited once. Only the top-level call forgets the key's
        dependents: the replacement factory may depend on entirely different keys.
        """
        top_level = visited is None
        if visited is None:
            visited = set()
        visited.add(key)
        if self._cache.evict(key):
            logger.debug("Invalidated %r", key)
        for dependent in self._graph.dependents_of(key):
            if dependent not in visited:
                self._invalidate(dependent, visited)
        if top_level:
            self._graph.discard(key)

    def is_registered(self, key: str) -> bool:
        """Whether a factory is bound to a key."""
        with self._lock:
            return key in self._registry

    def is_resolved(self, key: str) -> bool:
        """Whether a memoized value is currently cached for a key."""
        with self._lock:
            return key in self._cache

    def keys(self) -> List[str]:
        """Return the bound keys in registration order."""
        with self._lock:
            return list(self._registry)

    def copy(self) -> "Context":
        """Derive a context with the same bindings and nothing resolved.

        The registry is duplicated; cache, dependency graph and resolution
        stack start empty.

        Returns:
            A new, independent context.
        """
        with self._lock:
            return Context(registry=self._registry, cycle_policy=self._cycle_policy)
