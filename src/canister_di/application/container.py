import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Mapping, Optional

from canister_di.application.context import Context
from canister_di.application.context_stack import ContextStack
from canister_di.domain import (
    CyclePolicy,
    Factory,
    IContainer,
    KeyLike,
    UnregisteredKeyError,
    normalize_key,
)

logger = logging.getLogger(__name__)


class Canister(IContainer):
    """Lazy, memoizing container that tracks dependencies between its keys.

    Factories may be registered in any order. Resolving a key runs its
    factory once and memoizes the result; any key the factory resolves along
    the way is remembered as a dependency. Re-registering a key evicts its
    value and the values of everything that was computed from it.

    ``register`` and ``resolve`` are safe to call from several threads. The
    context stack operations (``push_context``, ``pop_context``,
    ``with_override`` and ``override``) are not and must be serialized by the
    caller.

    Registered keys can also be read as attributes (``container.db``) unless
    the name starts with an underscore or is shadowed by a method such as
    ``keys``; ``resolve`` always works.

    Attributes:
        _contexts: Stack of contexts; the last one receives all calls.

    Example:
        >>> container = Canister()
        >>> container.register("a", lambda c: "a").register("b", lambda c: c.a + "b")
        Canister(keys=['a', 'b'], depth=1)
        >>> container.resolve("b")
        'ab'
        >>> _ = container.register("a", lambda c: "x")
        >>> container["b"]
        'xb'
    """

    def __init__(
        self,
        initializer: Optional[Callable[["Canister"], Any]] = None,
        cycle_policy: CyclePolicy = CyclePolicy.DETECT,
    ) -> None:
        """Initialize the container with an empty base context.

        Args:
            initializer: Optional callable invoked once with the new container,
                typically to register the initial factories.
            cycle_policy: How a key re-entering its own resolution is handled.
        """
        self._contexts = ContextStack(Context(cycle_policy=cycle_policy))
        if initializer is not None:
            initializer(self)

    @property
    def current_context(self) -> Context:
        """The context that register and resolve currently target."""
        return self._contexts.current

    @property
    def depth(self) -> int:
        """Number of contexts on the stack, the base context included."""
        return len(self._contexts)

    def register(self, key: KeyLike, factory: Factory) -> "Canister":
        """Bind a factory to a key.

        If the key was already bound, its memoized value and the memoized
        values of every key that depended on it are evicted first.

        Args:
            key: The key to bind.
            factory: Callable receiving this container and returning the value.

        Returns:
            This container, for chaining.

        Raises:
            TypeError: If the factory is not callable.

        Example:
            >>> container.register("config", lambda c: {"dsn": "sqlite://"}).register(
            ...     "db", lambda c: Database(c.config["dsn"])
            ... )
        """
        if not callable(factory):
            raise TypeError(f"Factory for {key!r} must be callable, got {type(factory).__name__}")
        self.current_context.register(normalize_key(key), factory)
        return self

    def register_all(self, factories: Mapping[KeyLike, Factory]) -> "Canister":
        """Bind every factory of a mapping to its key.

        Args:
            factories: Mapping of keys to factories, registered in iteration order.

        Returns:
            This container, for chaining.

        Example:
            >>> container.register_all({
            ...     "config": lambda c: Config.from_env(),
            ...     "db": lambda c: Database(c.config),
            ... })
        """
        for key, factory in factories.items():
            self.register(key, factory)
        return self

    def resolve(self, key: KeyLike) -> Any:
        """Return the value of a key, computing and memoizing it on first access.

        Args:
            key: The key to resolve.

        Returns:
            The memoized value.

        Raises:
            UnregisteredKeyError: If no factory is bound to the key.
            CircularDependencyError: If the key is already being resolved on
                this thread and the cycle policy is DETECT.
        """
        return self.current_context.resolve(normalize_key(key), self)

    def __getitem__(self, key: KeyLike) -> Any:
        return self.resolve(key)

    def keys(self) -> List[str]:
        """Return the keys bound in the active context, in registration order."""
        return self.current_context.keys()

    def __contains__(self, key: object) -> bool:
        try:
            normalized = normalize_key(key)
        except (TypeError, ValueError):
            return False
        return self.current_context.is_registered(normalized)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal attribute lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.resolve(name)
        except UnregisteredKeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | {key for key in self.keys() if key.isidentifier()})

    def push_context(self, base: Optional[Context] = None) -> "Canister":
        """Make a new context the active one.

        Args:
            base: The context to activate. Defaults to a copy of the active
                context: same bindings, nothing resolved.

        Returns:
            This container, for chaining.
        """
        self._contexts.push(base if base is not None else self.current_context.copy())
        return self

    def pop_context(self) -> "Canister":
        """Discard the active context and reactivate the one below it.

        Returns:
            This container, for chaining.

        Raises:
            InvalidPopError: If only the base context remains.
        """
        self._contexts.pop()
        return self

    @contextmanager
    def override(self) -> Iterator["Canister"]:
        """Run a block against a derived context, reverting afterwards.

        Registrations made inside the block do not touch the outer context,
        neither its bindings nor its memoized values.

        Example:
            >>> with container.override() as c:
            ...     c.register("db", lambda c: FakeDatabase())
            ...     run_checks(c.resolve("service"))
            >>> container.resolve("service")  # original bindings again
        """
        self.push_context()
        try:
            yield self
        finally:
            self.pop_context()

    def with_override(self, work: Callable[["Canister"], Any]) -> "Canister":
        """Call ``work`` with this container inside a derived context.

        Args:
            work: Callable receiving this container.

        Returns:
            This container, for chaining.
        """
        with self.override():
            work(self)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={self.keys()!r}, depth={self.depth})"
