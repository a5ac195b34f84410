from typing import Any, Mapping, Optional

from canister_di.application import Canister
from canister_di.domain import KeyLike


def _constant(value: Any):
    return lambda container: value


class OverrideScope:
    """Context manager replacing bindings for the duration of a test.

    Pushes a context derived from the container's active one, registers each
    override as a constant factory, and pops the context on exit. Values the
    outer context already memoized are untouched and are served again once the
    scope ends.

    Like every context stack operation this is not thread-safe.

    Example:
        >>> container = Canister()
        >>> container.register_all({
        ...     "mailer": lambda c: SmtpMailer(),
        ...     "signup": lambda c: SignupService(c.mailer),
        ... })
        >>>
        >>> with OverrideScope(container, {"mailer": FakeMailer()}) as scoped:
        ...     scoped.signup.register("someone@example.com")
        ...     assert scoped.mailer.sent
    """

    def __init__(self, container: Canister, overrides: Optional[Mapping[KeyLike, Any]] = None) -> None:
        """Initialize the override scope.

        Args:
            container: The container whose bindings are overridden.
            overrides: Mapping of keys to the values they resolve to inside the scope.
        """
        self._container = container
        self._overrides = dict(overrides or {})
        self._active = False

    def __enter__(self) -> Canister:
        """Push a derived context and install the overrides.

        Returns:
            The container, now targeting the derived context.
        """
        self._container.push_context()
        self._active = True
        try:
            for key, value in self._overrides.items():
                self._container.register(key, _constant(value))
        except Exception:
            self.__exit__(None, None, None)
            raise
        return self._container

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Pop the derived context, restoring the previous bindings."""
        if self._active:
            self._container.pop_context()
            self._active = False
        return False


def create_mock_canister(**values: Any) -> Canister:
    """Create a container with constant bindings.

    Args:
        **values: Keys and the values they resolve to.

    Returns:
        A new container.

    Example:
        >>> container = create_mock_canister(db=FakeDatabase(), clock=FrozenClock())
        >>> service = ReportService(container.db, container.clock)
    """
    container = Canister()
    for key, value in values.items():
        container.register(key, _constant(value))
    return container
