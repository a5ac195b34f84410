import logging
from typing import List

from canister_di.application.context import Context
from canister_di.domain import InvalidPopError

logger = logging.getLogger(__name__)


class ContextStack:
    """Ordered stack of contexts; the last one is active.

    The base context can never be popped. Pushing and popping are not
    synchronized, callers sharing a stack across threads must serialize them.

    Attributes:
        _contexts: Contexts from the base upwards.
    """

    def __init__(self, base: Context) -> None:
        self._contexts: List[Context] = [base]

    @property
    def current(self) -> Context:
        """The active context."""
        return self._contexts[-1]

    def push(self, context: Context) -> None:
        """Make a context the active one."""
        self._contexts.append(context)
        logger.debug("Pushed context (depth=%d)", len(self._contexts))

    def pop(self) -> Context:
        """Remove the active context and return it.

        Raises:
            InvalidPopError: If only the base context remains.
        """
        if len(self._contexts) == 1:
            raise InvalidPopError()
        context = self._contexts.pop()
        logger.debug("Popped context (depth=%d)", len(self._contexts))
        return context

    def __len__(self) -> int:
        return len(self._contexts)
