"""Application layer - Per-thread resolution path tracking."""

import threading
from typing import Optional

from canister_di.domain import ResolutionPath


class ResolutionStack:
    """Tracks the keys being resolved on the current thread.

    Uses thread-local storage so that each thread only ever sees its own
    resolution path. The path empties again once the outermost resolution of
    the thread returns.

    Attributes:
        _local: Thread-local storage for resolution paths.
        _detect_cycles: Whether pushing a key already on the path raises.
    """

    def __init__(self, detect_cycles: bool = True) -> None:
        """Initialize the stack with thread-local storage.

        Args:
            detect_cycles: Whether pushing a key already on the path raises
                CircularDependencyError.
        """
        self._local = threading.local()
        self._detect_cycles = detect_cycles

    def _get_path(self) -> ResolutionPath:
        """Get the current thread's resolution path.

        Returns:
            The resolution path for the current thread.
        """
        if not hasattr(self._local, "path"):
            self._local.path = ResolutionPath()
        return self._local.path

    @property
    def top(self) -> Optional[str]:
        """The key being resolved on this thread right now, if any."""
        return self._get_path().top

    def push(self, key: str) -> Optional[str]:
        """Add a key to this thread's path.

        Args:
            key: The key about to be resolved.

        Returns:
            The key that was on top before the push, i.e. the key requesting
            this one, or None for an outermost resolution.

        Raises:
            CircularDependencyError: If cycle detection is on and the key is
                already on the path.

        Example:
            >>> stack = ResolutionStack()
            >>> stack.push("service")
            >>> stack.push("config")
            'service'
        """
        path = self._get_path()
        caller = path.top
        path.push(key, detect_cycles=self._detect_cycles)
        return caller

    def pop(self) -> Optional[str]:
        """Remove the most recent key from this thread's path."""
        return self._get_path().pop()

    def clear(self) -> None:
        """Clear this thread's path."""
        if hasattr(self._local, "path"):
            self._local.path.clear()

    def __len__(self) -> int:
        return len(self._get_path())
