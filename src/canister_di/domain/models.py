from typing import TYPE_CHECKING, Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from canister_di.domain.exceptions import CircularDependencyError

if TYPE_CHECKING:
    from canister_di.domain.interfaces import IContainer


class Registration(BaseModel):
    """Value object binding a key to its factory.

    Attributes:
        key: The normalized key.
        factory: Callable that receives the container and returns the value.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str = Field(..., min_length=1, description="The normalized key being bound.")
    factory: Callable[["IContainer"], Any] = Field(
        ..., description="The factory producing the value of the key."
    )


class ResolutionPath(BaseModel):
    """Ordered keys currently being resolved by one thread.

    The last entry is the key whose factory is running. The entry below it is
    the key that requested it, which is how dependency edges are discovered.

    Attributes:
        stack: Keys currently being resolved, outermost first.
    """

    stack: List[str] = Field(
        default_factory=list,
        description="Keys currently being resolved, outermost first.",
    )

    @property
    def top(self) -> Optional[str]:
        """The key being resolved right now, if any."""
        return self.stack[-1] if self.stack else None

    def push(self, key: str, detect_cycles: bool = True) -> None:
        """Add a key to the path.

        Args:
            key: The key about to be resolved.
            detect_cycles: Whether a key already on the path is an error.

        Raises:
            CircularDependencyError: If cycle detection is on and the key is already on the path.
        """
        if detect_cycles and key in self.stack:
            cycle = self.stack[self.stack.index(key) :] + [key]
            raise CircularDependencyError(cycle)
        self.stack.append(key)

    def pop(self) -> Optional[str]:
        """Remove and return the most recent key."""
        if self.stack:
            return self.stack.pop()
        return None

    def clear(self) -> None:
        """Clear the entire path."""
        self.stack.clear()

    def __len__(self) -> int:
        return len(self.stack)
