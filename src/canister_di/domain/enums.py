from enum import Enum


class CyclePolicy(str, Enum):
    """Defines how a container reacts to a key re-entering its own resolution.

    Attributes:
        DETECT: Raise CircularDependencyError as soon as a key is requested while
            it is already on the resolving thread's path.
        UNGUARDED: Perform no check. A cycle recurses until the interpreter
            raises RecursionError.
    """

    DETECT = "detect"
    UNGUARDED = "unguarded"

    def __str__(self) -> str:
        return self.value
