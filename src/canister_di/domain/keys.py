from enum import Enum
from typing import Union

KeyLike = Union[str, Enum]


def normalize_key(key: KeyLike) -> str:
    """Normalize a key to its canonical textual form.

    A string is used as is. An Enum member stands for its string value, or its
    name when the value is not a string, so ``"db"`` and ``Services.db`` denote
    the same key.

    Args:
        key: The key as given by the caller.

    Returns:
        The normalized key.

    Raises:
        TypeError: If the key is neither a string nor an Enum member.
        ValueError: If the key is empty.

    Example:
        >>> class Services(Enum):
        ...     db = "db"
        >>> normalize_key(Services.db) == normalize_key("db")
        True
    """
    if isinstance(key, Enum):
        key = key.value if isinstance(key.value, str) else key.name
    if not isinstance(key, str):
        raise TypeError(f"Key must be a str or Enum member, got {type(key).__name__}")
    if not key:
        raise ValueError("Key must not be empty")
    return str(key)
