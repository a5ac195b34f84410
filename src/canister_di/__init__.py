"""
canister-di: Lazy, memoizing container with automatic dependency invalidation.

Public API exports for the canister-di package.
"""

# Application exports
from canister_di.application.container import Canister
from canister_di.application.context import Context

# Domain exports
from canister_di.domain.enums import CyclePolicy
from canister_di.domain.exceptions import (
    CanisterError,
    CircularDependencyError,
    InvalidPopError,
    UnregisteredKeyError,
)
from canister_di.domain.keys import normalize_key

__version__ = "0.1.0"

__all__ = [
    # Container
    "Canister",
    "Context",
    # Enums
    "CyclePolicy",
    # Exceptions
    "CanisterError",
    "CircularDependencyError",
    "InvalidPopError",
    "UnregisteredKeyError",
    # Keys
    "normalize_key",
]
