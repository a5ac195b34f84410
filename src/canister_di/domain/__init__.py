"""
Domain layer - Core types of the container.

This layer contains keys, models, interfaces and the error taxonomy.
It has no dependencies on other layers.
"""

from .enums import CyclePolicy
from .exceptions import (
    CanisterError,
    CircularDependencyError,
    InvalidPopError,
    UnregisteredKeyError,
)
from .interfaces import Factory, IContainer, IDependencyGraph, IResolutionCache
from .keys import KeyLike, normalize_key
from .models import Registration, ResolutionPath

# Rebuild Pydantic models to resolve forward references
Registration.model_rebuild()

__all__ = [
    # Enums
    "CyclePolicy",
    # Exceptions
    "CanisterError",
    "CircularDependencyError",
    "InvalidPopError",
    "UnregisteredKeyError",
    # Keys
    "KeyLike",
    "normalize_key",
    # Interfaces
    "Factory",
    "IContainer",
    "IDependencyGraph",
    "IResolutionCache",
    # Models
    "Registration",
    "ResolutionPath",
]
