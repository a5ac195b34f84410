"""
Application layer - The resolution engine.

This layer contains the cache, dependency graph, resolution stack, contexts
and the container built from them. It depends only on the Domain layer.
"""

from .container import Canister
from .context import Context
from .context_stack import ContextStack
from .dependency_graph import DependencyGraph
from .resolution_cache import ResolutionCache
from .resolution_stack import ResolutionStack

__all__ = [
    "Canister",
    "Context",
    "ContextStack",
    "DependencyGraph",
    "ResolutionCache",
    "ResolutionStack",
]
