"""
FastAPI integration module.

Provides adapters for resolving container keys inside FastAPI endpoints.
"""

from .integration import create_fastapi_dependency, inject_dependencies

__all__ = [
    "create_fastapi_dependency",
    "inject_dependencies",
]
