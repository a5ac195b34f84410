"""
Infrastructure layer - External integrations.

This layer contains integrations with external frameworks and tools.
It depends on both Application and Domain layers.

The FastAPI adapters need the optional ``fastapi`` extra and are imported
explicitly from ``canister_di.infrastructure.fastapi_integration``.
"""

from . import testing

__all__ = [
    "testing",
]
