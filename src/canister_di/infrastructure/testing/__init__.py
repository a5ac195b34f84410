"""
Testing utilities module.

Provides helpers for overriding container bindings in test suites.
"""

from .utilities import OverrideScope, create_mock_canister

__all__ = [
    "OverrideScope",
    "create_mock_canister",
]
