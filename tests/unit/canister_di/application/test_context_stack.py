"""Unit tests for ContextStack."""

import pytest

from canister_di.application.context import Context
from canister_di.application.context_stack import ContextStack
from canister_di.domain import InvalidPopError


class TestContextStack:
    """Test cases for ContextStack."""

    def test_base_context_is_current(self):
        """Test that the base context is active initially."""
        base = Context()
        stack = ContextStack(base)

        assert stack.current is base
        assert len(stack) == 1

    def test_push_activates_context(self):
        """Test that a pushed context becomes active."""
        stack = ContextStack(Context())
        pushed = Context()

        stack.push(pushed)

        assert stack.current is pushed
        assert len(stack) == 2

    def test_pop_restores_previous_context(self):
        """Test that popping reactivates the enclosing context."""
        base = Context()
        stack = ContextStack(base)
        pushed = Context()
        stack.push(pushed)

        assert stack.pop() is pushed
        assert stack.current is base

    def test_pop_base_context_raises(self):
        """Test that the base context cannot be popped."""
        base = Context()
        stack = ContextStack(base)

        with pytest.raises(InvalidPopError):
            stack.pop()

        assert stack.current is base

    def test_nested_push_and_pop(self):
        """Test that contexts are popped in reverse push order."""
        base, first, second = Context(), Context(), Context()
        stack = ContextStack(base)
        stack.push(first)
        stack.push(second)

        assert stack.pop() is second
        assert stack.pop() is first
        with pytest.raises(InvalidPopError):
            stack.pop()
