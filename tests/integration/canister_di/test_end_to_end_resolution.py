"""Integration tests for resolution and invalidation across the whole container."""

from collections import Counter

import pytest

from canister_di import Canister, UnregisteredKeyError


@pytest.fixture
def container():
    return Canister()


def counting(calls, key, factory):
    """Wrap a factory so that its invocations are counted under ``key``."""

    def wrapper(c):
        calls[key] += 1
        return factory(c)

    return wrapper


class TestConstruction:
    """Test cases for building containers."""

    def test_new_takes_an_initializer(self):
        """Test that the initializer performs the initial registrations."""
        container = Canister(lambda c: c.register("foo", lambda c: "bar"))
        assert container.resolve("foo") == "bar"


class TestNesting:
    """Test cases for factories resolving other keys."""

    def test_allows_nesting(self, container):
        """Test a simple chain of dependent factories."""
        container.register("a", lambda c: "a")
        container.register("b", lambda c: c.a + "b")
        container.register("c", lambda c: c.b + "c")

        assert container.resolve("c") == "abc"

    def test_ignores_declaration_order(self, container):
        """Test that factories may be registered before their dependencies."""
        container.register("c", lambda c: c.b + "c")
        container.register("b", lambda c: c.a + "b")
        container.register("a", lambda c: "a")

        assert container.resolve("c") == "abc"

    def test_order_gives_same_result(self):
        """Test that reversed and dependency order registration agree."""
        forward = Canister().register("a", lambda c: "a").register("b", lambda c: c.a + "b")
        backward = Canister().register("b", lambda c: c.a + "b").register("a", lambda c: "a")

        assert forward.resolve("b") == backward.resolve("b")

    def test_diamond_dependency(self, container):
        """Test a diamond: the shared dependency is computed once."""
        calls = Counter()
        container.register("a", counting(calls, "a", lambda c: "a"))
        container.register("b1", counting(calls, "b1", lambda c: c.a + "b1"))
        container.register("b2", counting(calls, "b2", lambda c: c.a + "b2"))
        container.register("c", counting(calls, "c", lambda c: c.b1 + c.b2 + "c"))

        assert container.resolve("c") == "ab1ab2c"
        assert calls == Counter({"a": 1, "b1": 1, "b2": 1, "c": 1})

    def test_missing_dependency_surfaces_to_caller(self, container):
        """Test that a factory's unbound dependency fails the outer resolution."""
        container.register("b", lambda c: c.resolve("a") + "b")

        with pytest.raises(UnregisteredKeyError) as exc_info:
            container.resolve("b")

        assert exc_info.value.key == "a"

    def test_late_registration_of_missing_dependency(self, container):
        """Test that registering a missing dependency makes resolution succeed."""
        container.register("b", lambda c: c.resolve("a") + "b")
        with pytest.raises(UnregisteredKeyError):
            container.resolve("b")

        container.register("a", lambda c: "a")

        assert container.resolve("b") == "ab"


class TestInvalidation:
    """Test cases for invalidation on re-registration."""

    def test_reregister_invalidates_chain(self, container):
        """Test that re-registering the root of a chain recomputes the chain."""
        container.register("a", lambda c: "a")
        container.register("b", lambda c: c.a + "b")
        container.register("c", lambda c: c.b + "c")
        assert container.resolve("c") == "abc"

        container.register("a", lambda c: "x")

        assert container.resolve("c") == "xbc"

    def test_reregister_resets_long_sequence(self, container):
        """Test that a six-deep chain is recomputed from the new root."""
        container.register("a", lambda c: "a")
        container.register("b", lambda c: c.a + "b")
        container.register("c", lambda c: c.b + "c")
        container.register("d", lambda c: c.c + "d")
        container.register("e", lambda c: c.d + "e")
        container.register("f", lambda c: c.e + "f")
        assert container.resolve("f") == "abcdef"

        container.register("a", lambda c: "x")

        assert container.resolve("f") == "xbcdef"

    def test_reregister_resets_tree(self, container):
        """Test that a diamond is recomputed through both branches."""
        container.register("a", lambda c: "a")
        container.register("b1", lambda c: c.a + "b1")
        container.register("b2", lambda c: c.a + "b2")
        container.register("c", lambda c: c.b1 + c.b2 + "c")
        container.resolve("c")

        container.register("a", lambda c: "x")

        assert container.resolve("c") == "xb1xb2c"

    def test_reregister_middle_of_chain(self, container):
        """Test that re-registering an inner key keeps its own dependencies cached."""
        calls = Counter()
        container.register("a", counting(calls, "a", lambda c: "a"))
        container.register("b", counting(calls, "b", lambda c: c.a + "b"))
        container.register("c", counting(calls, "c", lambda c: c.b + "c"))
        container.resolve("c")

        container.register("b", counting(calls, "b", lambda c: c.a + "B"))

        assert container.resolve("c") == "aBc"
        assert calls == Counter({"a": 1, "b": 2, "c": 2})

    def test_reregister_after_dependency_direction_flips(self, container):
        """Test that re-registration succeeds after a dependency changes direction."""
        container.register("a", lambda c: c.b + "a")
        container.register("b", lambda c: "b")
        assert container.resolve("a") == "ba"

        container.register("a", lambda c: "a")
        container.register("b", lambda c: c.a + "b")
        assert container.resolve("b") == "ab"

        assert container.register("a", lambda c: "x") is container
        assert container.resolve("b") == "xb"

    def test_repeated_reregistration(self, container):
        """Test that invalidation keeps working after several rebinds."""
        container.register("a", lambda c: "a")
        container.register("b", lambda c: c.a + "b")

        for value in ["x", "y", "z"]:
            container.register("a", lambda c, value=value: value)
            assert container.resolve("b") == value + "b"

    def test_unrelated_values_stay_memoized(self, container):
        """Test that re-registration leaves unrelated values cached."""
        calls = Counter()
        container.register("a", lambda c: "a")
        container.register("b", lambda c: c.a + "b")
        container.register("other", counting(calls, "other", lambda c: object()))
        first = container.resolve("other")
        container.resolve("b")

        container.register("a", lambda c: "x")

        assert container.resolve("other") is first
        assert calls["other"] == 1


class TestMemoization:
    """Test cases for memoization semantics."""

    def test_memoizes_the_value(self, container):
        """Test that repeated resolution returns the identical object."""
        calls = Counter()
        container.register("foo", counting(calls, "foo", lambda c: object()))

        assert container.resolve("foo") is container.resolve("foo")
        assert calls["foo"] == 1

    def test_memoizes_none(self, container):
        """Test that None is memoized rather than recomputed."""
        calls = Counter()
        container.register("nothing", counting(calls, "nothing", lambda c: None))

        container.resolve("nothing")
        container.resolve("nothing")

        assert calls["nothing"] == 1

    def test_keys_ignore_resolution_state(self, container):
        """Test that keys() lists exactly the bound keys."""
        container.register("foo", lambda c: "bar")
        container.register("alice", lambda c: "bob")
        assert set(container.keys()) == {"foo", "alice"}

        container.resolve("foo")
        container.register("foo", lambda c: "baz")

        assert set(container.keys()) == {"foo", "alice"}
