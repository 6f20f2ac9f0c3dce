import unittest

from src.tapegrad.domain.utils._control_path import MethodKey, create_path_builder


class TestCreatePathBuilder(unittest.TestCase):
    def setUp(self) -> None:
        # Fresh builder per test to avoid map-sharing across tests.
        self.decorator = create_path_builder("backend")

    def test_state_must_be_hashable(self) -> None:
        class C:
            backend = "A"

            def foo(self, x: int) -> int:
                return x

        with self.assertRaises(TypeError) as ctx:
            # list is unhashable
            self.decorator(C, C.foo, ["not-hashable"])(lambda self, x: x)

        self.assertIn("must be hashable", str(ctx.exception))

    def test_dispatch_selects_registered_control_path(self) -> None:
        class C:
            def __init__(self, backend):
                self.backend = backend

            def foo(self, x: int) -> int:
                # base implementation never used once wrapper installed
                return -999

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 10

        @self.decorator(C, C.foo, "B")
        def foo_B(self, x: int) -> int:
            return x + 20

        self.assertEqual(C("A").foo(1), 11)
        self.assertEqual(C("B").foo(1), 21)

    def test_control_path_receives_self(self) -> None:
        class C:
            backend = "A"

            def __init__(self, offset):
                self.offset = offset

            def foo(self, x: int) -> int:
                return -999

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + self.offset

        self.assertEqual(C(5).foo(1), 6)

    def test_dispatch_supports_none_state(self) -> None:
        class C:
            backend = None

            def foo(self, x: int) -> int:
                return -999

        @self.decorator(C, C.foo, None)
        def foo_none(self, x: int) -> int:
            return x * 2

        self.assertEqual(C().foo(3), 6)

    def test_dispatch_reads_property_state(self) -> None:
        class C:
            def __init__(self, st):
                self.__st = st

            @property
            def backend(self):
                return self.__st

            def foo(self) -> str:
                return "base"

        @self.decorator(C, C.foo, "numpy")
        def foo_numpy(self) -> str:
            return "numpy"

        self.assertEqual(C("numpy").foo(), "numpy")

    def test_missing_state_attribute_raises_not_implemented(self) -> None:
        class C:
            # No `backend` attribute on purpose
            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(NotImplementedError) as ctx:
            C().foo(1)

        self.assertIn("missing attribute", str(ctx.exception))
        self.assertIn("'backend'", str(ctx.exception))

    def test_missing_control_path_without_trap_exception_raises_not_implemented(
        self,
    ) -> None:
        class C:
            def __init__(self, backend):
                self.backend = backend

            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(NotImplementedError) as ctx:
            C("B").foo(1)  # no registered path

        self.assertIn("Missing control path", str(ctx.exception))
        self.assertIn("backend='B'", str(ctx.exception))

    def test_trap_exception_as_exception_class_raises_that_exception(self) -> None:
        class MissingPathError(Exception):
            pass

        class C:
            def __init__(self, backend):
                self.backend = backend

            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A", trap_exception=MissingPathError)
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(MissingPathError) as ctx:
            C("B").foo(1)
        self.assertIn("foo", str(ctx.exception))

    def test_trap_exception_callable_is_called_then_not_implemented(self) -> None:
        calls = []

        def trap(method, state):
            calls.append((method.__name__, state))

        class C:
            def __init__(self, backend):
                self.backend = backend

            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A", trap_exception=trap)
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(NotImplementedError):
            C("B").foo(123)

        self.assertEqual(calls, [("foo", "B")])

    def test_wrapper_preserves_original_method_metadata(self) -> None:
        class C:
            backend = "A"

            def foo(self, x: int) -> int:
                """Original foo docstring."""
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        self.assertEqual(C.foo.__name__, "foo")
        self.assertEqual(C.foo.__doc__, "Original foo docstring.")

    def test_reregistration_does_not_nest_wrappers(self) -> None:
        class C:
            def __init__(self, backend):
                self.backend = backend

            def foo(self) -> int:
                return -999

        original = C.foo

        @self.decorator(C, C.foo, "A")
        def foo_A(self) -> int:
            return 1

        @self.decorator(C, C.foo, "B")
        def foo_B(self) -> int:
            return 2

        self.assertIs(C.foo.__control_path_base__, original)
        self.assertEqual(C("A").foo(), 1)
        self.assertEqual(C("B").foo(), 2)

    def test_registration_returns_undecorated_function(self) -> None:
        class C:
            backend = "A"

            def foo(self) -> int:
                return 0

        def foo_A(self) -> int:
            return 7

        self.assertIs(self.decorator(C, C.foo, "A")(foo_A), foo_A)

    def test_two_builders_do_not_share_control_paths(self) -> None:
        deco1 = create_path_builder("backend")
        deco2 = create_path_builder("backend")

        class C:
            def __init__(self, backend):
                self.backend = backend

            def foo(self, x: int) -> int:
                return -999

        @deco1(C, C.foo, "A")
        def foo_A_1(self, x: int) -> int:
            return 111

        # Now overwrite wrapper with deco2 installation
        @deco2(C, C.foo, "B")
        def foo_B_2(self, x: int) -> int:
            return 222

        # After deco2 installation, the class wrapper consults deco2's map.
        with self.assertRaises(NotImplementedError):
            C("A").foo(0)

        self.assertEqual(C("B").foo(0), 222)

    def test_method_key_fields(self) -> None:
        key = MethodKey("Tensor", "sum", "numpy")
        self.assertEqual(key.ClassName, "Tensor")
        self.assertEqual(key.MethodName, "sum")
        self.assertEqual(key.StateVal, "numpy")


if __name__ == "__main__":
    unittest.main()
