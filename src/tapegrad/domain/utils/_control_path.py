"""
State-based method dispatch (a.k.a. "control-path" templating) via decorators.

This module provides a small mechanism for routing a single method call to
one of several registered implementations based on an attribute of the
receiving object.

Core idea
---------
- A *base* method is declared on a class; its name, signature and docstring
  become the public ones.
- Implementations ("control paths") are registered for that method, each
  keyed by ``(ClassName, MethodName, StateVal)``.
- At call time the installed wrapper reads the state attribute of ``self``
  and calls the implementation registered for that value, passing ``self``
  through like an ordinary bound method.

In tapegrad this selects:
- the numeric backend of a `Tensor` (state attribute ``backend``), and
- the interpolation kernel of an upscale method tag (state attribute
  ``name``).

Notes
-----
- The first registration for a method replaces ``cls.<method>`` with the
  dispatcher; later registrations only extend the mapping.
- Each builder owns its own mapping. Different builders never share control
  paths.
"""

from collections import namedtuple
from functools import wraps
from typing import Any, Callable, Dict, Hashable, Optional, Type, Union

from typing_extensions import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

MethodKey = namedtuple("MethodKey", ["ClassName", "MethodName", "StateVal"])
"""Key uniquely identifying a control path."""


def create_path_builder(state_attr: str) -> Callable[..., Callable]:
    """
    Create a "path builder" that dispatches on ``getattr(self, state_attr)``.

    Usage
    -----
        backend_path = create_path_builder("backend")

        class Thing:
            backend = "numpy"
            def op(self, x): ...

        @backend_path(Thing, Thing.op, "numpy")
        def op_numpy(self, x): ...

    Parameters
    ----------
    state_attr : str
        Name of the attribute (or property) read from ``self`` at call time.

    Returns
    -------
    Callable
        A function ``(cls, method, state, trap_exception=None) -> decorator``.
    """
    methods_map: Dict[MethodKey, Callable] = {}

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
        trap_exception: Optional[Union[Type[Exception], Callable[..., Any]]] = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator that registers a control path implementation.

        Parameters
        ----------
        cls : Type
            Class on which the dispatcher is installed.
        method : Callable
            The base method being templated.
        state : Hashable
            State value selecting the decorated implementation.
        trap_exception : optional
            Exception type raised (instead of `NotImplementedError`) when no
            control path matches. If it is a plain callable that is not an
            exception type, it is invoked as ``trap_exception(method, state)``
            and `NotImplementedError` is raised afterwards.

        Raises
        ------
        TypeError
            If `state` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(f"The argument for 'state' must be hashable. Got {state!r}")

        method_name = method.__name__
        key = MethodKey(cls.__name__, method_name, state)

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            methods_map[key] = sub_method

            # Unwrap so that re-registration never wraps a wrapper.
            base = getattr(method, "__control_path_base__", method)

            @wraps(base)
            def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                try:
                    cur = getattr(self, state_attr)
                except AttributeError:
                    raise NotImplementedError(
                        "{} is missing attribute {}".format(type(self), repr(state_attr))
                    )
                if sm := methods_map.get(MethodKey(cls.__name__, method_name, cur)):
                    return sm(self, *args, **kwargs)
                if isinstance(trap_exception, type) and issubclass(
                    trap_exception, Exception
                ):
                    raise trap_exception(
                        "Missing control path ({}={!r}) for {}".format(
                            state_attr, cur, method_name
                        )
                    )
                if callable(trap_exception):
                    trap_exception(base, cur)
                raise NotImplementedError(
                    "Missing control path ({}={!r}) for {}".format(
                        state_attr, cur, method_name
                    )
                )

            wrapper.__control_path_base__ = base  # type: ignore[attr-defined]
            setattr(cls, method_name, wrapper)
            return sub_method

        return decorator

    return templator
