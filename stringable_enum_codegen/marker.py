"""
Mark the enumerations and methods in a binding model.

The binding model is never executed by the generator, but it is still a valid
Python module. These markers are no-ops so that the model can be imported and
checked by the usual tooling (mypy, pylint *etc.*).
"""

from typing import TypeVar, Callable, Any

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])


def no_display(cls: T) -> T:
    """Mark the enumeration to be generated without display hooks."""
    return cls


def implementation_specific(func: F) -> F:
    """Mark the method as implemented by a snippet of the target."""
    return func
