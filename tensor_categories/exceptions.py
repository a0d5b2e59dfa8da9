"""
Exceptions raised by the tensor category engines.

Everything derives from CategoryError so callers can catch the whole family.
Conditions that are expected during exploration (an optional braiding that
does not exist over the chosen field, a solver that finds more solutions than
it can express) are not exceptions; they are reported through return values
and log records instead.
"""


class CategoryError(Exception):
    """Base class for all errors raised by tensor_categories."""

    pass


class ParentMismatchError(CategoryError):
    """Raised when a binary operation receives objects of different categories."""

    pass


class NotRigidError(CategoryError):
    """Raised when a simple object has no unique dual."""

    pass


class NotSemisimpleError(CategoryError):
    """Raised when an operation needs semisimplicity the category lacks."""

    pass


class DecompositionError(CategoryError):
    """Raised when an object cannot be split into simple summands."""

    pass


class FieldError(CategoryError):
    """Raised when an element does not lie in the requested base field."""

    pass


class WitnessSetError(CategoryError):
    """Raised when no generic linear slice is found within the retry bound."""

    pass


def check_parents(*items) -> None:
    """Raise ParentMismatchError unless all items share one parent category."""
    parents = [item.parent for item in items]
    first = parents[0]
    for other in parents[1:]:
        if other is not first:
            raise ParentMismatchError(
                f"Mismatching parents: {first!r} and {other!r}"
            )
