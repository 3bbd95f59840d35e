__all__ = [
    "BuilderError",
    "DescriptorError",
    "UnknownFieldError",
    "ArityError",
    "DoubleSetError",
    "StateError",
]


class BuilderError(Exception):
    """Base class for all errors raised by fluentbuilder."""

    pass


class DescriptorError(BuilderError):
    """Raised when a target type cannot be described: no matching constructor,
    no capability interface, or a malformed capability interface."""

    pass


class UnknownFieldError(BuilderError, AttributeError):
    """Raised when a builder operation does not correspond to a declared field."""

    pass


class ArityError(BuilderError, TypeError):
    """Raised when a setter is called with other than exactly one argument."""

    pass


class DoubleSetError(BuilderError):
    """Raised when a field is explicitly set more than once in the same session."""

    pass


class StateError(BuilderError):
    """Raised when an operation is invoked on a session that has already been built."""

    pass
