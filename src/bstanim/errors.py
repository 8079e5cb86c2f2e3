"""Error classes for the animation engine and its exporters."""


class AnimationError(Exception):
    """Base class for animation-related errors."""

    pass


class InvariantViolationError(AnimationError):
    """Raised when an internal state machine invariant is broken.

    These are logic bugs (stack underflow, a frame pointing at a removed node),
    never user-facing conditions.
    """

    pass


class UnknownOperationError(AnimationError):
    """Raised when an operation name has no registered animator."""

    pass


class ConfigError(AnimationError):
    """Raised when configuration data is invalid or malformed."""

    pass


class ScriptError(AnimationError):
    """Raised when an event script cannot be parsed."""

    pass


class RenderError(AnimationError):
    """Raised when an export process fails."""

    pass


class DependencyNotFoundError(RenderError):
    """Raised when a required dependency or system binary is not found."""

    pass
