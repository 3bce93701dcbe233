"""Exception hierarchy for depenforcer."""


class EnforcerError(Exception):
    """Base class for all errors raised by depenforcer."""

    pass


class ConfigurationError(EnforcerError):
    """Rule parameters are malformed or reference unknown projects.

    Raised before the reactor is scanned; the evaluation is aborted.
    """

    pass


class ReactorError(EnforcerError):
    """The build could not be read into an ordered reactor.

    Raised when a POM is unreadable, a module cannot be located, or the
    modules form a dependency cycle.
    """

    pass


class RuleViolation(EnforcerError):
    """The current module is missing dependencies on included projects."""

    def __init__(self, message: str, missing=None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


__all__ = [
    "EnforcerError",
    "ConfigurationError",
    "ReactorError",
    "RuleViolation",
]
