"""Exception types raised by the capacity engine.

Calculations degrade rather than raise wherever a sensible neutral answer
exists (no schedule means no capacity, an empty span means zero hours).
These exceptions are reserved for constructors and strict parsers.
"""


class CapacityEngineError(Exception):
    """Base class for every error the engine raises on purpose."""


class InvalidRangeError(CapacityEngineError, ValueError):
    """A date or time range whose start falls after its end."""

    def __init__(self, start, end, context=""):
        self.start = start
        self.end = end
        self.context = context
        ctx = f" ({context})" if context else ""
        super().__init__(f"Invalid range{ctx}: start {start!r} is after end {end!r}")


class MissingConfigurationError(CapacityEngineError, ValueError):
    """Schedule or holiday configuration that cannot be interpreted."""
