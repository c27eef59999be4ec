"""
Configuration errors raised while building a RuleSet.

Every error carries the source it came from (file path, "<string>" or
"profile:<name>"), the offending rule index when the problem is specific to
one rule, and a human-readable message. The underlying exception (OSError,
JSONDecodeError, re.error) is chained as ``__cause__``.
"""

from typing import Optional


class RuleSetError(Exception):
    """Base class for everything that prevents a RuleSet from loading."""

    kind = "config"

    def __init__(self, message: str, *, source: str, index: Optional[int] = None):
        self.message = message
        self.source = source
        self.index = index
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.index is None:
            return f"{self.source}: {self.message}"
        return f"{self.source}: rule {self.index}: {self.message}"


class SourceError(RuleSetError):
    """The rules file could not be read."""

    kind = "source"


class ParseError(RuleSetError):
    """The rules document is not well-formed JSON."""

    kind = "parse"


class SchemaError(RuleSetError):
    """Well-formed document with missing or wrongly typed fields."""

    kind = "schema"


class PatternError(RuleSetError):
    """A rule's search pattern or replacement template is invalid."""

    kind = "pattern"


class EngineNotConfiguredError(RuntimeError):
    """redact() was called on an engine with no RuleSet bound."""
