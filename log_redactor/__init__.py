"""
log-redactor - rule-based redaction of sensitive data in log messages

This package redacts credentials, PII and account numbers from free-text
log messages before they are persisted, using an ordered, reloadable set of
regex rules declared in a JSON rules file.

Architecture:
    - loader: parses and validates a rules document into an immutable RuleSet
    - RedactionEngine: applies a bound RuleSet to text, with atomic reload
    - RedactingFilter: logging.Filter adapter for the standard logging module
    - profiles/: bundled rule documents (us_global)

Example:
    from log_redactor import RedactionEngine

    engine = RedactionEngine.from_file("redaction-rules.json")
    safe_text = engine.redact("login user=alice failed")
    # safe_text: "login user=REDACTED failed"
"""

__version__ = "1.0.0"

from .engine import RedactionEngine
from .errors import (
    EngineNotConfiguredError,
    ParseError,
    PatternError,
    RuleSetError,
    SchemaError,
    SourceError,
)
from .loader import load_document, load_file, load_text
from .logging_filter import RedactingFilter
from .profiles import load_profile
from .rule import Rule, RuleSet

__all__ = [
    "RedactionEngine",
    "RedactingFilter",
    "Rule",
    "RuleSet",
    "load_file",
    "load_text",
    "load_document",
    "load_profile",
    "RuleSetError",
    "SourceError",
    "ParseError",
    "SchemaError",
    "PatternError",
    "EngineNotConfiguredError",
]
