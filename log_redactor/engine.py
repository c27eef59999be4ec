"""
RedactionEngine - applies a RuleSet to log message text.

The engine holds a reference to one immutable RuleSet. redact() reads that
reference once and runs every rule in order against it, so a call in flight
always sees a single consistent RuleSet even while reload() swaps in a new
one. The hot path takes no locks; only reloads are serialized.

Thread-safe for redact() and reload().
"""

import os
import threading
from typing import Optional, Union

from .errors import EngineNotConfiguredError
from .loader import load_file, load_text
from .profiles import load_profile
from .rule import RuleSet


class RedactionEngine:
    """
    Engine for redacting sensitive data from text with an ordered RuleSet.

    Example:
        engine = RedactionEngine.from_file("/etc/myapp/redaction-rules.json")

        engine.redact("login user=alice failed")
        # "login user=REDACTED failed" with a rule search="user=(\\w+)"

        # Pick up edits to the rules file
        engine.reload()

    An engine built without a RuleSet is unconfigured: redact() raises
    EngineNotConfiguredError until reload() binds one.
    """

    def __init__(self, rules: Optional[RuleSet] = None, *, load_options: Optional[dict] = None):
        """
        Initialize the RedactionEngine.

        Args:
            rules: The RuleSet to bind. None leaves the engine unconfigured.
            load_options: Loader keyword arguments (e.g.
                          reject_nested_quantifiers) reused by reload().
        """
        self._rules = rules
        self._load_options = dict(load_options or {})
        self._reload_lock = threading.Lock()

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike], **options) -> "RedactionEngine":
        """Build an engine from a rules file; configuration errors propagate."""
        return cls(load_file(path, **options), load_options=options)

    @classmethod
    def from_text(cls, text: str, source: str = "<string>", **options) -> "RedactionEngine":
        """Build an engine from the JSON text of a rules document."""
        return cls(load_text(text, source, **options), load_options=options)

    @classmethod
    def from_profile(cls, name: str) -> "RedactionEngine":
        """Build an engine from one of the bundled profiles (e.g. 'us_global')."""
        return cls(load_profile(name))

    @property
    def rules(self) -> Optional[RuleSet]:
        """The currently bound RuleSet, or None when unconfigured."""
        return self._rules

    @property
    def is_configured(self) -> bool:
        return self._rules is not None

    def reload(self, source: Union[None, str, os.PathLike, RuleSet] = None, **options) -> RuleSet:
        """
        Replace the bound RuleSet.

        Args:
            source: A rules file path or a ready RuleSet. When omitted, the
                    file the current RuleSet was loaded from is read again.
            **options: Passed to load_file() when reading a path. Defaults to
                       the options the engine was built with.

        Returns:
            The newly bound RuleSet.

        Raises:
            RuleSetError: The new rules failed to load. The previous RuleSet
                          stays bound.
            ValueError: No source given and there is no file to re-read.
        """
        with self._reload_lock:
            if isinstance(source, RuleSet):
                rules = source
            else:
                if source is None:
                    if self._rules is None or not os.path.isfile(self._rules.source):
                        raise ValueError("no rules file to reload from")
                    source = self._rules.source
                rules = load_file(source, **(options or self._load_options))
            self._rules = rules
            return rules

    def redact(self, text: str) -> str:
        """
        Redact sensitive data from the given text.

        Every rule runs in order, each one on the output of the previous.

        Args:
            text: The input text to sanitize.

        Returns:
            The redacted text. When no rule changed anything, the very same
            object that was passed in.

        Raises:
            EngineNotConfiguredError: No RuleSet is bound.
        """
        rules = self._rules
        if rules is None:
            raise EngineNotConfiguredError("redaction engine has no rules loaded")

        for rule in rules.rules:
            text = rule.apply(text)
        return text

    def redact_batch(self, texts: list[str]) -> tuple[list[str], bool]:
        """
        Redact sensitive data from multiple texts.

        Args:
            texts: List of input texts to sanitize.

        Returns:
            A tuple of (redacted_texts, any_redacted):
            - redacted_texts: List of sanitized texts
            - any_redacted: True if ANY text had redaction
        """
        results = []
        any_redacted = False

        for text in texts:
            redacted_text = self.redact(text)
            results.append(redacted_text)
            if redacted_text != text:
                any_redacted = True

        return results, any_redacted

    def __repr__(self) -> str:
        return f"<RedactionEngine: {self._rules!r}>"
