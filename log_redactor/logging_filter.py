"""
RedactingFilter - plugs a RedactionEngine into the standard logging module.

Attach it to a handler (or a logger) and every record's formatted message
is passed through the engine. Records that need no redaction pass through
untouched; records that do are replaced by a copy carrying the redacted
text, so the caller's LogRecord is never mutated.

Example:
    handler = logging.StreamHandler()
    handler.addFilter(RedactingFilter("/etc/myapp/redaction-rules.json"))

    # or with dictConfig
    "filters": {
        "redact": {
            "()": "log_redactor.RedactingFilter",
            "rules_file": "/etc/myapp/redaction-rules.json",
        }
    }

When no rules file is passed, the path is read from the LOG_REDACTOR_RULES
environment variable (a .env file is honoured).
"""

import copy
import logging
import os
from typing import Optional, Union

from dotenv import load_dotenv

from .engine import RedactionEngine
from .errors import RuleSetError
from .rule import RuleSet

logger = logging.getLogger(__name__)

RULES_ENV_VAR = "LOG_REDACTOR_RULES"


def rules_file_from_env() -> Optional[str]:
    """Return the rules file configured in the environment, if any."""
    load_dotenv()
    return os.getenv(RULES_ENV_VAR) or None


class RedactingFilter(logging.Filter):
    """
    Logging filter that redacts record messages with a RedactionEngine.

    A broken or missing rules file raises ValueError at construction, so a
    misconfigured logging setup fails at startup instead of silently
    logging unredacted messages.
    """

    def __init__(
        self,
        rules_file: Union[None, str, os.PathLike] = None,
        *,
        engine: Optional[RedactionEngine] = None,
    ):
        """
        Initialize the filter.

        Args:
            rules_file: Path to the JSON rules file. Defaults to the value of
                        LOG_REDACTOR_RULES.
            engine: A ready engine to use instead of loading a rules file.

        Raises:
            ValueError: No rules file is configured, or it failed to load.
        """
        super().__init__()
        if engine is None:
            if rules_file is None:
                rules_file = rules_file_from_env()
            if rules_file is None:
                raise ValueError(
                    f"Problem with rules file: none given and {RULES_ENV_VAR} is not set"
                )
            try:
                engine = RedactionEngine.from_file(rules_file)
            except RuleSetError as e:
                raise ValueError(f"Problem with rules file {os.fspath(rules_file)}: {e}") from e
            logger.info(f"Loaded {len(engine.rules)} redaction rules from {os.fspath(rules_file)}")
        self.engine = engine

    def filter(self, record: logging.LogRecord) -> Union[bool, logging.LogRecord]:
        """
        Redact the record's message.

        Returns:
            True when the message needs no redaction (the record is kept as
            is), otherwise a copy of the record with the redacted message.
        """
        try:
            original = record.getMessage()
        except Exception:
            # Broken msg or args; the handler reports it when formatting
            return True

        redacted = self.engine.redact(original)
        if redacted == original:
            return True

        rewritten = copy.copy(record)
        rewritten.msg = redacted
        rewritten.args = None
        if hasattr(rewritten, "message"):
            rewritten.message = redacted
        return rewritten

    def reload(self, source: Union[None, str, os.PathLike, RuleSet] = None) -> RuleSet:
        """
        Reload the engine's rules; see RedactionEngine.reload().

        A failed reload keeps the previous rules in effect and re-raises.
        """
        try:
            rules = self.engine.reload(source)
        except RuleSetError as e:
            logger.error(f"Redaction rules reload failed, keeping previous rules: {e}")
            raise
        logger.info(f"Reloaded {len(rules)} redaction rules from {rules.source}")
        return rules
