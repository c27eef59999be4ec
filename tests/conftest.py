"""
Pytest configuration and shared fixtures for log-redactor tests.

Rule files are written to pytest's tmp_path so every test gets its own,
isolated configuration.
"""

import json
import os
import sys

import pytest

# Add parent directory to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def clear_rules_env(monkeypatch):
    """
    Make sure LOG_REDACTOR_RULES from the developer's shell or a .env file
    never leaks into a test.
    """
    monkeypatch.delenv("LOG_REDACTOR_RULES", raising=False)
    monkeypatch.setattr("log_redactor.logging_filter.load_dotenv", lambda: False)
    yield


@pytest.fixture
def write_rules(tmp_path):
    """Return a helper that writes a rules document and returns its path."""

    def _write(rules, name="rules.json", **extra):
        document = {"rules": rules, **extra}
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_rules():
    """A small, realistic rule list."""
    return [
        {
            "description": "Passwords in key=value form",
            "caseSensitive": False,
            "trigger": "password",
            "search": r"password=\S+",
            "replace": "password=XXXXXXXX",
        },
        {
            "description": "User names",
            "trigger": "user=",
            "search": r"user=(\w+)",
            "replace": "user=REDACTED",
        },
        {
            "description": "Credit card digits, keep the last four",
            "search": r"\b\d{4}-\d{4}-\d{4}-(\d{4})\b",
            "replace": "XXXX-XXXX-XXXX-$1",
        },
    ]


@pytest.fixture
def rules_file(write_rules, sample_rules):
    """Path to a rules file holding sample_rules."""
    return write_rules(sample_rules)
