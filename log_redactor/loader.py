"""
RuleSet loader - builds a validated RuleSet from a JSON rules document.

Document format:
    {
      "version": 1,
      "rules": [
        {
          "description": "Password values",
          "caseSensitive": false,
          "trigger": "password",
          "search": "password=\\\\S+",
          "replace": "password=XXXXXX"
        }
      ]
    }

The document shape is checked with jsonschema, one rule at a time so that
errors name the offending rule index. Validation fails fast on the first
problem and never drops a rule: either every rule loads or a RuleSetError
is raised.
"""

import json
import os
import re
from typing import Any, Union

from jsonschema import Draft202012Validator, ValidationError

from .errors import ParseError, PatternError, SchemaError, SourceError
from .rule import Rule, RuleSet

SUPPORTED_VERSION = 1

RULES_SCHEMA = {
    "type": "object",
    "properties": {
        "version": {"const": SUPPORTED_VERSION},
        "rules": {"type": "array"},
    },
    "required": ["rules"],
}

RULE_SCHEMA = {
    "type": "object",
    "properties": {
        "description": {"type": "string"},
        "caseSensitive": {"type": "boolean"},
        "trigger": {"type": "string"},
        "search": {"type": "string"},
        "replace": {"type": "string"},
    },
    "required": ["search", "replace"],
}

_RULES_VALIDATOR = Draft202012Validator(RULES_SCHEMA)
_RULE_VALIDATOR = Draft202012Validator(RULE_SCHEMA)

# A group whose body ends in an unbounded quantifier and that is itself
# repeated without bound, e.g. (a+)+ or (?:\w*)*
_NESTED_QUANTIFIER = re.compile(
    r"\((?:\?:)?(?:[^()\\]|\\.)*(?:[+*]|\{\d+,\})\)(?:[+*]|\{\d+,\})"
)


def load_file(path: Union[str, os.PathLike], *, reject_nested_quantifiers: bool = True) -> RuleSet:
    """
    Load a RuleSet from a JSON rules file.

    Args:
        path: Path to the rules file.
        reject_nested_quantifiers: Refuse patterns prone to catastrophic
                                   backtracking. Defaults to True.

    Raises:
        SourceError: The file cannot be read.
        ParseError, SchemaError, PatternError: See load_text().
    """
    source = os.fspath(path)
    try:
        with open(source, encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"cannot read rules file: {e}", source=source) from e
    return load_text(text, source=source, reject_nested_quantifiers=reject_nested_quantifiers)


def load_text(text: str, source: str = "<string>", *, reject_nested_quantifiers: bool = True) -> RuleSet:
    """Load a RuleSet from the JSON text of a rules document."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})", source=source
        ) from e
    return load_document(document, source, reject_nested_quantifiers=reject_nested_quantifiers)



def load_document(document: Any, source: str, *, reject_nested_quantifiers: bool = True) -> RuleSet:
    """
    Validate an already parsed rules document and compile its rules.

    Args:
        document: The decoded JSON value (expected to be an object).
        source: Identifier used in error messages and kept on the RuleSet.
        reject_nested_quantifiers: See load_file().

    Returns:
        A RuleSet with the rules in declared order.
    """
    try:
        _RULES_VALIDATOR.validate(document)
    except ValidationError as e:
        raise SchemaError(_describe(e), source=source) from e

    rules = []
    for index, entry in enumerate(document["rules"]):
        try:
            _RULE_VALIDATOR.validate(entry)
        except ValidationError as e:
            raise SchemaError(_describe(e), source=source, index=index) from e
        rules.append(_build_rule(entry, index, source, reject_nested_quantifiers))
    return RuleSet(rules=tuple(rules), source=source)


def _build_rule(entry: dict, index: int, source: str, reject_nested_quantifiers: bool) -> Rule:
    search = entry["search"]
    if reject_nested_quantifiers and _NESTED_QUANTIFIER.search(search):
        raise PatternError(
            f"search pattern {search!r} nests unbounded quantifiers "
            "and may backtrack catastrophically",
            source=source,
            index=index,
        )

    try:
        rule = Rule(
            search=search,
            replace=entry["replace"],
            description=entry.get("description", ""),
            trigger=entry.get("trigger"),
            case_sensitive=entry.get("caseSensitive", True),
        )
    except re.error as e:
        raise PatternError(
            f"invalid search pattern {search!r}: {e}", source=source, index=index
        ) from e
    except ValueError as e:
        raise PatternError(
            f"invalid replacement {entry['replace']!r}: {e}", source=source, index=index
        ) from e

    if rule.pattern.search("") is not None:
        raise PatternError(
            f"search pattern {search!r} matches the empty string", source=source, index=index
        )
    return rule


def _describe(error: ValidationError) -> str:
    """Render a jsonschema error, prefixed with the field it concerns."""
    if error.path:
        field = ".".join(str(part) for part in error.path)
        return f"field '{field}': {error.message}"
    return error.message
