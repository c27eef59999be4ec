"""
Bundled redaction profiles.

Each profile is a rules document in the rules-file format, so it can be
loaded directly or dumped as a starting point for a custom rules file
(``log-redactor profile us_global > rules.json``).

Available profiles:
    - us_global: US and global patterns (credit cards, SSN, AWS keys, JWT)
"""

from ..loader import load_document
from ..rule import RuleSet
from .us_global import US_GLOBAL

PROFILES = {
    "us_global": US_GLOBAL,
}

DEFAULT_PROFILE = "us_global"


def load_profile(name: str = DEFAULT_PROFILE) -> RuleSet:
    """
    Load a bundled profile as a RuleSet.

    Raises:
        KeyError: No profile with that name exists.
    """
    if name not in PROFILES:
        raise KeyError(f"unknown profile {name!r}, available: {', '.join(sorted(PROFILES))}")
    return load_document(PROFILES[name], f"profile:{name}")


__all__ = ["PROFILES", "DEFAULT_PROFILE", "load_profile"]
