"""
Rule and RuleSet - the immutable in-memory form of a rules file.

A Rule is one redaction directive:
    - description: free text, used for diagnostics only
    - trigger: optional plain substring; the pattern is skipped when absent
    - search: a Python regular expression
    - replace: a replacement template using $n / ${name} group references
    - case_sensitive: when False, both the pattern and the trigger ignore case

A RuleSet is the ordered tuple of rules plus the source it was loaded from.
Both are frozen and safe to share between threads.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Pattern

_DIGITS = "0123456789"


def translate_template(template: str, pattern: Pattern[str]) -> str:
    """
    Translate a $-style replacement template into re.sub template syntax.

    Syntax accepted (as written in rules files):
        $n       group n; $0 is the whole match. Extra digits are taken only
                 while they still name an existing group, so "$12" with a
                 single group is group 1 followed by a literal "2".
        ${name}  named group
        \\x      literal x

    Args:
        template: The replacement text from the rules file.
        pattern: The compiled search pattern the template refers to.

    Returns:
        An equivalent template for pattern.sub(), where every literal
        backslash is escaped and every group reference is written \\g<...>.

    Raises:
        ValueError: If the template references a group the pattern does not
                    define, or a $ or \\ is left dangling.
    """
    out = []
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        if ch == "\\":
            i += 1
            if i == n:
                raise ValueError("character to be escaped is missing")
            out.append("\\\\" if template[i] == "\\" else template[i])
            i += 1
        elif ch == "$":
            i += 1
            if i == n:
                raise ValueError("illegal group reference: group index is missing")
            if template[i] == "{":
                end = template.find("}", i)
                if end == -1:
                    raise ValueError("named capturing group is missing trailing '}'")
                name = template[i + 1:end]
                if not name:
                    raise ValueError("named capturing group has 0 length name")
                if name not in pattern.groupindex:
                    raise ValueError(f"no group with name {{{name}}}")
                out.append(f"\\g<{name}>")
                i = end + 1
            elif template[i] in _DIGITS:
                ref = int(template[i])
                i += 1
                while i < n and template[i] in _DIGITS:
                    candidate = ref * 10 + int(template[i])
                    if candidate > pattern.groups:
                        break
                    ref = candidate
                    i += 1
                if ref > pattern.groups:
                    raise ValueError(f"no group {ref}")
                out.append(f"\\g<{ref}>")
            else:
                raise ValueError(f"illegal group reference at position {i - 1}")
        else:
            out.append(ch)
            i += 1
    return "".join(out)


@dataclass(frozen=True)
class Rule:
    """
    A single redaction rule.

    The search pattern is compiled and the replacement translated when the
    rule is constructed, so a Rule that exists is always applicable.

    Raises (from the constructor):
        re.error: If search is not a valid regular expression.
        ValueError: If replace is not a valid template for search.
    """
    search: str
    replace: str
    description: str = ""
    trigger: Optional[str] = None
    case_sensitive: bool = True
    pattern: Pattern[str] = field(init=False, repr=False, compare=False)
    template: str = field(init=False, repr=False, compare=False)
    _folded_trigger: Optional[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        flags = 0 if self.case_sensitive else re.IGNORECASE
        pattern = re.compile(self.search, flags)
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "template", translate_template(self.replace, pattern))
        folded = None
        if self.trigger is not None and not self.case_sensitive:
            folded = self.trigger.casefold()
        object.__setattr__(self, "_folded_trigger", folded)

    def triggered(self, text: str) -> bool:
        """Return True if the pattern needs to run against text."""
        if self.trigger is None:
            return True
        if self.case_sensitive:
            return self.trigger in text
        return self._folded_trigger in text.casefold()

    def apply(self, text: str) -> str:
        """
        Replace every non-overlapping match of the pattern in one pass.

        Returns the very same string object when nothing matched.
        """
        if not self.triggered(text):
            return text
        redacted, count = self.pattern.subn(self.template, text)
        return redacted if count else text


@dataclass(frozen=True)
class RuleSet:
    """An ordered, immutable collection of rules and where they came from."""
    rules: tuple[Rule, ...] = ()
    source: str = "<empty>"

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __repr__(self) -> str:
        return f"<RuleSet: {len(self.rules)} rules from {self.source}>"
