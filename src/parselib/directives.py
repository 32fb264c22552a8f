"""Reserved key names that change control flow instead of storing a value."""

from __future__ import annotations

from enum import Enum


class Directive(str, Enum):
    """Recognized directive keywords."""

    INCLUDE = "include"
    ENFORCE = "enforce"
    WARNING = "warning"
    BREAK = "break"


# Only the all-lower and all-upper spellings are reserved.
_KEYWORDS: dict[str, Directive] = {}
for _directive in Directive:
    _KEYWORDS[_directive.value] = _directive
    _KEYWORDS[_directive.value.upper()] = _directive


def match_directive(name: str) -> Directive | None:
    """Return the directive named by ``name``, or None for a plain key."""

    return _KEYWORDS.get(name)


def is_break(name: str) -> bool:
    return _KEYWORDS.get(name) is Directive.BREAK
