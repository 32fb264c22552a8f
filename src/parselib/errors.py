"""Error taxonomy for configuration loads and dictionary lookups."""

from __future__ import annotations

from typing import Iterable


class ParseLibError(Exception):
    """Base class for every error raised by parselib."""


class LoadError(ParseLibError):
    """Error raised while reading a configuration source."""

    def __init__(self, message: str, source: str | None = None, line: int | None = None) -> None:
        self.source = source
        self.line = line
        if source is not None and line is not None:
            message = f"{source}:{line}: {message}"
        elif source is not None:
            message = f"{source}: {message}"
        super().__init__(message)


class SourceNotFoundError(LoadError):
    """A configuration path could not be opened."""


class SourceReadError(LoadError):
    """Reading the source failed for a reason other than end of input."""


class MalformedLineError(LoadError):
    """A line held a name with no following value."""


class NumericConversionError(LoadError, ValueError):
    """A token classified as numeric could not be parsed or is out of range."""

    def __init__(self, token: str, kind: str, reason: str, source: str | None = None, line: int | None = None) -> None:
        self.token = token
        self.kind = kind
        super().__init__(f"cannot parse {token!r} as {kind}: {reason}", source=source, line=line)


class EnforcementMismatchError(LoadError):
    """An enforced string value conflicts with the stored one."""

    def __init__(
        self,
        key: str,
        expected: str,
        actual: str,
        source: str | None = None,
        line: int | None = None,
    ) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"enforced value for {key!r} is {expected!r}, got {actual!r}",
            source=source,
            line=line,
        )


class KeyNotFoundError(ParseLibError, KeyError):
    """Lookup miss in a dictionary namespace."""

    def __init__(self, key: str, kind: str) -> None:
        self.key = key
        self.kind = kind
        super().__init__(f"{key!r} not found among {kind} values")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class WrongKindError(KeyNotFoundError):
    """Lookup miss where the key exists under a different kind."""

    def __init__(self, key: str, kind: str, found_kinds: Iterable[str]) -> None:
        self.found_kinds = tuple(found_kinds)
        super().__init__(key, kind)
        self.args = (
            f"{key!r} not found among {kind} values (stored as {', '.join(self.found_kinds)})",
        )


class InvalidValueError(ParseLibError, ValueError):
    """A stored value cannot be interpreted as requested."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"value {value!r} of {key!r} is not a valid {expected}")
