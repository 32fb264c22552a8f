"""Thread-safe typed dictionary populated by configuration loads.

The store keeps three independent namespaces (int, float and string values).
A key is unique within a namespace, but the same key may exist in several
namespaces at once. Every public operation takes the store's lock for its
duration; sequences such as check-then-add are not atomic unless wrapped in
:meth:`ConfigStore.transaction`.
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator
import threading

from .classifier import ValueKind
from .errors import InvalidValueError, KeyNotFoundError, WrongKindError

_MISSING: Any = object()


class DuplicatePolicy(str, Enum):
    """What happens when a key is added twice to the same namespace."""

    LAST_WINS = "last_wins"
    FIRST_WINS = "first_wins"


def _kind_of(value: Any) -> ValueKind:
    # bool is an int subclass but has no namespace of its own.
    if isinstance(value, bool):
        raise TypeError("boolean values must be stored as the strings 'true' or 'false'")
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def _notional_buckets(size: int) -> int:
    buckets = 8
    while buckets * 2 < size * 3:
        buckets *= 2
    return buckets


class ConfigStore:
    """Typed key/value store with int, float and string namespaces."""

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS) -> None:
        self._lock = threading.RLock()
        self._maps: dict[ValueKind, dict[str, Any]] = {kind: {} for kind in ValueKind}
        self._enforced: set[str] = set()
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self.source: str | None = None

    def add(self, key: str, value: int | float | str) -> bool:
        """Insert ``value`` into the namespace matching its type."""

        kind = _kind_of(value)
        with self._lock:
            namespace = self._maps[kind]
            if self.duplicate_policy is DuplicatePolicy.FIRST_WINS and key in namespace:
                return True
            namespace[key] = value
        return True

    def get(self, key: str, kind: ValueKind | str, default: Any = _MISSING) -> Any:
        """Return the value stored for ``key`` under ``kind``.

        Without a ``default`` a miss raises :class:`KeyNotFoundError`, or
        :class:`WrongKindError` when the key lives under another kind.
        """

        kind = ValueKind(kind)
        with self._lock:
            namespace = self._maps[kind]
            if key in namespace:
                return namespace[key]
            if default is not _MISSING:
                return default
            others = [other.value for other in ValueKind if other is not kind and key in self._maps[other]]
        if others:
            raise WrongKindError(key, kind.value, others)
        raise KeyNotFoundError(key, kind.value)

    def get_int(self, key: str, default: Any = _MISSING) -> int:
        return self.get(key, ValueKind.INT, default)

    def get_float(self, key: str, default: Any = _MISSING) -> float:
        return self.get(key, ValueKind.FLOAT, default)

    def get_string(self, key: str, default: Any = _MISSING) -> str:
        return self.get(key, ValueKind.STRING, default)

    def get_bool(self, key: str) -> bool:
        """Interpret a string value as a boolean (``true``/``false``, any case)."""

        value = self.get(key, ValueKind.STRING)
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise InvalidValueError(key, value, "boolean")

    def check(self, key: str, kind: ValueKind | str) -> bool:
        """Return True if ``key`` exists under ``kind``."""

        kind = ValueKind(kind)
        with self._lock:
            return key in self._maps[kind]

    def check_int(self, key: str) -> bool:
        return self.check(key, ValueKind.INT)

    def check_float(self, key: str) -> bool:
        return self.check(key, ValueKind.FLOAT)

    def check_string(self, key: str) -> bool:
        return self.check(key, ValueKind.STRING)

    def mark_enforced(self, key: str) -> None:
        with self._lock:
            self._enforced.add(key)

    def is_enforced(self, key: str) -> bool:
        with self._lock:
            return key in self._enforced

    def keys(self, kind: ValueKind | str) -> list[str]:
        kind = ValueKind(kind)
        with self._lock:
            return list(self._maps[kind])

    def items(self, kind: ValueKind | str) -> list[tuple[str, Any]]:
        kind = ValueKind(kind)
        with self._lock:
            return list(self._maps[kind].items())

    def __len__(self) -> int:
        with self._lock:
            return sum(len(namespace) for namespace in self._maps.values())

    def copy(self) -> "ConfigStore":
        """Return an independent store holding the same entries."""

        with self._lock:
            clone = ConfigStore(self.duplicate_policy)
            for kind, namespace in self._maps.items():
                clone._maps[kind] = dict(namespace)
            clone._enforced = set(self._enforced)
            clone.source = self.source
        return clone

    @contextmanager
    def transaction(self) -> Iterator["ConfigStore"]:
        """Hold the lock across several operations."""

        with self._lock:
            yield self

    def dump(self) -> str:
        """Return a diagnostic listing of every namespace."""

        titles = {ValueKind.INT: "Integer", ValueKind.FLOAT: "Float", ValueKind.STRING: "String"}
        lines = ["Dictionary Dump", ""]
        with self._lock:
            if self.source:
                lines.append(f"Source: {self.source}")
                lines.append("")
            for kind in ValueKind:
                namespace = self._maps[kind]
                buckets = _notional_buckets(len(namespace))
                lines.append(f"+->{titles[kind]} Database")
                lines.append(f"+--->Size: {len(namespace)}")
                lines.append(f"+---># of Buckets: {buckets}")
                lines.append(f"+--->Load Factor: {len(namespace) / buckets:.6f}")
                lines.append("+--->Entries:")
                for key, value in namespace.items():
                    lines.append(f"          {key}: {value}")
                lines.append("")
        return "\n".join(lines)
