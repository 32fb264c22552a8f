"""Line-oriented configuration reader.

Each line holds a name token and a value token separated by blanks. Names that
match a directive (``include``, ``enforce``, ``warning``, ``BREAK``) change the
control flow; any other name is stored in the dictionary under the kind the
classifier infers from the value text. Included files are read recursively
into the same store before the including file continues with its next line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator, TextIO

import logging
import os

from .classifier import ValueKind, classify, convert
from .config import ReaderSettings
from .directives import Directive, is_break, match_directive
from .errors import (
    EnforcementMismatchError,
    MalformedLineError,
    ParseLibError,
    SourceNotFoundError,
    SourceReadError,
)
from .store import ConfigStore
from .tokenizer import at_terminator, read_token, rest_of_line, skip_blank, tokens

STREAM_SOURCE = "<stream>"


@dataclass
class LoadEvent:
    """Structured diagnostic emitted while reading a source."""

    level: int
    event: str
    source: str
    line: int | None = None
    detail: str = ""
    context: dict[str, Any] = field(default_factory=dict)


EventCallback = Callable[[LoadEvent], None]


@dataclass
class LoadResult:
    """Outcome of a configuration load."""

    store: ConfigStore
    error: ParseLibError | None = None
    events: list[LoadEvent] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def warnings(self) -> list[str]:
        return [event.detail for event in self.events if event.event == "config_warning"]

    def unwrap(self) -> ConfigStore:
        """Return the store, or raise the error that aborted the load."""

        if self.error is not None:
            raise self.error
        return self.store


@dataclass
class _ReadState:
    store: ConfigStore
    # Real paths of the files currently being read.
    active: set[str] = field(default_factory=set)
    events: list[LoadEvent] = field(default_factory=list)


def _iter_lines(stream: TextIO, source: str) -> Iterator[tuple[int, str]]:
    number = 0
    while True:
        try:
            raw = stream.readline()
        except UnicodeDecodeError as exc:
            # Text layers decode ahead of the current line, so the position is only a lower bound.
            raise SourceReadError(f"undecodable input at or after line {number + 1}: {exc}", source=source) from exc
        except OSError as exc:
            raise SourceReadError(f"read failed: {exc}", source=source, line=number + 1) from exc
        if isinstance(raw, bytes):
            raise SourceReadError("expected a text stream, got bytes", source=source)
        if not raw:
            return
        number += 1
        yield number, raw


class ConfigReader:
    """Read configuration files and streams into a :class:`ConfigStore`."""

    def __init__(
        self,
        settings: ReaderSettings | None = None,
        debug: bool | None = None,
        logger: logging.Logger | None = None,
        on_event: EventCallback | None = None,
    ) -> None:
        self._settings = settings or ReaderSettings()
        self._debug = self._settings.debug if debug is None else debug
        self._logger = logger or logging.getLogger(__name__)
        self._on_event = on_event

    @property
    def settings(self) -> ReaderSettings:
        return self._settings

    def new_store(self) -> ConfigStore:
        return ConfigStore(duplicate_policy=self._settings.duplicate_policy)

    def read_file(self, path: str | Path, store: ConfigStore | None = None) -> ConfigStore:
        """Read ``path`` into ``store``; raises :class:`ParseLibError` on failure."""

        return self.load_file(path, store).unwrap()

    def read_stream(self, stream: TextIO, store: ConfigStore | None = None) -> ConfigStore:
        """Read an open text stream into ``store``; raises :class:`ParseLibError` on failure."""

        return self.load_stream(stream, store).unwrap()

    def load_file(self, path: str | Path, store: ConfigStore | None = None) -> LoadResult:
        """Read ``path`` and report the outcome as a :class:`LoadResult`."""

        source = str(path)
        state = _ReadState(store=store if store is not None else self.new_store())
        try:
            self._read_path(source, state)
        except ParseLibError as exc:
            return self._failed(state, source, exc)
        state.store.source = source
        return LoadResult(store=state.store, events=state.events)

    def load_stream(self, stream: TextIO, store: ConfigStore | None = None) -> LoadResult:
        """Rewind a text ``stream`` and read it; the caller keeps ownership of the stream."""

        name = getattr(stream, "name", None)
        source = name if isinstance(name, str) else STREAM_SOURCE
        state = _ReadState(store=store if store is not None else self.new_store())
        if isinstance(name, str):
            state.active.add(os.path.realpath(name))
        try:
            if stream.seekable():
                stream.seek(0)
            self._emit(state, logging.DEBUG, "source_opened", source, debug_only=True)
            self._read_lines(stream, source, state)
        except OSError as exc:
            return self._failed(state, source, SourceReadError(f"cannot rewind stream: {exc}", source=source))
        except ParseLibError as exc:
            return self._failed(state, source, exc)
        return LoadResult(store=state.store, events=state.events)

    def _failed(self, state: _ReadState, source: str, error: ParseLibError) -> LoadResult:
        self._emit(state, logging.ERROR, "config_load_failed", source, detail=str(error))
        return LoadResult(store=state.store, error=error, events=state.events)

    def _emit(
        self,
        state: _ReadState,
        level: int,
        event: str,
        source: str,
        line: int | None = None,
        detail: str = "",
        debug_only: bool = False,
        **context: Any,
    ) -> None:
        if debug_only and not self._debug:
            return
        record = LoadEvent(level=level, event=event, source=source, line=line, detail=detail, context=context)
        state.events.append(record)
        self._logger.log(level, event, extra={"source": source, "line": line, "detail": detail, **context})
        if self._on_event is not None:
            self._on_event(record)

    def _read_path(self, path: str, state: _ReadState) -> None:
        try:
            handle = open(path, "r", encoding="utf-8")
        except OSError as exc:
            raise SourceNotFoundError(f"cannot open: {exc.strerror or exc}", source=path) from exc
        identity = os.path.realpath(path)
        state.active.add(identity)
        try:
            with handle:
                self._emit(state, logging.DEBUG, "source_opened", path, debug_only=True)
                self._read_lines(handle, path, state)
        finally:
            state.active.discard(identity)

    def _read_lines(self, stream: TextIO, source: str, state: _ReadState) -> None:
        limit = self._settings.max_line_length
        for number, raw in _iter_lines(stream, source):
            line = raw.rstrip("\r\n")
            if len(line) > limit:
                self._emit(state, logging.WARNING, "line_truncated", source, number, detail=f"limit {limit}")
                line = line[:limit]

            cursor = skip_blank(line)
            if cursor is None:
                continue
            self._emit(state, logging.DEBUG, "line_read", source, number, detail=line, debug_only=True)

            name, cursor = read_token(line, cursor)
            if is_break(name):
                self._emit(state, logging.DEBUG, "break_reached", source, number, debug_only=True)
                return
            if at_terminator(line, cursor):
                raise MalformedLineError(f"{name!r} has no value", source=source, line=number)

            value_start = skip_blank(line, cursor)
            if value_start is None:
                value, value_end = "", len(line)
            else:
                value, value_end = read_token(line, value_start)
            self._dispatch(name, value, line, value_start, value_end, source, number, state)

    def _dispatch(
        self,
        name: str,
        value: str,
        line: str,
        value_start: int | None,
        value_end: int,
        source: str,
        number: int,
        state: _ReadState,
    ) -> None:
        directive = match_directive(name)
        if directive is Directive.INCLUDE:
            if not value:
                raise MalformedLineError(f"{name!r} needs a file name", source=source, line=number)
            self._include(value, source, number, state)
        elif directive is Directive.ENFORCE:
            enforced = " ".join(tokens(line, value_end))
            if not value or not enforced:
                raise MalformedLineError(f"{name!r} needs a key and a value", source=source, line=number)
            self._enforce(value, enforced, source, number, state)
        elif directive is Directive.WARNING:
            text = rest_of_line(line, value_start) if value_start is not None else ""
            if not text:
                raise MalformedLineError(f"{name!r} needs a message", source=source, line=number)
            self._emit(state, logging.WARNING, "config_warning", source, number, detail=text)
        else:
            self._store_value(name, value, source, number, state)

    def _include(self, path: str, source: str, number: int, state: _ReadState) -> None:
        if path == source:
            self._emit(state, logging.ERROR, "include_self_reference", source, number, detail=path)
            return
        if os.path.realpath(path) in state.active:
            self._emit(state, logging.ERROR, "include_cycle", source, number, detail=path)
            return
        try:
            self._read_path(path, state)
        except SourceNotFoundError as exc:
            # Only a failure to open ``path`` itself is soft; deeper ones were handled below us.
            if self._settings.strict_includes or exc.source != path:
                raise
            self._emit(state, logging.WARNING, "include_missing", source, number, detail=path)

    def _enforce(self, key: str, value: str, source: str, number: int, state: _ReadState) -> None:
        store = state.store
        with store.transaction():
            if store.check_string(key):
                current = store.get_string(key)
                if current != value:
                    raise EnforcementMismatchError(key, current, value, source=source, line=number)
            else:
                store.add(key, value)
            store.mark_enforced(key)
        self._emit(state, logging.DEBUG, "value_enforced", source, number, debug_only=True, key=key, value=value)

    def _store_value(self, name: str, value: str, source: str, number: int, state: _ReadState) -> None:
        kind = classify(value)
        if kind is None:
            self._emit(state, logging.DEBUG, "value_skipped", source, number, debug_only=True, key=name)
            return
        converted = convert(value, kind, source=source, line=number, strict=self._settings.strict_numbers)
        store = state.store
        with store.transaction():
            if self._settings.protect_enforced and store.is_enforced(name):
                enforced = store.get(name, ValueKind.STRING, None)
                if enforced is not None and enforced != value:
                    raise EnforcementMismatchError(name, enforced, value, source=source, line=number)
            store.add(name, converted)
        self._emit(
            state,
            logging.DEBUG,
            "value_added",
            source,
            number,
            debug_only=True,
            key=name,
            kind=kind.value,
            value=converted,
        )
