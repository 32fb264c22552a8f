"""Public entry points for loading configuration.

Both functions report failures through the returned :class:`LoadResult`
instead of raising, so a bad configuration never takes down the caller.
Use :meth:`LoadResult.unwrap` to get the store or re-raise the error.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import logging

from .config import ReaderSettings
from .reader import ConfigReader, EventCallback, LoadResult
from .store import ConfigStore


def read_config(
    path: str | Path,
    debug: bool = False,
    settings: ReaderSettings | None = None,
    store: ConfigStore | None = None,
    on_event: EventCallback | None = None,
    logger: logging.Logger | None = None,
) -> LoadResult:
    """Load the configuration file at ``path``."""

    reader = ConfigReader(settings=settings, debug=True if debug else None, logger=logger, on_event=on_event)
    return reader.load_file(path, store)


def read_stream(
    stream: TextIO,
    debug: bool = False,
    settings: ReaderSettings | None = None,
    store: ConfigStore | None = None,
    on_event: EventCallback | None = None,
    logger: logging.Logger | None = None,
) -> LoadResult:
    """Load configuration from an open text stream; the stream is left open."""

    reader = ConfigReader(settings=settings, debug=True if debug else None, logger=logger, on_event=on_event)
    return reader.load_stream(stream, store)
