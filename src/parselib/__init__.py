"""Typed key/value configuration files with include and enforce directives."""

from .api import read_config, read_stream
from .classifier import ValueKind, classify, convert
from .config import LoggingConfig, ReaderSettings
from .directives import Directive, match_directive
from .errors import (
    EnforcementMismatchError,
    InvalidValueError,
    KeyNotFoundError,
    LoadError,
    MalformedLineError,
    NumericConversionError,
    ParseLibError,
    SourceNotFoundError,
    SourceReadError,
    WrongKindError,
)
from .logging_utils import ContextFormatter, JsonFormatter, configure_logging
from .reader import ConfigReader, LoadEvent, LoadResult
from .store import ConfigStore, DuplicatePolicy
from .tokenizer import read_token, skip_blank

__all__ = [
    "read_config",
    "read_stream",
    "ValueKind",
    "classify",
    "convert",
    "LoggingConfig",
    "ReaderSettings",
    "Directive",
    "match_directive",
    "ParseLibError",
    "LoadError",
    "SourceNotFoundError",
    "SourceReadError",
    "MalformedLineError",
    "NumericConversionError",
    "EnforcementMismatchError",
    "KeyNotFoundError",
    "WrongKindError",
    "InvalidValueError",
    "ContextFormatter",
    "JsonFormatter",
    "configure_logging",
    "ConfigReader",
    "LoadEvent",
    "LoadResult",
    "ConfigStore",
    "DuplicatePolicy",
    "read_token",
    "skip_blank",
]
