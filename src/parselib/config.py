"""Reader and logging settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import tomllib

from .store import DuplicatePolicy


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    # Logging severity threshold (INFO/DEBUG/etc.).
    level: str = Field(default="INFO", description="Logging level")
    # Emit JSON if True; otherwise emit a human-readable format.
    json_output: bool = Field(default=False, description="Emit JSON logs")
    # Optional file path for log output; if None, logs go to stderr.
    log_file: str | None = Field(default=None, description="Optional log file path")
    max_bytes: int = Field(default=1_000_000, description="Max log file size before rotation")
    backup_count: int = Field(default=3, description="Number of rotated log files to keep")


class ReaderSettings(BaseSettings):
    """Settings for configuration reads, loaded from env or optional TOML."""

    # Environment keys use PARSELIB_ prefix and "__" nesting.
    model_config = SettingsConfigDict(env_prefix="PARSELIB_", env_nested_delimiter="__", extra="ignore")

    # Lines longer than this are truncated before tokenizing.
    max_line_length: int = Field(default=512, ge=1, description="Maximum line length in characters")
    strict_includes: bool = Field(default=False, description="Fail the load when an included file is missing")
    strict_numbers: bool = Field(
        default=False,
        description="Require the whole value to be a number instead of its longest numeric prefix",
    )
    protect_enforced: bool = Field(
        default=False,
        description="Reject plain assignments that contradict an enforced value",
    )
    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.LAST_WINS,
        description="Which value is kept when a key is assigned twice",
    )
    debug: bool = Field(default=False, description="Log every accepted line and stored value")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> "ReaderSettings":
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        return cls(**data)
