"""Configuration for update feed parsing.

This module provides an immutable configuration object controlling the
defaults and leniency of the feed parsing pipeline, together with JSON
round-tripping so the CLI can load it from a file.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

VALID_OS_SUFFIXES = ("win", "mac", "unix", "unknown")
VALID_CHANNEL_TYPES = ("eap", "milestone", "beta", "release")
VALID_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")

_STRING_FIELDS = (
    "release_date_format",
    "default_channel_type",
    "releases_url_suffix",
    "issues_url_suffix",
    "logging_level",
)
_OPTIONAL_STRING_FIELDS = ("os_suffix", "correlation_id")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class FeedConfig:
    """Configuration for all update feed parsing components.

    Frozen, so a single instance can be shared by concurrent update checks.

    Attributes:
        default_eval_days: Evaluation period used when a channel omits evalDays
        release_date_format: strptime format of the releaseDate attribute
        lenient_channel_status: Map unknown channel statuses to RELEASE
            instead of failing the parse
        os_suffix: Platform tag used for patch exclusions (None = detect)
        default_channel_type: Channel type labelling releases from JSON payloads
        releases_url_suffix: Appended to a repository URL to form the
            releases page URL
        issues_url_suffix: Appended to a repository URL to form the issue
            tracker URL
        markdown_extensions: Python-Markdown extensions for release notes
        logging_level: Level used by the CLI when no verbosity flag is given
        correlation_id: Default correlation ID for log records
    """

    default_eval_days: int = 30
    release_date_format: str = "%Y%m%d"
    lenient_channel_status: bool = False
    os_suffix: Optional[str] = None
    default_channel_type: str = "release"
    releases_url_suffix: str = "/releases/latest"
    issues_url_suffix: str = "/issues"
    markdown_extensions: Tuple[str, ...] = DEFAULT_MARKDOWN_EXTENSIONS
    logging_level: str = "WARNING"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the configuration."""
        self._validate_types()
        if self.default_eval_days < 0:
            raise ConfigValidationError(
                "default_eval_days must be >= 0", field_name="default_eval_days"
            )
        if not self.release_date_format:
            raise ConfigValidationError(
                "release_date_format cannot be empty", field_name="release_date_format"
            )
        if self.os_suffix is not None and self.os_suffix not in VALID_OS_SUFFIXES:
            raise ConfigValidationError(
                f"os_suffix must be one of {list(VALID_OS_SUFFIXES)} or None",
                field_name="os_suffix",
                suggestions=list(VALID_OS_SUFFIXES),
            )
        if self.default_channel_type not in VALID_CHANNEL_TYPES:
            raise ConfigValidationError(
                f"default_channel_type must be one of {list(VALID_CHANNEL_TYPES)}",
                field_name="default_channel_type",
                suggestions=list(VALID_CHANNEL_TYPES),
            )
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(VALID_LOGGING_LEVELS)}",
                field_name="logging_level",
            )
        if isinstance(self.markdown_extensions, (list, set)):
            object.__setattr__(self, "markdown_extensions", tuple(self.markdown_extensions))

    def _validate_types(self) -> None:
        # bool is an int subclass, so it is rejected explicitly
        if isinstance(self.default_eval_days, bool) or not isinstance(self.default_eval_days, int):
            raise ConfigValidationError(
                "default_eval_days must be an integer", field_name="default_eval_days"
            )
        if not isinstance(self.lenient_channel_status, bool):
            raise ConfigValidationError(
                "lenient_channel_status must be a boolean", field_name="lenient_channel_status"
            )
        for name in _STRING_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise ConfigValidationError(f"{name} must be a string", field_name=name)
        for name in _OPTIONAL_STRING_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigValidationError(f"{name} must be a string or None", field_name=name)
        extensions = self.markdown_extensions
        if not isinstance(extensions, (list, tuple, set)) or not all(
            isinstance(ext, str) for ext in extensions
        ):
            raise ConfigValidationError(
                "markdown_extensions must be a list of extension names",
                field_name="markdown_extensions",
            )

    def override(self, **kwargs: Any) -> "FeedConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = FeedConfig().override(lenient_channel_status=True)
        """
        try:
            return replace(self, **kwargs)
        except TypeError as e:
            raise ConfigValidationError(f"Unknown configuration field: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result = asdict(self)
        result["markdown_extensions"] = list(self.markdown_extensions)
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "FeedConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "FeedConfig":
        """Load configuration from a JSON file."""
        path = Path(config_path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Could not read configuration file {path}: {e}") from e
        return cls.from_json(text)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "FeedConfig":
        """Fail on any unrecognized channel status."""
        return cls(lenient_channel_status=False)

    @classmethod
    def lenient(cls) -> "FeedConfig":
        """Accept feeds carrying channel statuses added after this release."""
        return cls(lenient_channel_status=True)
