"""Configuration system for groupgrid.

Provides hierarchical configuration with precedence:
1. CLI flags (highest)
2. Environment variables
3. Project config (./.groupgrid.json)
4. Global config (~/.groupgrid.json)
5. Hardcoded defaults (lowest)
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from groupgrid.constants import CONFIG_FILE_NAME, DEFAULT_SEARCH_FIELDS, get_default_columns
from groupgrid.tree.keys import DEFAULT_DATE_FORMAT, VALID_DATE_BUCKETS, GroupingOptions
from groupgrid.tree.model import ColumnDescriptor, ValueKind

logger = logging.getLogger(__name__)

# Valid values for enums
VALID_OUTPUT_FORMATS = ("table", "json")
VALID_VALUE_KINDS = tuple(k.value for k in ValueKind)

DEFAULT_WIDTH = 160

# Environment variable names
ENV_GROUP_BY = "GROUPGRID_GROUP_BY"
ENV_DATE_BUCKET = "GROUPGRID_DATE_BUCKET"
ENV_OUTPUT_FORMAT = "GROUPGRID_OUTPUT_FORMAT"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigLoadError(Exception):
    """Raised when configuration file cannot be loaded."""

    pass


def _check_unknown(cls: type, data: dict[str, Any], section: str) -> None:
    known_fields = {f.name for f in fields(cls)}
    unknown = set(data.keys()) - known_fields
    if unknown:
        raise ConfigValidationError(
            f"Unknown fields in {section} config: {', '.join(sorted(unknown))}"
        )


def _optional_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    raise ConfigValidationError(f"group_by must be a list of column ids, got {value!r}")


@dataclass
class GroupingConfig:
    """Default grouping levels and group value resolution."""

    # None when this layer does not set it; [] explicitly clears grouping
    group_by: list[str] | None = None
    date_bucket: str = "exact"
    date_format: str = DEFAULT_DATE_FORMAT

    def validate(self) -> None:
        if self.date_bucket not in VALID_DATE_BUCKETS:
            raise ConfigValidationError(
                f"Invalid date_bucket '{self.date_bucket}'. "
                f"Valid values: {', '.join(VALID_DATE_BUCKETS)}"
            )
        keys = self.keys
        if len(set(keys)) != len(keys):
            raise ConfigValidationError(
                f"Duplicate keys in group_by: {', '.join(keys)}"
            )

    @property
    def keys(self) -> list[str]:
        """Effective group keys; an unset group_by means no grouping."""
        return list(self.group_by or [])

    def to_options(self) -> GroupingOptions:
        return GroupingOptions(date_bucket=self.date_bucket, date_format=self.date_format)

    def to_dict(self) -> dict[str, Any]:
        return {
            "group_by": self.keys,
            "date_bucket": self.date_bucket,
            "date_format": self.date_format,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "GroupingConfig":
        if strict:
            _check_unknown(cls, data, "grouping")
        return cls(
            group_by=_optional_list(data.get("group_by")),
            date_bucket=data.get("date_bucket", "exact"),
            date_format=data.get("date_format", DEFAULT_DATE_FORMAT),
        )


@dataclass
class DisplayConfig:
    """Renderer settings."""

    output_format: str = "table"
    width: int = DEFAULT_WIDTH
    show_footer: bool = True

    def validate(self) -> None:
        if self.output_format not in VALID_OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"Invalid output_format '{self.output_format}'. "
                f"Valid values: {', '.join(VALID_OUTPUT_FORMATS)}"
            )
        if not isinstance(self.width, int) or isinstance(self.width, bool):
            raise ConfigValidationError(
                f"width must be an integer, got {self.width!r}"
            )
        if self.width <= 0:
            raise ConfigValidationError(f"width must be positive, got {self.width}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "output_format": self.output_format,
            "width": self.width,
            "show_footer": self.show_footer,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "DisplayConfig":
        if strict:
            _check_unknown(cls, data, "display")
        return cls(
            output_format=data.get("output_format", "table"),
            width=data.get("width", DEFAULT_WIDTH),
            show_footer=data.get("show_footer", True),
        )


@dataclass
class GridConfig:
    """Main configuration container."""

    version: str = "1"
    columns: list[ColumnDescriptor] = field(default_factory=get_default_columns)
    grouping: GroupingConfig = field(default_factory=GroupingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    search_fields: list[str] = field(default_factory=lambda: list(DEFAULT_SEARCH_FIELDS))

    def validate(self) -> None:
        """Validate entire configuration."""
        self.grouping.validate()
        self.display.validate()

        column_ids = [c.id for c in self.columns]
        duplicates = sorted({cid for cid in column_ids if column_ids.count(cid) > 1})
        if duplicates:
            raise ConfigValidationError(f"Duplicate column ids: {', '.join(duplicates)}")

        for key in self.grouping.keys:
            if key not in column_ids:
                raise ConfigValidationError(
                    f"Unknown group_by column '{key}'. "
                    f"Valid columns: {', '.join(column_ids)}"
                )

    def column(self, column_id: str) -> ColumnDescriptor | None:
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "columns": [c.to_dict() for c in self.columns],
            "grouping": self.grouping.to_dict(),
            "display": self.display.to_dict(),
            "search_fields": list(self.search_fields),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "GridConfig":
        if strict:
            _check_unknown(cls, data, "top-level")

        columns = get_default_columns()
        if "columns" in data:
            columns = [_column_from_dict(c) for c in data["columns"]]

        return cls(
            version=data.get("version", "1"),
            columns=columns,
            grouping=GroupingConfig.from_dict(data.get("grouping", {}), strict),
            display=DisplayConfig.from_dict(data.get("display", {}), strict),
            search_fields=list(data.get("search_fields", DEFAULT_SEARCH_FIELDS)),
        )


def _column_from_dict(data: dict[str, Any]) -> ColumnDescriptor:
    if "id" not in data:
        raise ConfigValidationError(f"Column without id: {data}")
    kind = data.get("value_kind", "text")
    if kind not in VALID_VALUE_KINDS:
        raise ConfigValidationError(
            f"Invalid value_kind '{kind}' for column '{data['id']}'. "
            f"Valid values: {', '.join(VALID_VALUE_KINDS)}"
        )
    return ColumnDescriptor.from_dict(data)


def get_global_config_path() -> Path:
    """Get path to global config file."""
    return Path.home() / CONFIG_FILE_NAME


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get path to project config file."""
    return (project_dir or Path.cwd()) / CONFIG_FILE_NAME


def load_config_file(path: Path, strict: bool = False) -> GridConfig | None:
    """Load configuration from a JSON file.

    Args:
        path: Path to the config file
        strict: If True, fail on unknown fields

    Returns:
        GridConfig instance, or None if the file does not exist

    Raises:
        ConfigLoadError: If file cannot be read or parsed
        ConfigValidationError: If strict=True and unknown fields found
    """
    if not path.exists():
        return None

    try:
        content = path.read_text()
    except OSError as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Expected a JSON object in {path}")

    logger.debug("Loaded config from %s", path)
    return GridConfig.from_dict(data, strict=strict)


def merge_configs(*configs: GridConfig) -> GridConfig:
    """Merge multiple configs with later configs taking precedence.

    Default values in later configs do NOT override earlier values, so
    partial configs layer properly.

    Args:
        *configs: Configs to merge (first is base, last has highest priority)

    Returns:
        Merged GridConfig
    """
    if not configs:
        return GridConfig()

    defaults = GridConfig()
    result = copy.deepcopy(configs[0])

    for config in configs[1:]:
        if config.columns != defaults.columns:
            result.columns = list(config.columns)
        if config.search_fields != defaults.search_fields:
            result.search_fields = list(config.search_fields)

        # Merge grouping (only non-default values)
        if config.grouping.group_by is not None:
            result.grouping.group_by = list(config.grouping.group_by)
        if config.grouping.date_bucket != defaults.grouping.date_bucket:
            result.grouping.date_bucket = config.grouping.date_bucket
        if config.grouping.date_format != defaults.grouping.date_format:
            result.grouping.date_format = config.grouping.date_format

        # Merge display (only non-default values)
        if config.display.output_format != defaults.display.output_format:
            result.display.output_format = config.display.output_format
        if config.display.width != defaults.display.width:
            result.display.width = config.display.width
        if not config.display.show_footer:
            result.display.show_footer = False

    return result


def apply_env_overrides(config: GridConfig) -> GridConfig:
    """Apply environment variable overrides to config.

    Args:
        config: Base configuration

    Returns:
        New config with env var overrides applied
    """
    result = copy.deepcopy(config)

    if group_by := os.environ.get(ENV_GROUP_BY):
        result.grouping.group_by = [k.strip() for k in group_by.split(",") if k.strip()]

    if date_bucket := os.environ.get(ENV_DATE_BUCKET):
        if date_bucket in VALID_DATE_BUCKETS:
            result.grouping.date_bucket = date_bucket
        else:
            logger.warning(
                "Ignoring %s=%s. Valid values: %s",
                ENV_DATE_BUCKET, date_bucket, ", ".join(VALID_DATE_BUCKETS),
            )

    if output_format := os.environ.get(ENV_OUTPUT_FORMAT):
        if output_format in VALID_OUTPUT_FORMATS:
            result.display.output_format = output_format
        else:
            logger.warning(
                "Ignoring %s=%s. Valid values: %s",
                ENV_OUTPUT_FORMAT, output_format, ", ".join(VALID_OUTPUT_FORMATS),
            )

    return result


def get_config(config_path: Path | None = None, project_dir: Path | None = None) -> GridConfig:
    """Load and merge configuration from all sources.

    Loads in order (later sources override earlier):
    1. Hardcoded defaults
    2. Global config (~/.groupgrid.json)
    3. Project config (./.groupgrid.json, or ``config_path`` when given)
    4. Environment variables

    Args:
        config_path: Explicit config file replacing the project config
        project_dir: Directory holding the project config (default: cwd)

    Returns:
        Merged configuration with all overrides applied
    """
    layers = [GridConfig()]

    global_config = load_config_file(get_global_config_path())
    if global_config is not None:
        layers.append(global_config)

    project_path = config_path or get_project_config_path(project_dir)
    project_config = load_config_file(project_path)
    if project_config is not None:
        layers.append(project_config)
    elif config_path is not None:
        raise ConfigLoadError(f"Config file not found: {config_path}")

    merged = merge_configs(*layers)
    return apply_env_overrides(merged)


def generate_config_template() -> dict[str, Any]:
    """Generate a config template dictionary.

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "version": "1",
        "columns": [c.to_dict() for c in get_default_columns()],
        "grouping": {
            "group_by": [],
            "date_bucket": "exact",
            "date_format": DEFAULT_DATE_FORMAT,
        },
        "display": {
            "output_format": "table",
            "width": DEFAULT_WIDTH,
            "show_footer": True,
        },
        "search_fields": list(DEFAULT_SEARCH_FIELDS),
    }
