"""Configuration loading for wrangler (.wrangler.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".wrangler.yml"

DIFF_STYLES = ("minimal", "difflib")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class PolishingConfig:
    """Settings for one polishing run.

    ``toc_threshold`` is the minimum heading count that triggers a table of
    contents; ``0`` disables insertion.
    """

    toc_threshold: int = 4
    default_code_language: str = "bash"
    badges_enabled: bool = True
    runtime_version_label: str = "21"
    runtime_name: str = "JDK"
    primary_language: str = "java"
    diff_style: str = "minimal"

    def __post_init__(self) -> None:
        if self.toc_threshold < 0:
            raise ValueError("toc_threshold must be zero or positive")
        if not self.default_code_language.strip():
            raise ValueError("default_code_language cannot be blank")
        if not self.primary_language.strip():
            raise ValueError("primary_language cannot be blank")
        if self.diff_style not in DIFF_STYLES:
            raise ValueError(
                f"diff_style must be one of {', '.join(DIFF_STYLES)} (got {self.diff_style!r})"
            )

    def with_overrides(self, **overrides: Any) -> "PolishingConfig":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values) if values else self


@dataclass
class WranglerConfig:
    """Represents the settings defined in .wrangler.yml."""

    root: Path
    polishing: PolishingConfig = field(default_factory=PolishingConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> WranglerConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WranglerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    polish_data = _as_dict(data.get("polish"))
    defaults = PolishingConfig()
    try:
        polishing = PolishingConfig(
            toc_threshold=_or_default(_as_int(polish_data.get("toc_threshold")), defaults.toc_threshold),
            default_code_language=_or_default(
                _as_str(polish_data.get("default_code_language")), defaults.default_code_language
            ),
            badges_enabled=_or_default(_as_bool(polish_data.get("badges")), defaults.badges_enabled),
            runtime_version_label=_or_default(
                _as_str(polish_data.get("runtime_version")), defaults.runtime_version_label
            ),
            runtime_name=_or_default(_as_str(polish_data.get("runtime_name")), defaults.runtime_name),
            primary_language=_or_default(
                _as_str(polish_data.get("primary_language")), defaults.primary_language
            ),
            diff_style=_or_default(_as_str(polish_data.get("diff_style")), defaults.diff_style),
        )
    except ValueError as exc:
        raise ConfigError(f"Invalid polish settings in {config_file.name}: {exc}") from exc

    return WranglerConfig(
        root=root,
        polishing=polishing,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
