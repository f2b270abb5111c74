"""Configuration loading for gitstamp (.gitstamp/config.toml)."""

import os
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

ReportFormat = Literal["short", "details"]
REPORT_FORMATS: tuple[ReportFormat, ...] = ("short", "details")

CONFIG_DIR_NAME = ".gitstamp"
CONFIG_FILE_NAME = "config.toml"

DEFAULT_CORE_DIR = "{root_dir}/core"
DEFAULT_PLUGIN_DIR = "{root_dir}/plugin"
DEFAULT_VAR_DIR = "{root_dir}/var"
DEFAULT_CACHE_FILE = "{var_dir}/version.ini"

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class ConfigError(ValueError):
    """Raised when config.toml holds an invalid value."""


@dataclass(frozen=True)
class AppLayout:
    """Directories of the application whose components are versioned."""

    root_dir: Path
    core_dir: Path
    plugin_dir: Path
    var_dir: Path

    def plugin_path(self, plugin_name: str) -> Path:
        return self.plugin_dir / plugin_name


@dataclass(frozen=True)
class GitstampConfig:
    """In-memory representation of `.gitstamp/config.toml`.

    Example config.toml:
      core_dir = "{root_dir}/vendor/core"
      cache_file = "{XDG_CACHE_HOME}/myapp/version.ini"
      format = "details"
      recheck_short = true
    """

    layout: AppLayout
    cache_file: Path
    report_format: ReportFormat
    recheck_short: bool
    max_workers: int
    config_path: Path | None  # None when running on defaults


def expand_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Replace `{name}` placeholders from `values`, then from the environment.

    Unknown placeholders are left verbatim.

    Example:
        >>> expand_placeholders("{root_dir}/var", {"root_dir": "/srv/app"})
        '/srv/app/var'
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return values[name]
        return os.environ.get(name, match.group(0))

    return _PLACEHOLDER_RE.sub(_substitute, template)


def default_config_path(root_dir: Path) -> Path:
    return root_dir / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(root_dir: Path, config_path: Path | None = None) -> GitstampConfig:
    """Load config.toml if present; otherwise return defaults.

    Args:
        root_dir: Application root used when the file does not set `root_dir`
        config_path: Explicit config file; defaults to `<root_dir>/.gitstamp/config.toml`

    Returns:
        GitstampConfig with all placeholders expanded and paths made absolute

    Raises:
        ConfigError: If `format`, `max_workers` or `recheck_short` hold invalid values
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    cfg_path = config_path if config_path is not None else default_config_path(root_dir)
    data: dict[str, object] = {}
    loaded_from: Path | None = None
    if cfg_path.exists():
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
        loaded_from = cfg_path

    values: dict[str, str] = {}
    raw_root = data.get("root_dir")
    root = root_dir if raw_root is None else Path(expand_placeholders(str(raw_root), values))
    root = root.expanduser().resolve()
    values["root_dir"] = str(root)

    # Order matters: later templates may reference earlier directories
    core_dir = _expand_path(data.get("core_dir", DEFAULT_CORE_DIR), values, root)
    values["core_dir"] = str(core_dir)
    plugin_dir = _expand_path(data.get("plugin_dir", DEFAULT_PLUGIN_DIR), values, root)
    values["plugin_dir"] = str(plugin_dir)
    var_dir = _expand_path(data.get("var_dir", DEFAULT_VAR_DIR), values, root)
    values["var_dir"] = str(var_dir)
    cache_file = _expand_path(data.get("cache_file", DEFAULT_CACHE_FILE), values, root)

    report_format = str(data.get("format", "short"))
    if report_format not in REPORT_FORMATS:
        raise ConfigError(f"Invalid format {report_format!r}; expected one of {REPORT_FORMATS}")

    max_workers = data.get("max_workers", 1)
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise ConfigError(f"max_workers must be a positive integer, got {max_workers!r}")

    recheck_short = data.get("recheck_short", False)
    if not isinstance(recheck_short, bool):
        raise ConfigError(f"recheck_short must be true or false, got {recheck_short!r}")

    return GitstampConfig(
        layout=AppLayout(
            root_dir=root,
            core_dir=core_dir,
            plugin_dir=plugin_dir,
            var_dir=var_dir,
        ),
        cache_file=cache_file,
        report_format=cast(ReportFormat, report_format),
        recheck_short=recheck_short,
        max_workers=max_workers,
        config_path=loaded_from,
    )


def _expand_path(raw: object, values: Mapping[str, str], root: Path) -> Path:
    path = Path(expand_placeholders(str(raw), values)).expanduser()
    if not path.is_absolute():
        path = root / path
    return path
