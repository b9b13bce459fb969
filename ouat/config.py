"""Workspace configuration support for the ouat CLI."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

CONFIG_FILENAME = "ouat.toml"

_STANDARD_PREFIXES = ("c++", "gnu++")


@dataclass
class BuildSettings:
    """Where generated sources and binaries land."""

    out_dir: Path = Path("build")


@dataclass
class ToolchainSettings:
    """Native compiler invocation; the optimisation level is fixed at ``-O0``."""

    compiler: str = "g++"
    standard: str = "c++17"


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    build: BuildSettings = field(default_factory=BuildSettings)
    toolchain: ToolchainSettings = field(default_factory=ToolchainSettings)
    path: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def output_path_for(self, source: Path) -> Path:
        """Default generated-source location for ``source``."""
        return self.build.out_dir / f"{source.stem}.cpp"


def _read_toml_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}", path=str(path)) from exc
    except OSError as exc:
        raise ConfigError(f"Could not read configuration file: {exc}", path=str(path)) from exc


def _section(data: Dict[str, Any], name: str, path: Path) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table", path=str(path))
    return section


def _string_value(section: Dict[str, Any], key: str, default: str, *, table: str, path: Path) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"{table}.{key} must be a non-empty string, got {value!r}",
            path=str(path),
        )
    return value.strip()


def _parse_build(data: Dict[str, Any], root: Path, path: Path) -> BuildSettings:
    section = _section(data, "build", path)
    out_dir = Path(_string_value(section, "out_dir", str(BuildSettings.out_dir), table="build", path=path))
    if not out_dir.is_absolute():
        out_dir = (root / out_dir).resolve()
    return BuildSettings(out_dir=out_dir)


def _parse_toolchain(data: Dict[str, Any], path: Path) -> ToolchainSettings:
    section = _section(data, "toolchain", path)
    compiler = _string_value(section, "compiler", ToolchainSettings.compiler, table="toolchain", path=path)
    standard = _string_value(section, "standard", ToolchainSettings.standard, table="toolchain", path=path)
    if not standard.startswith(_STANDARD_PREFIXES):
        raise ConfigError(
            f"toolchain.standard must look like 'c++17' or 'gnu++17', got {standard!r}",
            path=str(path),
        )
    return ToolchainSettings(compiler=compiler, standard=standard)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError("Configuration file not found", path=str(explicit))
        return explicit
    path = root / CONFIG_FILENAME
    if path.exists():
        return path
    return None


def load_workspace_config(root: Path, explicit: Optional[Path] = None) -> WorkspaceConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return WorkspaceConfig(root=root, build=BuildSettings(out_dir=(root / BuildSettings.out_dir).resolve()))

    data = _read_toml_config(config_path)
    return WorkspaceConfig(
        root=root,
        build=_parse_build(data, root, config_path),
        toolchain=_parse_toolchain(data, config_path),
        path=config_path,
        raw=data,
    )


__all__ = [
    "CONFIG_FILENAME",
    "BuildSettings",
    "ToolchainSettings",
    "WorkspaceConfig",
    "locate_config_file",
    "load_workspace_config",
]
