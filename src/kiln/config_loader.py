"""Load KilnConfig from kiln.yaml / kiln.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from kiln._errors import ConfigError
from kiln.config import KilnConfig

# Accepted keys and the value types a config file may give them
_CONFIG_TYPES: dict[str, type | tuple[type, ...]] = {
    "pages_dir": str,
    "public_dir": str,
    "output": (str, Path),
    "base_url": str,
    "clean": bool,
    "minify": bool,
    "host": str,
    "port": int,
}
_CONFIG_KEYS = frozenset(_CONFIG_TYPES)


def load_config(root: Path, **overrides: object) -> KilnConfig:
    """Load KilnConfig from root, optionally merging kiln.yaml.

    Looks for kiln.yaml, kiln.yml, or kiln.toml in root. If found, loads
    and merges with overrides. Overrides take precedence; ``None`` overrides
    are ignored so unset CLI flags do not mask file values.

    Raises:
        ConfigError: If a config file exists but cannot be parsed, or a
            value has the wrong type.

    """
    file_config = _read_kiln_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    _check_types(merged, root)
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    try:
        return KilnConfig(root=root, **merged)
    except TypeError as exc:
        msg = f"Invalid kiln configuration for {root}: {exc}"
        raise ConfigError(msg) from exc


def _check_types(values: dict[str, object], root: Path) -> None:
    for key, value in values.items():
        expected = _CONFIG_TYPES.get(key)
        if expected is None:
            # Unknown keyword overrides are reported by KilnConfig itself
            continue
        # bool is an int subclass
        wrong_bool = isinstance(value, bool) and expected is int
        if wrong_bool or not isinstance(value, expected):
            names = (
                " or ".join(t.__name__ for t in expected)
                if isinstance(expected, tuple)
                else expected.__name__
            )
            msg = (
                f"Invalid kiln configuration for {root}: {key!r} must be "
                f"{names}, got {type(value).__name__} {value!r}"
            )
            raise ConfigError(msg)


def _read_kiln_config(root: Path) -> dict[str, object]:
    """Read kiln config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("kiln.yaml", "kiln.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "kiln.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_kiln_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_kiln_section(data)


def _flatten_kiln_section(data: dict[str, object]) -> dict[str, object]:
    """Extract kiln.* keys into top-level config, dropping unknown keys."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _CONFIG_KEYS:
            result[k] = v
    section = data.get("kiln")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _CONFIG_KEYS:
                result[k] = v
    return result
