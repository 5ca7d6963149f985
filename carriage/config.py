from __future__ import annotations

import codecs
import os
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except Exception:  # pragma: no cover
    tomllib = None  # type: ignore


ENV_PREFIX = "CARRIAGE_"


@dataclass
class CarriageConfig:
    encoding: str = "utf-8"
    errors: str = "replace"  # codec error handler for undecodable input


def read_config_file(path: str | os.PathLike[str] | None) -> Dict[str, Any]:
    """
    Read the settings table from a TOML file.

    Keys may sit at the top level or in a `[render]` table; the table wins.
    An empty path means no file.
    """
    if not path:
        return {}
    p = pathlib.Path(path)
    if p.suffix.lower() != ".toml":
        raise ValueError(f"Unsupported config format: {p.suffix or p.name}")
    if tomllib is None:
        raise RuntimeError("TOML support requires Python 3.11+")
    try:
        data = tomllib.loads(p.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"{p}: {e}") from e

    section = data.get("render", {})
    if not isinstance(section, dict):
        raise ValueError(f"{p}: 'render' must be a table")
    settings = {k: v for k, v in data.items() if k != "render"}
    settings.update(section)
    return settings


def _pick(name: str, cli: Mapping[str, Any], env: Mapping[str, str], file_cfg: Mapping[str, Any]) -> Optional[str]:
    value = cli.get(name) or env.get(ENV_PREFIX + name.upper()) or file_cfg.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{name}: expected a string, got {value!r}")
    return value


def merge_config(
    file_cfg: Mapping[str, Any],
    env: Mapping[str, str],
    cli: Mapping[str, Any],
) -> CarriageConfig:
    """Layer CLI over CARRIAGE_* environment over file settings, then check codecs."""
    cfg = CarriageConfig()
    encoding = _pick("encoding", cli, env, file_cfg)
    errors = _pick("errors", cli, env, file_cfg)
    if encoding:
        cfg.encoding = encoding
    if errors:
        cfg.errors = errors

    # Fail here instead of halfway through reading or writing a log
    try:
        codecs.lookup(cfg.encoding)
    except LookupError:
        raise ValueError(f"unknown encoding: {cfg.encoding}") from None
    try:
        codecs.lookup_error(cfg.errors)
    except LookupError:
        raise ValueError(f"unknown error handler: {cfg.errors}") from None
    return cfg
