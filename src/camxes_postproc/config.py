"""
Configuration for the postprocessor.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/camxes-postproc/config.toml) if exists
3. Environment variables (CAMXES_*) override file
4. Explicit call arguments override everything
"""

from __future__ import annotations

import contextlib
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ModeConfig:
    """Display options used when a caller passes no mode."""
    default: str = ""


@dataclass
class RewriteConfig:
    """Tree rewriting limits."""
    max_depth: int = 400  # stays under the interpreter's recursion limit


@dataclass
class RenderConfig:
    """Glyph alphabets of the bracket prettifier."""
    open_brackets: str = "([{<"
    close_brackets: str = ")]}>"
    superscript_digits: str = "⁰¹²³⁴⁵⁶⁷⁸⁹"


@dataclass
class Config:
    """Root config with all settings."""
    mode: ModeConfig = field(default_factory=ModeConfig)
    rewrite: RewriteConfig = field(default_factory=RewriteConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "camxes-postproc" / "config.toml"
    return Path.home() / ".config" / "camxes-postproc" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        with contextlib.suppress(OSError, tomllib.TOMLDecodeError, ValueError, TypeError):
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "mode" in data:
        m = data["mode"]
        if "default" in m:
            config.mode.default = str(m["default"])

    if "rewrite" in data:
        r = data["rewrite"]
        if "max_depth" in r:
            config.rewrite.max_depth = int(r["max_depth"])

    if "render" in data:
        g = data["render"]
        if "open_brackets" in g:
            config.render.open_brackets = str(g["open_brackets"])
        if "close_brackets" in g:
            config.render.close_brackets = str(g["close_brackets"])
        if "superscript_digits" in g:
            config.render.superscript_digits = str(g["superscript_digits"])

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "CAMXES_DEFAULT_MODE": ("mode", "default", str),
        "CAMXES_MAX_DEPTH": ("rewrite", "max_depth", int),
        "CAMXES_OPEN_BRACKETS": ("render", "open_brackets", str),
        "CAMXES_CLOSE_BRACKETS": ("render", "close_brackets", str),
        "CAMXES_SUPERSCRIPT_DIGITS": ("render", "superscript_digits", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached config so the next get_config() reloads it."""
    global _config
    _config = None
