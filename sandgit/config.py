"""Configuration: read/write an INI file (.sandgit.ini) plus environment overrides."""

from __future__ import annotations

import configparser
import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional

from .constants import CONFIG_FILENAME, DEFAULT_AUTHOR, DEFAULT_MERGE_CLEAN_PROBABILITY
from .errors import InvalidConfigKeyError, SandgitError
from .util import write_text_atomic

logger = logging.getLogger(__name__)

ENV_CONFIG = "SANDGIT_CONFIG"
ENV_AUTHOR = "SANDGIT_AUTHOR"
ENV_MERGE_SEED = "SANDGIT_MERGE_SEED"


@dataclass(frozen=True)
class Settings:
    author: str = DEFAULT_AUTHOR
    merge_clean_probability: float = DEFAULT_MERGE_CLEAN_PROBABILITY
    merge_seed: Optional[int] = None


def config_path(path: Optional[str | Path] = None, env: Optional[Mapping[str, str]] = None) -> Path:
    """Explicit path, else $SANDGIT_CONFIG, else ./.sandgit.ini."""
    if path is not None:
        return Path(path)
    env = os.environ if env is None else env
    if env.get(ENV_CONFIG):
        return Path(env[ENV_CONFIG])
    return Path.cwd() / CONFIG_FILENAME


def _parse_key(key: str) -> tuple[str, str]:
    """Return (section, option). Raises InvalidConfigKeyError if key invalid."""
    parts = key.split(".")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise InvalidConfigKeyError(f"invalid config key: {key!r} (expected section.option)")
    return parts[0].strip(), parts[1].strip()


def read_config(path: Path) -> configparser.ConfigParser:
    """Read the INI file. Return empty parser if the file is missing."""
    cfg = configparser.ConfigParser()
    if path.exists():
        try:
            cfg.read_string(path.read_text(encoding="utf-8"))
        except (configparser.Error, OSError) as e:
            raise SandgitError(f"cannot read config {path}: {e}") from e
    return cfg


def write_config(path: Path, cfg: configparser.ConfigParser) -> None:
    buf = io.StringIO()
    cfg.write(buf)
    write_text_atomic(path, buf.getvalue())


def _parse_probability(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as e:
        raise SandgitError(f"merge.clean_probability must be a number, got {raw!r}") from e
    if not 0.0 <= value <= 1.0:
        raise SandgitError(f"merge.clean_probability must be between 0 and 1, got {value}")
    return value


def _parse_seed(raw: str, source: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise SandgitError(f"{source} must be an integer, got {raw!r}") from e


def _parse_author(raw: str) -> str:
    if not raw.strip():
        raise SandgitError("user.name must not be empty")
    return raw


# Keys the simulator reads; other section.option keys are stored as given.
_VALUE_CHECKS: dict[str, Callable[[str], object]] = {
    "user.name": _parse_author,
    "merge.clean_probability": _parse_probability,
    "merge.seed": lambda raw: _parse_seed(raw, "merge.seed"),
}


def get_value(path: Path, key: str) -> Optional[str]:
    """Get config value for key (section.option). Return None if missing."""
    section, option = _parse_key(key)
    return read_config(path).get(section, option, fallback=None)


def set_value(path: Path, key: str, value: str) -> None:
    """Set config value. A bad value for a known key raises before the file is touched."""
    section, option = _parse_key(key)
    check = _VALUE_CHECKS.get(f"{section}.{option}".lower())
    if check is not None:
        check(value)
    cfg = read_config(path)
    if not cfg.has_section(section):
        cfg.add_section(section)
    cfg.set(section, option, value)
    write_config(path, cfg)
    logger.debug("config %s: set %s.%s", path, section, option)


def unset_value(path: Path, key: str) -> bool:
    """Remove config option, and its section once empty. Return True if something was removed."""
    section, option = _parse_key(key)
    cfg = read_config(path)
    if not cfg.has_section(section) or not cfg.remove_option(section, option):
        return False
    if not cfg.options(section):
        cfg.remove_section(section)
    write_config(path, cfg)
    logger.debug("config %s: unset %s.%s", path, section, option)
    return True


def list_values(path: Path) -> list[tuple[str, str]]:
    """Return [(key, value), ...] sorted by key (section.option)."""
    cfg = read_config(path)
    return sorted((f"{section}.{option}", value) for section in cfg.sections() for option, value in cfg.items(section))


def load_settings(path: Optional[str | Path] = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    """Settings from the config file, overridden by SANDGIT_AUTHOR / SANDGIT_MERGE_SEED."""
    env = os.environ if env is None else env
    p = config_path(path, env)
    cfg = read_config(p)
    author = cfg.get("user", "name", fallback=DEFAULT_AUTHOR)
    probability = DEFAULT_MERGE_CLEAN_PROBABILITY
    raw_probability = cfg.get("merge", "clean_probability", fallback=None)
    if raw_probability is not None:
        probability = _parse_probability(raw_probability)
    seed: Optional[int] = None
    raw_seed = cfg.get("merge", "seed", fallback=None)
    if raw_seed is not None:
        seed = _parse_seed(raw_seed, "merge.seed")
    if env.get(ENV_AUTHOR):
        author = env[ENV_AUTHOR]
    if env.get(ENV_MERGE_SEED):
        seed = _parse_seed(env[ENV_MERGE_SEED], ENV_MERGE_SEED)
    logger.debug("settings from %s: author=%s probability=%s seed=%s", p, author, probability, seed)
    return Settings(author=author, merge_clean_probability=probability, merge_seed=seed)
