"""Parse, validate and hold the pathassert configuration."""

from __future__ import annotations

import codecs
import locale
import logging
import threading
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import yaml

from pathassert.types import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "pathassert.yaml"
DEFAULT_CHUNK_SIZE = 8 * 1024 * 1024  # 8 MB


def _default_charset() -> str:
    return locale.getpreferredencoding(False)


@dataclass
class AssertConfig:
    """Settings shared by every assertion.

    Attributes:
        charset: Codec used to decode file content when none is given.
        chunk_size: Read size used when hashing files.
        diff_context: Context lines shown around a text difference.
        max_listed_entries: Directory entries listed in a failure message.
    """

    charset: str = field(default_factory=_default_charset)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    diff_context: int = 3
    max_listed_entries: int = 20

    def validate(self) -> None:
        """Raise :class:`ConfigError` if a field holds an unusable value."""
        try:
            codecs.lookup(self.charset)
        except (LookupError, TypeError) as exc:
            raise ConfigError(f"Unknown charset: {self.charset!r}") from exc
        if not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if not isinstance(self.diff_context, int) or self.diff_context < 0:
            raise ConfigError(f"diff_context must be >= 0, got {self.diff_context!r}")
        if not isinstance(self.max_listed_entries, int) or self.max_listed_entries <= 0:
            raise ConfigError(
                f"max_listed_entries must be a positive integer, got {self.max_listed_entries!r}"
            )

    def to_dict(self) -> dict:
        """Serialise to a plain dict (for writing pathassert.yaml)."""
        return asdict(self)


_FIELD_NAMES = {f.name for f in fields(AssertConfig)}


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------

def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> AssertConfig:
    """Load and validate a YAML configuration file.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed :class:`AssertConfig`.

    Raises:
        ConfigError: If the file is missing, malformed or holds unknown keys.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Configuration file not found: {p}")

    try:
        with open(p, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {p}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {p}, got {type(data).__name__}")

    unknown = sorted(set(data) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(f"Unknown key(s) in {p}: {', '.join(unknown)}")

    cfg = AssertConfig(**data)
    cfg.validate()
    logger.debug("Loaded configuration from %s", p)
    return cfg


def save_config(cfg: AssertConfig, path: str | Path = DEFAULT_CONFIG_FILE) -> None:
    """Write *cfg* back to a YAML file."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.dump(cfg.to_dict(), fh, default_flow_style=False, allow_unicode=True, sort_keys=False)


# ---------------------------------------------------------------------------
# Process-global instance
# ---------------------------------------------------------------------------

_config_lock = threading.Lock()
_global_config: AssertConfig | None = None


def get_config() -> AssertConfig:
    """Return the global configuration, creating the default on first use."""
    global _global_config  # pylint: disable=global-statement
    with _config_lock:
        if _global_config is None:
            _global_config = AssertConfig()
        return _global_config


def set_config(
    charset: str | None = None,
    chunk_size: int | None = None,
    diff_context: int | None = None,
    max_listed_entries: int | None = None,
) -> AssertConfig:
    """Update the global configuration.

    Only arguments that are not ``None`` are applied. The result is validated
    before it replaces the current configuration.

    Example:
        set_config(charset="windows-1254")
    """
    global _global_config  # pylint: disable=global-statement
    with _config_lock:
        current = _global_config or AssertConfig()
        updated = AssertConfig(**current.to_dict())
        updates = {
            "charset": charset,
            "chunk_size": chunk_size,
            "diff_context": diff_context,
            "max_listed_entries": max_listed_entries,
        }
        for key, value in updates.items():
            if value is not None:
                setattr(updated, key, value)

        updated.validate()
        _global_config = updated
        return _global_config


def use_config_file(path: str | Path = DEFAULT_CONFIG_FILE) -> AssertConfig:
    """Load *path* and make it the global configuration."""
    global _global_config  # pylint: disable=global-statement
    cfg = load_config(path)
    with _config_lock:
        _global_config = cfg
    return cfg


def reset_config() -> None:
    """Restore the default configuration."""
    global _global_config  # pylint: disable=global-statement
    with _config_lock:
        _global_config = AssertConfig()
