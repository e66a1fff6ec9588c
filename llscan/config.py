"""llscan.toml loading and validation."""
from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_NAME = "llscan.toml"

OUTPUT_FORMATS = ("text", "json")


class ConfigError(Exception):
    pass


@dataclass
class ScanConfig:
    output: str = "text"
    include_intrinsics: bool = False
    warn_missing_newline: bool = True

    def validate(self) -> None:
        if self.output not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Invalid output format '{self.output}'. "
                f"Must be one of: {', '.join(OUTPUT_FORMATS)}."
            )
        for key in ("include_intrinsics", "warn_missing_newline"):
            if not isinstance(getattr(self, key), bool):
                raise ConfigError(f"[scan] {key} must be true or false")


def load_config(path: Path | None = None) -> ScanConfig:
    """Load llscan.toml from `path`, or from the cwd when not given.

    A missing default file yields the defaults; a missing explicit path is
    an error.
    """
    explicit = path is not None
    if path is None:
        path = Path.cwd() / CONFIG_NAME
    if not path.exists():
        if explicit:
            raise ConfigError(f"No config file at {path}")
        return ScanConfig()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from None
    return _parse_config(data)


def load_config_from_string(text: str) -> ScanConfig:
    """Load configuration from a TOML string."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(e)) from None
    return _parse_config(data)


def _parse_config(data: dict) -> ScanConfig:
    scan = data.get("scan", {})
    unknown = sorted(set(scan) - {"output", "include_intrinsics", "warn_missing_newline"})
    if unknown:
        raise ConfigError(f"Unknown [scan] key(s): {', '.join(unknown)}")
    config = ScanConfig(
        output=scan.get("output", "text"),
        include_intrinsics=scan.get("include_intrinsics", False),
        warn_missing_newline=scan.get("warn_missing_newline", True),
    )
    config.validate()
    return config
