from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import DEFAULT_OUTPUT_FORMAT, ENV_OUTPUT_FORMAT, ENV_TARGET_KEY, OUTPUT_FORMATS
from .errors import ConfigError


@dataclass
class ScanConfig:
    field_key: str
    output_format: str = DEFAULT_OUTPUT_FORMAT
    strict_alignment: bool = False
    verbose: bool = False


def load_config(
    *,
    key: Optional[str] = None,
    output_format: Optional[str] = None,
    strict_alignment: bool = False,
    verbose: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> ScanConfig:
    """Build a ScanConfig; explicit arguments win over environment variables.

    Raises:
        ConfigError: no field key is available, or the output format is unknown.
    """
    env = environ if environ is not None else {}
    field_key = key if key is not None else env.get(ENV_TARGET_KEY)
    if not field_key:
        raise ConfigError(f"env var {ENV_TARGET_KEY} missing and no --key given")
    fmt = output_format or env.get(ENV_OUTPUT_FORMAT) or DEFAULT_OUTPUT_FORMAT
    if fmt not in OUTPUT_FORMATS:
        raise ConfigError(f"unknown output format: {fmt!r} (choose from {', '.join(OUTPUT_FORMATS)})")
    return ScanConfig(
        field_key=field_key,
        output_format=fmt,
        strict_alignment=strict_alignment,
        verbose=verbose,
    )
