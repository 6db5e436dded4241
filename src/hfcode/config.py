"""Runtime configuration for hfcode.

Small and strict:
  - defaults live here
  - HFCODE_* environment variables override defaults
  - CLI options override both (applied by the CLI with ``with_overrides``)
  - malformed values are rejected with UsageError
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from hfcode.errors import UsageError

DEFAULT_OUTPUT = "output.txt"
DEFAULT_TABLE = "code.txt"

ENV_OUTPUT = "HFCODE_OUTPUT"
ENV_TABLE = "HFCODE_TABLE"
ENV_STRICT = "HFCODE_STRICT"
ENV_COMPARE = "HFCODE_COMPARE"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    if key not in env:
        return default
    v = env[key].strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise UsageError(f"config: {key} must be a boolean (0/1/true/false/yes/no), got {env[key]!r}")


def _env_path(env: Mapping[str, str], key: str, default: str) -> Path:
    v = env.get(key)
    if v is None:
        return Path(default)
    v = v.strip()
    if not v:
        raise UsageError(f"config: {key} is set but empty")
    return Path(v).expanduser()


@dataclass(frozen=True)
class HFCodeConfig:
    output_path: Path = Path(DEFAULT_OUTPUT)
    table_path: Path = Path(DEFAULT_TABLE)
    strict: bool = False
    compare: bool = False

    def with_overrides(
        self,
        *,
        output_path: Path | None = None,
        table_path: Path | None = None,
        strict: bool | None = None,
        compare: bool | None = None,
    ) -> "HFCodeConfig":
        """Return a copy; None means "keep current value"."""
        changes: dict[str, object] = {}
        if output_path is not None:
            changes["output_path"] = Path(output_path)
        if table_path is not None:
            changes["table_path"] = Path(table_path)
        if strict is not None:
            changes["strict"] = bool(strict)
        if compare is not None:
            changes["compare"] = bool(compare)
        return replace(self, **changes)


def load_config(environ: Mapping[str, str] | None = None) -> HFCodeConfig:
    env = os.environ if environ is None else environ
    return HFCodeConfig(
        output_path=_env_path(env, ENV_OUTPUT, DEFAULT_OUTPUT),
        table_path=_env_path(env, ENV_TABLE, DEFAULT_TABLE),
        strict=_env_bool(env, ENV_STRICT, False),
        compare=_env_bool(env, ENV_COMPARE, False),
    )
