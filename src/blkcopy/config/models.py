"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, blkcopy.toml only contains
overrides. A missing file is the same as an empty one.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from blkcopy.domain.errors import ConfigError
from blkcopy.domain.transforms import TransformName, split_transforms, validate_transforms

DEFAULT_BLOCK_SIZE = 1024
UNLIMITED = sys.maxsize


def _coerce_transforms(value: Any) -> tuple[TransformName, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = split_transforms(value)
    return validate_transforms(value)


# --- blkcopy.toml sections ---


class CopyDefaults(BaseModel):
    """[defaults] section: fallbacks for flags the command line omits."""

    model_config = {"frozen": True}

    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)
    transforms: tuple[TransformName, ...] = ()

    @field_validator("transforms", mode="before")
    @classmethod
    def _check_transforms(cls, value: Any) -> tuple[TransformName, ...]:
        return _coerce_transforms(value)


# --- per-run options ---


class CopyOptions(BaseModel):
    """Everything one copy run needs, validated once and frozen.

    Attributes:
        source: File to read, or None for standard input.
        sink: File to create, or None for standard output.
        skip: Bytes to discard from the start of the source.
        limit: Maximum bytes to read after the skipped prefix.
        block_size: Size of each read and write of the copy loop.
        transforms: Filters to apply, in order.
    """

    model_config = {"frozen": True}

    source: Path | None = None
    sink: Path | None = None
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=UNLIMITED, ge=0)
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)
    transforms: tuple[TransformName, ...] = ()

    @field_validator("source", "sink", mode="before")
    @classmethod
    def _empty_path_is_stdio(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("transforms", mode="before")
    @classmethod
    def _check_transforms(cls, value: Any) -> tuple[TransformName, ...]:
        return _coerce_transforms(value)

    @classmethod
    def from_cli(cls, **values: Any) -> CopyOptions:
        """Build options from CLI values, reporting every problem as ConfigError.

        ``None`` values are dropped so code defaults apply.
        """
        supplied = {key: value for key, value in values.items() if value is not None}
        try:
            return cls(**supplied)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise ConfigError(f"invalid options: {problems}") from exc
