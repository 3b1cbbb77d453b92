"""Process-wide settings merged from flags, environment, and blkcopy.toml.

Precedence, highest first: flags given on the command line, ``BLKCOPY_*``
environment variables (``__`` separates nested keys, as in
``BLKCOPY_DEFAULTS__BLOCK_SIZE``), the TOML file, then code defaults.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
    TomlConfigSettingsSource,
)

from blkcopy.config.discovery import resolve_config
from blkcopy.config.models import CopyDefaults
from blkcopy.domain.errors import ConfigError

# settings_customise_sources is a classmethod, so the file chosen for this
# construction travels beside the call rather than through it.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


class BlkcopySettings(BaseSettings):
    """Settings for one CLI invocation, held by AppContext.

    The ``defaults`` section supplies ``copy`` options the command line
    leaves out.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="BLKCOPY_",
        env_nested_delimiter="__",
    )

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    defaults: CopyDefaults = Field(default_factory=CopyDefaults)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_path = _active_toml.get()
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **flags: Any,
    ) -> BlkcopySettings:
        """Build settings for a CLI run.

        *config_path* (``--config``) wins over discovery from *start*
        (default: cwd). Pass only the flags the user actually gave.

        Raises:
            click.ClickException: The config file is missing or not valid
                TOML, or a value fails validation.
        """
        toml_path = resolve_config(config_path, start)
        token = _active_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        except (ValidationError, SettingsError, ConfigError) as exc:
            msg = f"Invalid configuration ({toml_path or 'environment'}): {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _active_toml.reset(token)
