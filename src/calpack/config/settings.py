"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs, the CLI flags that were set
  2. Env vars with the ``CALPACK_`` prefix
  3. ``calpack.toml``, discovered via walk-up
  4. Code defaults baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
:func:`calpack.config.discovery.find_config`.
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from calpack.config.discovery import find_config
from calpack.config.models import DefaultsConfig, DomainConfig, FormatConfig

logger = logging.getLogger(__name__)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``calpack.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            logger.debug("Loaded config from %s", toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path must reach settings_customise_sources, which is a classmethod.
_tls = threading.local()


class CalpackSettings(BaseSettings):
    """Settings for the calpack CLI, frozen after construction.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        domains: Custom domains declared in ``[domains.<label>]`` tables.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CALPACK_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    format: FormatConfig = Field(default_factory=FormatConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    domains: dict[str, DomainConfig] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> CalpackSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given and present, else walks up from
        *start* (default: cwd) for ``calpack.toml``.  Flags left off on the
        command line fall through to env vars and TOML.
        """
        toml_path: Path | None = None
        if config_path:
            candidate = Path(config_path)
            if candidate.is_file():
                toml_path = candidate
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **{k: v for k, v in cli_flags.items() if v})
        finally:
            _tls.toml_path = None
