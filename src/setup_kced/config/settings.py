"""Unified settings — CLI flags, action inputs, env vars, and TOML in one object.

Priority chain (highest to lowest):
  1. Init kwargs   — CLI flags passed by Click
  2. Action inputs — ``INPUT_KCED-VERSION``, ``INPUT_TOKEN``, ``INPUT_WRAPPER``
  3. Env vars      — ``SETUP_KCED_*`` prefix
  4. TOML file     — ``setup-kced.toml`` discovered via walk-up
  5. Code defaults — baked into the section models

Uses Pydantic Settings v2 with two custom sources: :class:`ActionInputsSource`
for the runner's ``INPUT_*`` variables and :class:`TomlSettingsSource`, which
reuses the ``find_config`` walk-up discovery from
:mod:`setup_kced.config.discovery`.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from setup_kced.config.discovery import find_config
from setup_kced.config.inputs import read_input
from setup_kced.config.models import ArtifactConfig, CacheConfig, HttpConfig, ReleaseConfig

# Action input name -> settings field name.
ACTION_INPUTS: dict[str, str] = {
    "kced-version": "kced_version",
    "token": "token",
    "wrapper": "wrapper",
}


class ActionInputsSource(PydanticBaseSettingsSource):
    """Read the action's ``with:`` inputs from ``INPUT_*`` variables.

    Empty inputs are treated as not supplied so lower-priority sources still
    apply. ``wrapper`` is only enabled by the literal string ``true``.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        for input_name, field_name in ACTION_INPUTS.items():
            value = read_input(input_name)
            if not value:
                continue
            self._data[field_name] = value == "true" if field_name == "wrapper" else value
        if "token" not in self._data and os.environ.get("GITHUB_TOKEN"):
            self._data["token"] = os.environ["GITHUB_TOKEN"]

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._data


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``setup-kced.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class SetupSettings(BaseSettings):
    """Unified settings for one setup-kced invocation.

    Stored on the :class:`~setup_kced.commands._context.AppContext` created by
    the root CLI group.

    Attributes:
        kced_version: Requested version; empty means "latest release".
        token: API token for the releases listing.
        wrapper: Install the output-capturing wrapper after the binary.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SETUP_KCED_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- Action inputs ---
    kced_version: str = ""
    token: SecretStr = SecretStr("")
    wrapper: bool = False

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    artifact: ArtifactConfig = Field(default_factory=ArtifactConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert action inputs above env vars and TOML below them."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            ActionInputsSource(settings_cls),
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> SetupSettings:
        """Construct settings from a CLI invocation.

        Discovers ``setup-kced.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides. Flags passed as ``None`` are left to the other sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        overrides = {k: v for k, v in cli_flags.items() if v is not None}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
