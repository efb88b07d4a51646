"""Settings for one pfm invocation.

Values are merged from, highest priority first: CLI flags, ``PFM_*``
environment variables (``PFM_SERVICE__BASE_URL`` reaches into the
``[service]`` table), the discovered ``pfm.toml`` and the defaults baked
into :mod:`pfm.config.models`.  Any validation failure surfaces as a
:class:`click.ClickException` naming the offending keys.
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pfm.config.discovery import locate_config
from pfm.config.models import ServiceConfig


_log = logging.getLogger(__name__)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings read from ``pfm.toml``.

    Only top-level keys that name a settings field are passed on; anything
    else is logged and dropped so a stray table does not abort the run.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        known = set(settings_cls.model_fields)
        for key, value in _read_toml(toml_path).items():
            if key in known:
                self._data[key] = value
            else:
                _log.warning("ignoring unknown key %r in %s", key, toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PfmSettings(BaseSettings):
    """Unified settings for the pfm CLI.

    Built once by the root command and passed explicitly to the
    :class:`~pfm.commands._context.AppContext`; nothing reads it from
    module globals.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        verbosity: Count of ``-v`` flags (0 warnings only, 1 info, 2+ debug).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PFM_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbosity: int = Field(default=0, ge=0)
    log_json: bool = False

    # --- TOML sections ---
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    @property
    def verbose(self) -> bool:
        return self.verbosity > 0

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
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        **cli_flags: Any,
    ) -> PfmSettings:
        """Construct settings from a CLI invocation.

        The file comes from :func:`~pfm.config.discovery.locate_config`
        (*config_path*, then ``$PFM_CONFIG``, then walk-up from *start_dir*)
        and CLI flags are merged as highest-priority overrides.
        ``--base-url`` / ``--timeout`` patch the ``[service]`` section
        without discarding its other keys.
        """
        toml_path = locate_config(config_path, start_dir)

        _tls.toml_path = toml_path
        try:
            settings = cls(config_path=toml_path, **cli_flags)
        except ValidationError as exc:
            raise click.ClickException(_describe_invalid(exc, toml_path)) from exc
        finally:
            _tls.toml_path = None

        overrides: dict[str, Any] = {}
        if base_url is not None:
            overrides["base_url"] = base_url
        if timeout_seconds is not None:
            overrides["timeout_seconds"] = timeout_seconds
        if overrides:
            try:
                service = ServiceConfig.model_validate(
                    {**settings.service.model_dump(), **overrides}
                )
            except ValidationError as exc:
                raise click.ClickException(_describe_invalid(exc, None)) from exc
            settings = settings.model_copy(update={"service": service})
        return settings


def _describe_invalid(exc: ValidationError, toml_path: Path | None) -> str:
    where = f" (config: {toml_path})" if toml_path else ""
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return f"Invalid configuration{where}: {problems}"
