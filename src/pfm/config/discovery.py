"""Where pfm finds its ``pfm.toml``.

Lookup order: the ``-c/--config`` flag, then ``$PFM_CONFIG``, then the
first ``pfm.toml`` in the working directory or any of its parents.  A file
named explicitly, by flag or by variable, has to exist; only the walk-up
is allowed to come back empty.
"""

from __future__ import annotations

import os
from pathlib import Path

import click

CONFIG_FILENAME = "pfm.toml"
CONFIG_ENV_VAR = "PFM_CONFIG"


def locate_config(
    explicit: str | Path | None = None,
    start: Path | None = None,
) -> Path | None:
    """Return the config file to load, or ``None`` to run on defaults.

    Raises:
        click.ClickException: *explicit* or ``$PFM_CONFIG`` names a path
            that is not a regular file.
    """
    if explicit:
        return _require_file(Path(explicit), "--config")

    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return _require_file(Path(from_env), CONFIG_ENV_VAR)

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _require_file(path: Path, source: str) -> Path:
    if not path.is_file():
        msg = f"Config file from {source} not found: {path}"
        raise click.ClickException(msg)
    return path
