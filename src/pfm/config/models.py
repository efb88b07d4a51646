"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pfm.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

DEFAULT_BASE_URL = "https://api.easyportfol.io"


class ServiceConfig(BaseModel):
    """[service] section — how to reach pfd."""

    model_config = {"frozen": True}

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0)
    token: SecretStr | None = None
