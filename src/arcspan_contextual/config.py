# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Global and per-account configuration for the contextual hook.

Both blobs arrive from the host as JSON. ``GlobalConfig`` is parsed once at
start-up and then shared read-only; ``AccountConfig`` is parsed on every
invocation and discarded afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

DEFAULT_ENDPOINT = "http://pbs{{.SILO}}.p7cloud.net/ctx"
SILO_PLACEHOLDER = "{{.SILO}}"
DEFAULT_TIMEOUT = 1.0

ConfigBlob = bytes | str | Mapping[str, Any]


class WrapperFormat(StrEnum):
    """Framing around the JSON body returned by the classification service."""

    NONE = "none"  # plain JSON
    JSONP = "jsonp"  # aspan.setIAB({...})


def _load(model: type[BaseModel], blob: ConfigBlob, what: str) -> Any:
    try:
        if isinstance(blob, (bytes, str)):
            return model.model_validate_json(blob)
        return model.model_validate(blob)
    except ValidationError as e:
        raise ConfigError(f"Error reading {what} ({e.error_count()} validation error(s))") from e


class GlobalConfig(BaseModel):
    """Process-wide settings, resolved once when the module is built."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    endpoint: str = Field(DEFAULT_ENDPOINT, description="URL template containing {{.SILO}}")
    wrapper: WrapperFormat = Field(WrapperFormat.NONE, description="Response framing strategy")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Fetch deadline in seconds")

    @classmethod
    def from_json(cls, blob: ConfigBlob | None) -> GlobalConfig:
        """Parse the global config blob; ``None`` yields the defaults.

        An empty ``endpoint`` is treated as absent, so hosts may ship
        ``{"enabled": true}`` without overriding the template.
        """
        if blob is None:
            return cls()
        config = _load(cls, blob, "global config")
        if not config.endpoint:
            config = config.model_copy(update={"endpoint": DEFAULT_ENDPOINT})
        return config

    def endpoint_for(self, silo: str) -> str:
        """Substitute *silo* into the first placeholder of the endpoint template."""
        return self.endpoint.replace(SILO_PLACEHOLDER, silo, 1)


class AccountConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    silo: str = ""

    @classmethod
    def from_json(cls, blob: ConfigBlob | None) -> AccountConfig:
        if blob is None:
            raise ConfigError("No account configuration provided")
        config = _load(cls, blob, "account information")
        if not config.silo:
            raise ConfigError("Invalid silo ID provided")
        return config
