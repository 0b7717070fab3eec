"""Remote service endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import InvalidConfigurationValueError

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class EndpointsConfig:
    tagging_url: str
    secrets_url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def get_endpoints_config() -> EndpointsConfig:
    values = require_env_vars(("TAGVAULT_TAGGING_ENDPOINT", "TAGVAULT_SECRETS_ENDPOINT"))
    return EndpointsConfig(
        tagging_url=values["TAGVAULT_TAGGING_ENDPOINT"],
        secrets_url=values["TAGVAULT_SECRETS_ENDPOINT"],
        timeout_seconds=_parse_timeout(optional_env_var("TAGVAULT_TIMEOUT_SECONDS")),
    )


def _parse_timeout(raw: str | None) -> float:
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidConfigurationValueError(
            "TAGVAULT_TIMEOUT_SECONDS", raw, "not a number"
        ) from exc
    if value <= 0:
        raise InvalidConfigurationValueError("TAGVAULT_TIMEOUT_SECONDS", raw, "must be positive")
    return value
