"""System tag policy configuration."""

from __future__ import annotations

from tagvault.domain.model.tags import SystemTagFilter

from .env import optional_env_var
from .errors import InvalidConfigurationValueError

DEFAULT_PLATFORM = "aws"


def get_system_tag_filter() -> SystemTagFilter:
    """Build the system tag filter for the configured platform.

    ``TAGVAULT_PLATFORM`` selects a built-in policy and
    ``TAGVAULT_EXTRA_SYSTEM_TAG_PREFIXES`` (comma separated) widens it.
    """

    platform = optional_env_var("TAGVAULT_PLATFORM") or DEFAULT_PLATFORM
    try:
        policy = SystemTagFilter.for_platform(platform)
    except KeyError as exc:
        raise InvalidConfigurationValueError(
            "TAGVAULT_PLATFORM", platform, "unknown platform"
        ) from exc

    extra = optional_env_var("TAGVAULT_EXTRA_SYSTEM_TAG_PREFIXES")
    if extra is None:
        return policy
    prefixes = tuple(prefix.strip() for prefix in extra.split(",") if prefix.strip())
    return policy.with_prefixes(*prefixes)
