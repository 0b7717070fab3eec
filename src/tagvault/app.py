"""Application wiring: build services from configuration."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from tagvault.adapters.mediapackage import MediaPackageTaggingClient
from tagvault.adapters.secretsmanager import SecretsManagerClient
from tagvault.config import (
    ResilienceConfig,
    get_endpoints_config,
    get_system_tag_filter,
)
from tagvault.domain.reconciliation import TagReconciler
from tagvault.domain.resolution import SecretResolver
from tagvault.ephemeral import EphemeralSecret
from tagvault.service import TaggingService

if TYPE_CHECKING:
    import httpx

    from tagvault.config import EndpointsConfig
    from tagvault.domain.model.tags import SystemTagFilter
    from tagvault.domain.ports import SecretsTransport, TaggingTransport

log = getLogger(__name__)


def build_tagging_transport(
    endpoints: EndpointsConfig, *, auth: httpx.Auth | None = None
) -> MediaPackageTaggingClient:
    return MediaPackageTaggingClient(
        ResilienceConfig(
            name="mediapackage",
            base_url=endpoints.tagging_url,
            timeout_seconds=endpoints.timeout_seconds,
            auth=auth,
        )
    )


def build_secrets_transport(
    endpoints: EndpointsConfig, *, auth: httpx.Auth | None = None
) -> SecretsManagerClient:
    return SecretsManagerClient(
        ResilienceConfig(
            name="secretsmanager",
            base_url=endpoints.secrets_url,
            timeout_seconds=endpoints.timeout_seconds,
            auth=auth,
        )
    )


def build_tagging_service(
    *,
    transport: TaggingTransport | None = None,
    system_filter: SystemTagFilter | None = None,
    auth: httpx.Auth | None = None,
) -> TaggingService:
    """Build the tagging service, reading missing collaborators from the environment."""

    effective_transport = transport or build_tagging_transport(get_endpoints_config(), auth=auth)
    effective_filter = system_filter or get_system_tag_filter()
    log.debug("Tagging service ready: system prefixes=%s", effective_filter.prefixes)
    return TaggingService(TagReconciler(effective_transport, effective_filter))


def build_ephemeral_secret(
    *,
    transport: SecretsTransport | None = None,
    auth: httpx.Auth | None = None,
) -> EphemeralSecret:
    effective_transport = transport or build_secrets_transport(get_endpoints_config(), auth=auth)
    return EphemeralSecret(SecretResolver(effective_transport))
