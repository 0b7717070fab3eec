from __future__ import annotations

import pytest

from tagvault.domain.context import InvocationContext
from tagvault.domain.model.tags import SystemTagFilter
from tagvault.domain.ports.secrets import GetSecretValueOutput
from tagvault.domain.reconciliation import TagReconciler
from tagvault.domain.resolution import SecretResolver

from tests.support.transports import (
    CREATED_AT,
    SECRET_ARN,
    RecordingTaggingTransport,
    StubSecretsTransport,
)


@pytest.fixture
def ctx() -> InvocationContext:
    return InvocationContext.background()


@pytest.fixture
def aws_filter() -> SystemTagFilter:
    return SystemTagFilter.for_platform("aws")


@pytest.fixture
def tagging_transport() -> RecordingTaggingTransport:
    return RecordingTaggingTransport()


@pytest.fixture
def reconciler(
    tagging_transport: RecordingTaggingTransport, aws_filter: SystemTagFilter
) -> TagReconciler:
    return TagReconciler(tagging_transport, aws_filter)


@pytest.fixture
def secrets_transport() -> StubSecretsTransport:
    return StubSecretsTransport(
        output=GetSecretValueOutput(
            arn=SECRET_ARN,
            name="s1",
            version_id="v9",
            created_date=CREATED_AT,
            secret_binary=None,
            secret_string="hello",
            version_stages=("AWSCURRENT",),
        )
    )


@pytest.fixture
def resolver(secrets_transport: StubSecretsTransport) -> SecretResolver:
    return SecretResolver(secrets_transport)
