"""Resolve a secret name plus version selector to one fetched secret version."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import SecretBytes, SecretStr

from .errors import SecretReadError
from .model.secrets import FetchedSecret, VersionSelector, compose_identifier, select_version
from .ports.secrets import GetSecretValueInput

if TYPE_CHECKING:
    from .context import InvocationContext
    from .ports.secrets import GetSecretValueOutput, SecretsTransport

log = getLogger(__name__)


def build_request(secret_name: str, selector: VersionSelector) -> GetSecretValueInput:
    return GetSecretValueInput(
        secret_id=secret_name,
        version_id=selector.version_id,
        version_stage=selector.version_stage,
    )


def translate_output(output: GetSecretValueOutput) -> FetchedSecret:
    return FetchedSecret(
        arn=output.arn or "",
        created_date=output.created_date,
        secret_binary=SecretBytes(output.secret_binary or b""),
        secret_string=SecretStr(output.secret_string or ""),
        name=output.name,
        version_id=output.version_id,
        version_stages=output.version_stages,
    )


@dataclass(slots=True, frozen=True)
class SecretResolver:
    transport: SecretsTransport

    @staticmethod
    def select_version(
        raw_version_id: str | None, raw_version_stage: str | None
    ) -> VersionSelector:
        return select_version(raw_version_id, raw_version_stage)

    @staticmethod
    def compose_identifier(secret_name: str, selector: VersionSelector) -> str:
        return compose_identifier(secret_name, selector)

    def fetch(
        self,
        ctx: InvocationContext,
        secret_name: str,
        selector: VersionSelector,
    ) -> FetchedSecret:
        identifier = compose_identifier(secret_name, selector)
        request = build_request(secret_name, selector)
        log.debug("Reading secret version %s", identifier)
        try:
            output = self.transport.get_secret_value(ctx, request)
        except Exception as exc:
            raise SecretReadError(identifier, exc) from exc
        return translate_output(output)
