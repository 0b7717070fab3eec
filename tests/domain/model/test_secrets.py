from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import SecretBytes, SecretStr

from tagvault.domain.model.secrets import (
    FetchedSecret,
    SelectorKind,
    VersionSelector,
    compose_identifier,
    select_version,
)


def test_select_version_precedence() -> None:
    assert select_version("v1", "STAGE") == VersionSelector.by_version_id("v1")
    assert select_version("", "STAGE") == VersionSelector.by_version_stage("STAGE")
    assert select_version(None, "STAGE") == VersionSelector.by_version_stage("STAGE")
    assert select_version("", "") == VersionSelector.none()
    assert select_version(None, None).kind is SelectorKind.NONE


def test_selector_exposes_only_its_own_field() -> None:
    by_id = VersionSelector.by_version_id("v1")
    by_stage = VersionSelector.by_version_stage("AWSCURRENT")

    assert (by_id.version_id, by_id.version_stage) == ("v1", None)
    assert (by_stage.version_id, by_stage.version_stage) == (None, "AWSCURRENT")


def test_selector_rejects_inconsistent_values() -> None:
    with pytest.raises(ValueError, match="cannot carry a value"):
        VersionSelector(SelectorKind.NONE, "v1")
    with pytest.raises(ValueError, match="requires a non-empty value"):
        VersionSelector(SelectorKind.VERSION_ID, "")


def test_compose_identifier_is_stable_and_kind_specific() -> None:
    by_id = compose_identifier("secretA", VersionSelector.by_version_id("v1"))

    assert by_id == compose_identifier("secretA", VersionSelector.by_version_id("v1"))
    assert by_id != compose_identifier("secretA", VersionSelector.by_version_stage("v1"))
    assert by_id == "secretA|version_id:v1"
    assert compose_identifier("secretA", VersionSelector.none()) == "secretA|"


def test_fetched_secret_masks_payloads() -> None:
    secret = FetchedSecret(
        arn="arn:aws:secretsmanager:eu-west-1:1:secret:x",
        secret_binary=SecretBytes(b"binary-value"),
        secret_string=SecretStr("string-value"),
    )

    rendered = f"{secret!r} {secret} {secret.model_dump_json()}"

    assert "binary-value" not in rendered
    assert "string-value" not in rendered
    assert secret.secret_string.get_secret_value() == "string-value"


def test_fetched_secret_defaults_to_empty_payloads() -> None:
    secret = FetchedSecret(arn="arn")

    assert secret.secret_binary.get_secret_value() == b""
    assert secret.secret_string.get_secret_value() == ""
    assert secret.created_date_rfc3339() == ""


def test_created_date_rendered_as_utc_rfc3339() -> None:
    created = datetime(2024, 3, 1, 14, 30, 45, tzinfo=timezone(timedelta(hours=2)))

    assert FetchedSecret(arn="arn", created_date=created).created_date_rfc3339() == (
        "2024-03-01T12:30:45Z"
    )
