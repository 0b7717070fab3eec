"""Domain port definitions for adapters."""

from __future__ import annotations

from .secrets import GetSecretValueInput, GetSecretValueOutput, SecretsTransport
from .tagging import TaggingTransport

__all__ = [
    "GetSecretValueInput",
    "GetSecretValueOutput",
    "SecretsTransport",
    "TaggingTransport",
]
