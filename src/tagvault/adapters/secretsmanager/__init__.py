"""Secrets Manager adapter package."""

from __future__ import annotations

from .client import SecretsManagerClient
from .schema import ErrorResponse, GetSecretValueRequest, GetSecretValueResponse
from .translator import translate_request, translate_response

__all__ = [
    "ErrorResponse",
    "GetSecretValueRequest",
    "GetSecretValueResponse",
    "SecretsManagerClient",
    "translate_request",
    "translate_response",
]
