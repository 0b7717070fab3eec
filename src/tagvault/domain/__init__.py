"""Core domain: tag reconciliation and versioned secret resolution."""

from __future__ import annotations

from .context import InvocationContext
from .errors import (
    ContextExpiredError,
    SecretNotFoundError,
    SecretReadError,
    TagVaultError,
    TransportError,
    TransportFailure,
)
from .reconciliation import TagReconciler
from .resolution import SecretResolver

__all__ = [
    "ContextExpiredError",
    "InvocationContext",
    "SecretNotFoundError",
    "SecretReadError",
    "SecretResolver",
    "TagReconciler",
    "TagVaultError",
    "TransportError",
    "TransportFailure",
]
