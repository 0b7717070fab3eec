"""Error types shared by the reconciler, the resolver and their transports."""

from __future__ import annotations


class TagVaultError(RuntimeError):
    """Base class for tagvault runtime errors."""


class TransportError(TagVaultError):
    """Raised by a transport when a remote call fails."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class SecretNotFoundError(TransportError):
    """Raised when the requested secret or secret version does not exist."""


class ContextExpiredError(TagVaultError):
    """Raised when an invocation context was cancelled or its deadline passed."""


class TransportFailure(TagVaultError):
    """A remote call failed while performing ``operation`` on ``identifier``.

    The message carries the identifier and the cause text verbatim so that
    failures can be correlated with transport logs.
    """

    def __init__(self, operation: str, identifier: str, cause: BaseException) -> None:
        super().__init__(f"{operation} ({identifier}): {cause}")
        self.operation = operation
        self.identifier = identifier
        self.cause = cause


class SecretReadError(TransportFailure):
    """Fetching a secret version failed."""

    def __init__(self, identifier: str, cause: BaseException) -> None:
        super().__init__("failed reading secret", identifier, cause)
