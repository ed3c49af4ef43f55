"""Error types raised by the BTZPay client.

Every error derives from `BTZPayError`, so callers that only care whether a
payment call went through can catch that one type. `GatewayError` carries the
HTTP context (status code, response body) for branching on 400/429/5xx.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class BTZPayError(RuntimeError):
    pass


class ConfigurationError(BTZPayError):
    """Required client configuration is missing."""


class ValidationError(BTZPayError):
    """A call argument is missing or invalid. Raised before any network I/O."""


class FailureKind(str, Enum):
    HTTP = "http"
    NETWORK = "network"
    REJECTED = "rejected"
    INVALID_RESPONSE = "invalid_response"


class GatewayError(BTZPayError):
    """Failure at the HTTP boundary.

    Args:
        message: Human-readable error description.
        http_status: HTTP status code, ``None`` when no response was received.
        response_body: Parsed JSON body (or raw text) of the failed response.
        kind: Which class of failure produced this error.
    """

    def __init__(
        self,
        message: str,
        *,
        http_status: Optional[int] = None,
        response_body: Any = None,
        kind: FailureKind = FailureKind.HTTP,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.response_body = response_body
        self.kind = kind

    @property
    def is_retryable(self) -> bool:
        if self.kind == FailureKind.NETWORK:
            return True
        return self.http_status is not None and (self.http_status == 429 or self.http_status >= 500)

    def __repr__(self) -> str:
        return f"GatewayError({self.message!r}, http_status={self.http_status!r}, kind={self.kind.value!r})"


class PollingTimeoutError(BTZPayError):
    """A transaction did not reach a terminal status within the polling budget."""

    def __init__(self, transaction_id: str, attempts: int) -> None:
        super().__init__(f"Transaction {transaction_id} still pending after {attempts} checks")
        self.transaction_id = transaction_id
        self.attempts = attempts
