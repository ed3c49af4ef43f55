"""Client for the BTZPay QRIS payment gateway."""

import logging

from .client import BTZPayClient
from .config import ClientConfig, Config
from .errors import (
    BTZPayError,
    ConfigurationError,
    FailureKind,
    GatewayError,
    PollingTimeoutError,
    ValidationError,
)
from .models import (
    CallbackRequest,
    CustomerInfo,
    TransactionRecord,
    TransactionRequest,
    TransactionStatus,
    WebhookPayload,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BTZPayClient",
    "BTZPayError",
    "CallbackRequest",
    "ClientConfig",
    "Config",
    "ConfigurationError",
    "CustomerInfo",
    "FailureKind",
    "GatewayError",
    "PollingTimeoutError",
    "TransactionRecord",
    "TransactionRequest",
    "TransactionStatus",
    "ValidationError",
    "WebhookPayload",
]
