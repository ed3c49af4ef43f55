import logging
import time
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .client import BTZPayClient
from .errors import FailureKind, GatewayError, PollingTimeoutError
from .models import TransactionRecord, TransactionRequest, TransactionStatus

logger = logging.getLogger(__name__)


def _to_record(data: Dict[str, Any]) -> TransactionRecord:
    try:
        return TransactionRecord.model_validate(data)
    except PydanticValidationError as e:
        raise GatewayError(
            f"Unrecognised transaction data: {e.error_count()} invalid field(s)",
            response_body=data,
            kind=FailureKind.INVALID_RESPONSE,
        ) from e


def format_rupiah(amount: Union[int, float]) -> str:
    """Format an IDR amount the way the gateway shows it, e.g. ``Rp12.000``."""
    return "Rp" + f"{int(round(amount)):,}".replace(",", ".")


def wait_for_payment(
    client: BTZPayClient,
    transaction_id: str,
    access_key: str,
    *,
    interval_s: float = 2.0,
    max_attempts: int = 30,
    on_update: Optional[Callable[[TransactionRecord], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> TransactionRecord:
    """Poll a transaction until it leaves ``pending``.

    Gateway errors on a single check, including data with a status this
    client does not know, are logged and polling continues; the status is
    only final once the gateway reports a terminal one.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            record = _to_record(client.get_transaction(transaction_id, access_key))
        except GatewayError as e:
            logger.warning("Check %d/%d for %s failed: %s", attempt, max_attempts, transaction_id, e)
        else:
            logger.debug("Check %d/%d for %s: %s", attempt, max_attempts, transaction_id, record.status.value)
            if on_update is not None:
                on_update(record)
            if record.is_terminal:
                return record
        if attempt < max_attempts:
            sleep(interval_s)
    raise PollingTimeoutError(transaction_id, max_attempts)


def create_transaction_with_retry(
    client: BTZPayClient,
    request: TransactionRequest,
    *,
    max_retries: int = 3,
    backoff_s: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """Create a transaction, retrying network failures, 429 and 5xx.

    Waits ``backoff_s * 2 ** (attempt - 1)`` between attempts. Validation
    errors and other 4xx responses are raised on the first attempt.
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")
    attempt = 1
    while True:
        try:
            return client.create_transaction(request)
        except GatewayError as e:
            if not e.is_retryable or attempt >= max_retries:
                raise
            delay = backoff_s * 2 ** (attempt - 1)
            logger.warning("Create attempt %d/%d failed (%s), retrying in %.1fs", attempt, max_retries, e, delay)
            sleep(delay)
        attempt += 1


def cancel_if_pending(
    client: BTZPayClient,
    transaction_id: str,
    access_key: str,
    reason: str = "auto_cancel_timeout",
) -> TransactionStatus:
    """Cancel a transaction only if the gateway still reports it as pending."""
    record = _to_record(client.get_transaction(transaction_id, access_key))
    if record.status is not TransactionStatus.PENDING:
        return record.status
    result = client.cancel_transaction(transaction_id, reason=reason)
    status = result.get("status") or TransactionStatus.CANCEL.value
    try:
        return TransactionStatus(status)
    except ValueError as e:
        raise GatewayError(
            f"Unrecognised status after cancel: {status!r}", response_body=result, kind=FailureKind.INVALID_RESPONSE
        ) from e
