"""Processing for the notifications the gateway sends to a merchant.

The gateway POSTs ``{pay_id, unique_code, status, raw}`` to the transaction's
``callback_url`` whenever its status changes. Whatever happens while handling
it, the receiver must acknowledge with success, otherwise the gateway keeps
redelivering. Serving the HTTP endpoint is left to the application.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from .models import TransactionRecord, TransactionStatus, WebhookPayload

logger = logging.getLogger(__name__)

WebhookHandler = Callable[[WebhookPayload], None]

ACK: Dict[str, bool] = {"success": True}


class TransactionStore(Protocol):
    def get(self, transaction_id: str) -> Optional[TransactionRecord]: ...

    def save(self, record: TransactionRecord) -> None: ...


class InMemoryTransactionStore:
    """Dict-backed store, for demos and tests."""

    def __init__(self) -> None:
        self._records: Dict[str, TransactionRecord] = {}
        self._lock = Lock()

    def get(self, transaction_id: str) -> Optional[TransactionRecord]:
        with self._lock:
            return self._records.get(transaction_id)

    def save(self, record: TransactionRecord) -> None:
        with self._lock:
            self._records[record.transaction_id] = record

    def all(self) -> List[TransactionRecord]:
        with self._lock:
            return list(self._records.values())


class WebhookProcessor:
    def __init__(self, store: TransactionStore) -> None:
        self.store = store
        self._handlers: Dict[TransactionStatus, List[WebhookHandler]] = {}

    def on(self, status: Union[TransactionStatus, str], handler: WebhookHandler) -> None:
        self._handlers.setdefault(TransactionStatus(status), []).append(handler)

    def process(self, payload: Union[WebhookPayload, Dict[str, Any]]) -> Dict[str, bool]:
        """Apply a webhook to the store and run its status handlers.

        Always returns the success acknowledgement; failures are logged.
        """
        try:
            event = payload if isinstance(payload, WebhookPayload) else WebhookPayload.model_validate(payload)
            logger.info("Webhook received pay_id=%s status=%s", event.pay_id, event.status.value)
            self._update_store(event)
            for handler in self._handlers.get(event.status, []):
                handler(event)
        except Exception:
            logger.exception("Webhook processing failed; acknowledging anyway")
        return dict(ACK)

    def _update_store(self, event: WebhookPayload) -> None:
        stored = self.store.get(event.pay_id)
        if stored is None:
            logger.debug("Webhook for unknown transaction %s", event.pay_id)
            return
        update: Dict[str, Any] = {"status": event.status}
        data = event.raw.data if event.raw else None
        if data is not None and data.paid_at:
            update["paid_at"] = data.paid_at
        self.store.save(stored.model_copy(update=update))
