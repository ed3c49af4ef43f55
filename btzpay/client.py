import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from . import transport
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, ClientConfig, Config
from .errors import ValidationError
from .models import CallbackRequest, TransactionRequest

logger = logging.getLogger(__name__)


class BTZPayClient:
    """BTZPay QRIS client.

    Uses the documented endpoints:
      - POST /api/qris/create
      - GET  /api/qris/transaction/:transactionId?key=ACCESS_KEY
      - POST /api/qris/cancel/:transactionId
      - POST /api/qris/callback

    Every call issues at most one request. Nothing is cached or retried; see
    `btzpay.payment_utils` for polling and retry helpers built on top.
    """

    def __init__(
        self,
        apikey: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        *,
        session: Optional[requests.Session] = None,
    ):
        self.config = ClientConfig(apikey=apikey, base_url=base_url, timeout_ms=timeout_ms)
        self._owns_session = session is None
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: ClientConfig, *, session: Optional[requests.Session] = None) -> "BTZPayClient":
        return cls(config.apikey, config.base_url, config.timeout_ms, session=session)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "BTZPayClient":
        Config.load(env_file)
        return cls.from_config(Config.client_config())

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "BTZPayClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        result = transport.send(
            self._session, "POST", f"{self.base_url}{path}", json=payload, timeout_s=self.config.timeout_s
        )
        return result.unwrap()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        result = transport.send(
            self._session, "GET", f"{self.base_url}{path}", params=params, timeout_s=self.config.timeout_s
        )
        return result.unwrap()

    def create_transaction(self, request: Optional[TransactionRequest] = None, **fields: Any) -> Dict[str, Any]:
        """Create a QRIS transaction.

        Accepts either a `TransactionRequest` or its fields as keyword
        arguments (snake_case or the gateway's camelCase names). Returns the
        `data` object of the gateway response unchanged, which includes the
        `transactionId` and `accessKey` needed for later lookups.
        """
        if request is None:
            try:
                request = TransactionRequest(**fields)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid transaction request: {e}") from e
        elif fields:
            raise ValidationError("Pass either a TransactionRequest or keyword fields, not both")

        if not request.amount:
            raise ValidationError("Amount is required")

        logger.info("Creating BTZPay transaction amount=%s method=%s", request.amount, request.payment_method)
        data = self._post("/api/qris/create", request.to_payload(self.config.apikey))
        return data.get("data") or {}

    def get_transaction(self, transaction_id: str, access_key: str) -> Dict[str, Any]:
        if not transaction_id or not access_key:
            raise ValidationError("Transaction ID and access key are required")
        data = self._get(f"/api/qris/transaction/{transaction_id}", params={"key": access_key})
        return data.get("data") or {}

    def cancel_transaction(self, transaction_id: str, reason: str = "cancelled_by_user") -> Dict[str, Any]:
        if not transaction_id:
            raise ValidationError("Transaction ID is required")
        logger.info("Cancelling BTZPay transaction %s reason=%s", transaction_id, reason)
        payload = {"apikey": self.config.apikey, "reason": reason}
        data = self._post(f"/api/qris/cancel/{transaction_id}", payload)
        return data.get("data") or {}

    def send_callback(
        self,
        action: str,
        app: str,
        notification: str,
        amount: Optional[float] = None,
        app_version_code: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Relay a payment-app notification to the gateway.

        This simulates the payment listener reporting an incoming transfer;
        the gateway matches it to a pending transaction. It does not receive
        merchant webhooks.
        """
        if action != "update":
            raise ValidationError('Action must be "update"')
        if not app or not notification:
            raise ValidationError("App and notification are required")
        try:
            request = CallbackRequest(
                action=action,
                app=app,
                notification=notification,
                amount=amount,
                app_version_code=app_version_code,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid callback request: {e}") from e

        data = self._post("/api/qris/callback", request.to_payload(self.config.apikey))
        return data.get("data") or {}

    def get_payment_url(self, transaction_id: str, access_key: str) -> str:
        if not transaction_id or not access_key:
            raise ValidationError("Transaction ID and access key are required")
        return f"{self.base_url}/transaction/{transaction_id}?key={access_key}"

    def verify_callback(self, payload: Any, signature: Optional[str]) -> bool:
        """Always returns True.

        The gateway does not document a webhook signature scheme, so nothing is
        verified here. Do not rely on this to authenticate webhooks.
        """
        logger.warning("BTZPay callback signature verification is not implemented; accepting payload")
        return True
