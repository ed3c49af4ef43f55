"""Request and response records for the BTZPay QRIS API.

Attributes are snake_case; the gateway's wire names (camelCase, plus a few
snake_case URL fields) are declared as aliases. Request models forbid extra
keys so a typo never reaches the gateway as an unexpected field.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TransactionStatus(str, Enum):
    PENDING = "pending"
    SUKSES = "sukses"
    GAGAL = "gagal"
    EXPIRED = "expired"
    CANCEL = "cancel"

    @property
    def is_terminal(self) -> bool:
        return self is not TransactionStatus.PENDING


class CustomerInfo(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class TransactionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # presence is checked by the client; range checks are left to the gateway
    amount: Optional[Union[int, float, str]] = None
    fee: Optional[Union[int, float]] = None
    payment_method_id: Optional[str] = Field(default=None, alias="paymentMethodId")
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")
    qris_static: Optional[str] = Field(default=None, alias="qrisStatic")
    timeout: Optional[int] = Field(default=None, description="Transaction expiry in ms (60000-3600000)")
    callback_url: Optional[str] = None
    return_url: Optional[str] = None
    notes: Optional[str] = Field(default=None, description="Up to 2000 characters")
    customer_info: Optional[CustomerInfo] = Field(default=None, alias="customerInfo")
    metadata: Optional[Dict[str, Any]] = None
    macro_droid_config: Optional[Dict[str, Any]] = Field(default=None, alias="macroDroidConfig")
    account_number: Optional[str] = Field(default=None, alias="accountNumber")
    account_name: Optional[str] = Field(default=None, alias="accountName")
    bank_code: Optional[str] = Field(default=None, alias="bankCode")
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")

    def to_payload(self, apikey: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"apikey": apikey}
        payload.update(self.model_dump(by_alias=True, exclude_none=True))
        return payload


class CallbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    action: Optional[str] = None
    app: Optional[str] = None
    notification: Optional[str] = None
    amount: Optional[Union[int, float]] = None
    app_version_code: Optional[int] = Field(default=None, alias="appVersionCode")

    def to_payload(self, apikey: str) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True, exclude_none=True)
        payload["apikey"] = apikey
        return payload


class TransactionRecord(BaseModel):
    """Read-only view of a transaction as the gateway reports it."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    transaction_id: str = Field(alias="transactionId")
    access_key: Optional[str] = Field(default=None, alias="accessKey")
    amount: Union[int, float] = 0
    fee: Union[int, float] = 0
    total_amount: Optional[Union[int, float]] = Field(default=None, alias="totalAmount")
    status: TransactionStatus = TransactionStatus.PENDING
    payment_url: Optional[str] = Field(default=None, alias="paymentUrl")
    qris_string: Optional[str] = Field(default=None, alias="qrisString")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    expired_at: Optional[str] = Field(default=None, alias="expiredAt")
    paid_at: Optional[str] = Field(default=None, alias="paidAt")
    metadata: Optional[Dict[str, Any]] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class WebhookData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    transaction_id: str = Field(alias="transactionId")
    amount: Optional[Union[int, float]] = None
    status: Optional[TransactionStatus] = None
    paid_at: Optional[str] = Field(default=None, alias="paidAt")
    expired_at: Optional[str] = Field(default=None, alias="expiredAt")
    order_id: Optional[str] = Field(default=None, alias="orderId")
    product_name: Optional[str] = Field(default=None, alias="productName")
    reason: Optional[str] = None
    notes: Optional[str] = None
    return_url: Optional[str] = None


class WebhookRaw(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = True
    message: Optional[str] = None
    data: Optional[WebhookData] = None


class WebhookPayload(BaseModel):
    """Notification the gateway POSTs to the merchant's callback_url."""

    model_config = ConfigDict(extra="allow")

    pay_id: str
    unique_code: Optional[Union[str, int]] = None
    status: TransactionStatus
    raw: Optional[WebhookRaw] = None
