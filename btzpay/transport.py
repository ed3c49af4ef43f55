"""Single request-issuing function shared by every client operation.

`send` never raises for HTTP-level outcomes: it returns a `Success` or a
`Failure` and leaves the decision to the caller. `Result.unwrap()` is the one
place where a failure turns into a `GatewayError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from .errors import FailureKind, GatewayError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class Success:
    status: int
    body: Dict[str, Any]

    def unwrap(self) -> Dict[str, Any]:
        return self.body


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    status: Optional[int] = None
    body: Any = None

    def unwrap(self) -> Dict[str, Any]:
        raise GatewayError(self.message, http_status=self.status, response_body=self.body, kind=self.kind)


Result = Union[Success, Failure]


def _parse_body(r: requests.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return r.text


def send(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout_s: float,
    json: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
) -> Result:
    """Issue one HTTP request and classify the outcome.

    Timeouts and connection failures become a NETWORK failure with no status.
    Any other `requests` exception (bad URL, invalid schema, ...) propagates.
    """
    logger.debug("BTZPay %s %s", method, url)
    try:
        r = session.request(method, url, json=json, params=params, headers=DEFAULT_HEADERS, timeout=timeout_s)
    except (requests.Timeout, requests.ConnectionError) as e:
        logger.warning("BTZPay %s %s: no response (%s)", method, url, e)
        return Failure(FailureKind.NETWORK, "No response from server")

    body = _parse_body(r)
    if not 200 <= r.status_code < 300:
        message = "API request failed"
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])
        logger.warning("BTZPay %s %s HTTP %s: %s", method, url, r.status_code, message)
        return Failure(FailureKind.HTTP, message, status=r.status_code, body=body)

    if not isinstance(body, dict):
        logger.warning("BTZPay %s %s: invalid JSON: %s", method, url, r.text[:300])
        return Failure(FailureKind.INVALID_RESPONSE, "Invalid JSON in gateway response", status=r.status_code, body=body)

    if body.get("success") is False:
        message = str(body.get("message") or "Gateway rejected the request")
        logger.warning("BTZPay %s %s rejected: %s", method, url, message)
        return Failure(FailureKind.REJECTED, message, status=r.status_code, body=body)

    logger.debug("BTZPay %s %s -> HTTP %s", method, url, r.status_code)
    return Success(r.status_code, body)
