"""
Real Checkout API HTTP Client.

Used when a provider API key is configured.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from checkout_demo.error_handler import UpstreamError

logger = logging.getLogger(__name__)


class AdyenCheckoutClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def payment_methods(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post("/paymentMethods", request)

    async def payments(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post("/payments", request)

    async def payments_details(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post("/payments/details", request)

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.base_url:
            raise UpstreamError("Checkout API URL is not configured.")

        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "X-API-Key": self.api_key,
        }
        url = f"{self.base_url}{path}"
        logger.info("%s request:\n%s", path, json.dumps(payload, indent=2, default=str))

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            error_body = _error_body(e.response)
            message = error_body.get("message") or f"Provider returned HTTP {e.response.status_code}"
            logger.error("%s failed with HTTP %s: %s", path, e.response.status_code, message)
            raise UpstreamError(message, provider_status=e.response.status_code, payload=error_body) from e
        except httpx.HTTPError as e:
            logger.error("%s failed: %s", path, e)
            raise UpstreamError(f"Could not reach the payment provider: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Provider returned invalid JSON for {path}") from e

        if not isinstance(data, dict):
            raise UpstreamError(f"Provider returned a non-object body for {path}")

        logger.info("%s response:\n%s", path, json.dumps(data, indent=2, default=str))
        return data


def _error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {"message": response.text} if response.text else {}
    return body if isinstance(body, dict) else {"message": str(body)}
