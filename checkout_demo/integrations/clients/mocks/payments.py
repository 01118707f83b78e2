"""
Mock Checkout API Client.

Purpose:
- Provides a fake provider integration used for development/testing
- Does NOT make any network calls
- Returns deterministic responses shaped like the Checkout API's

Behavior:
- payment_methods(...) lists a fixed set of methods; dotpay only for PLN amounts
- payments(...) answers RedirectShopper with a redirect action for redirect
  methods and Authorised for everything else
- payments_details(...) answers with the `resultCode` found in `details`
  (so tests can steer the outcome), Authorised otherwise
"""

import logging
import uuid
from typing import Any, Dict, List

from checkout_demo.integrations.contracts.interfaces import ResultCode

logger = logging.getLogger(__name__)

REDIRECT_URL = "https://checkoutshopper-test.adyen.com/checkoutshopper/redirect"

REDIRECT_METHODS = {
    "alipay",
    "directEbanking",
    "dotpay",
    "giropay",
    "ideal",
    "klarna",
    "klarna_account",
    "klarna_paynow",
    "paypal",
}

_PAYMENT_METHODS: List[Dict[str, Any]] = [
    {"name": "Credit Card", "type": "scheme", "brands": ["visa", "mc", "amex"]},
    {"name": "iDEAL", "type": "ideal"},
    {"name": "Pay later with Klarna.", "type": "klarna"},
    {"name": "SOFORT", "type": "directEbanking"},
    {"name": "GiroPay", "type": "giropay"},
    {"name": "PayPal", "type": "paypal"},
    {"name": "AliPay", "type": "alipay"},
]

_DOTPAY = {"name": "Local Polish Payment Methods", "type": "dotpay"}


class MockCheckoutClient:
    def __init__(self) -> None:
        self.requests: List[Dict[str, Any]] = []

    async def payment_methods(self, request: Dict[str, Any]) -> Dict[str, Any]:
        self.requests.append({"endpoint": "/paymentMethods", "body": request})
        methods = [dict(m) for m in _PAYMENT_METHODS]
        if (request.get("amount") or {}).get("currency") == "PLN":
            methods.append(dict(_DOTPAY))
        return {"paymentMethods": methods}

    async def payments(self, request: Dict[str, Any]) -> Dict[str, Any]:
        self.requests.append({"endpoint": "/payments", "body": request})
        method_type = (request.get("paymentMethod") or {}).get("type", "")
        psp_reference = uuid.uuid4().hex[:16].upper()
        logger.info("[MOCK] /payments for %s (pspReference=%s)", method_type, psp_reference)

        if method_type in REDIRECT_METHODS:
            return {
                "resultCode": ResultCode.REDIRECT_SHOPPER.value,
                "action": {
                    "type": "redirect",
                    "method": "GET",
                    "paymentMethodType": method_type,
                    "url": f"{REDIRECT_URL}?method={method_type}",
                    "paymentData": f"mock-{psp_reference}",
                },
            }
        return {
            "resultCode": ResultCode.AUTHORISED.value,
            "pspReference": psp_reference,
            "merchantReference": request.get("reference"),
        }

    async def payments_details(self, request: Dict[str, Any]) -> Dict[str, Any]:
        self.requests.append({"endpoint": "/payments/details", "body": request})
        details = request.get("details")
        hint = details.get("resultCode") if isinstance(details, dict) else None
        result_code = hint or ResultCode.AUTHORISED.value
        return {
            "resultCode": result_code,
            "pspReference": uuid.uuid4().hex[:16].upper(),
        }
