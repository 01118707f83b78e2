from typing import Any, Dict, List

from checkout_demo.error_handler import ValidationError
from .interfaces import Amount, PaymentSubmission

"""
Payment contract: parsing and validation helpers for the Drop-in submission
posted to /api/initiatePayment.

The widget posts its `state.data` object. Only the fields the server adjusts
are lifted into PaymentSubmission; everything else is carried in `extra` and
forwarded to the provider untouched.
"""

DEFAULT_AMOUNT_VALUE = 1000
DEFAULT_CURRENCY = "EUR"

# Widget keys the server owns. Anything the shopper's browser sends for these
# is overwritten during normalisation, so they are not carried in `extra`.
_OWNED_KEYS = {
    "amount",
    "paymentMethod",
    "countryCode",
    "shopperLocale",
    "shopperEmail",
    "lineItems",
    "additionalData",
    "browserInfo",
    "origin",
    "channel",
    "reference",
    "shopperReference",
    "returnUrl",
    "merchantAccount",
}


def parse_submission(body: Any) -> PaymentSubmission:
    """Build a PaymentSubmission from the widget's JSON body."""
    if not isinstance(body, dict):
        raise ValidationError("Payment submission must be a JSON object")

    payment_method = body.get("paymentMethod") or {}
    if not isinstance(payment_method, dict):
        raise ValidationError("paymentMethod must be an object")

    raw_amount = body.get("amount") or {}
    if not isinstance(raw_amount, dict):
        raise ValidationError("amount must be an object")
    try:
        value = int(raw_amount.get("value", DEFAULT_AMOUNT_VALUE))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"amount.value must be an integer in minor units, got {raw_amount.get('value')!r}") from e

    additional_data = body.get("additionalData") or {}
    return PaymentSubmission(
        amount=Amount(currency=str(raw_amount.get("currency") or DEFAULT_CURRENCY), value=value),
        method_type=str(payment_method.get("type") or ""),
        payment_method=dict(payment_method),
        country_code=str(body.get("countryCode") or ""),
        shopper_locale=body.get("shopperLocale"),
        browser_info=body.get("browserInfo"),
        additional_data={str(k): str(v) for k, v in additional_data.items()} if isinstance(additional_data, dict) else {},
        extra={k: v for k, v in body.items() if k not in _OWNED_KEYS},
    )


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def validate_submission(submission: PaymentSubmission) -> List[str]:
    """
    Return a list of validation errors.
    Empty list means the submission can be forwarded.
    """
    errors: List[str] = []

    if not (submission.method_type or "").strip():
        errors.append("paymentMethod.type is required")
    if submission.amount.value < 0:
        errors.append("amount.value must not be negative")
    if not submission.amount.currency:
        errors.append("amount.currency is required")

    return errors


def details_request(body: Any) -> Dict[str, Any]:
    """Shape a /payments/details request from a browser payload."""
    if not isinstance(body, dict):
        raise ValidationError("Details submission must be a JSON object")
    details = body.get("details")
    if not isinstance(details, dict):
        raise ValidationError("details must be an object")

    request: Dict[str, Any] = {"details": details}
    if body.get("paymentData"):
        request["paymentData"] = body["paymentData"]
    return request
