"""
Per-payment-method adjustments applied to a submission before it is forwarded.

Defaults are applied first (NL / EUR, channel, merchant account, return URL),
then the first rule in METHOD_RULES whose predicate matches the method type
overrides the fields that method needs. Later rules are never consulted once
one has matched.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from checkout_demo.error_handler import ValidationError
from checkout_demo.integrations.contracts.interfaces import DEMO_CART, CartItem, Channel, PaymentSubmission
from checkout_demo.integrations.contracts.payments import DEFAULT_AMOUNT_VALUE, validate_submission
from checkout_demo.utils.config_loader import CheckoutConfig

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY_CODE = "NL"
DEFAULT_CURRENCY = "EUR"
KLARNA_LOCALE = "en_US"

Override = Callable[[PaymentSubmission, CheckoutConfig, Sequence[CartItem]], None]
MethodRule = Tuple[str, Callable[[str], bool], Override]


def _dotpay(submission: PaymentSubmission, config: CheckoutConfig, cart: Sequence[CartItem]) -> None:
    submission.amount.currency = "PLN"
    submission.country_code = "PL"


def _alipay(submission: PaymentSubmission, config: CheckoutConfig, cart: Sequence[CartItem]) -> None:
    submission.country_code = "CN"


def _klarna(submission: PaymentSubmission, config: CheckoutConfig, cart: Sequence[CartItem]) -> None:
    submission.shopper_email = config.shopper_email
    submission.shopper_locale = KLARNA_LOCALE
    submission.line_items = [item.to_line_item() for item in (cart or DEMO_CART)]


def _germany(submission: PaymentSubmission, config: CheckoutConfig, cart: Sequence[CartItem]) -> None:
    submission.country_code = "DE"


def _scheme(submission: PaymentSubmission, config: CheckoutConfig, cart: Sequence[CartItem]) -> None:
    submission.additional_data["allow3DS2"] = "true"
    submission.origin = config.base_url.rstrip("/")


def _united_states(submission: PaymentSubmission, config: CheckoutConfig, cart: Sequence[CartItem]) -> None:
    submission.country_code = "US"


# Order matters: first match wins.
METHOD_RULES: List[MethodRule] = [
    ("dotpay", lambda t: "dotpay" in t, _dotpay),
    ("alipay", lambda t: t == "alipay", _alipay),
    ("klarna", lambda t: "klarna" in t, _klarna),
    ("germany", lambda t: t in {"directEbanking", "giropay"}, _germany),
    ("scheme", lambda t: t == "scheme", _scheme),
    ("united_states", lambda t: t in {"ach", "paypal"}, _united_states),
]


def matching_rule(method_type: str) -> Optional[MethodRule]:
    """Rule that applies to `method_type`, or None when only the defaults apply."""
    for rule in METHOD_RULES:
        if rule[1](method_type):
            return rule
    return None


def _apply_defaults(submission: PaymentSubmission, config: CheckoutConfig) -> None:
    submission.country_code = DEFAULT_COUNTRY_CODE
    submission.amount.currency = DEFAULT_CURRENCY
    submission.channel = Channel.WEB
    submission.merchant_account = config.merchant_account
    submission.return_url = config.return_url
    submission.reference = config.reference
    submission.shopper_reference = config.shopper_reference


def normalize(
    submission: PaymentSubmission,
    config: CheckoutConfig,
    cart: Sequence[CartItem] = DEMO_CART,
) -> PaymentSubmission:
    """
    Return a copy of `submission` ready to be sent to /payments.

    Raises:
        ValidationError: If the method type is missing or the amount is unusable
    """
    errors = validate_submission(submission)
    if errors:
        raise ValidationError("; ".join(errors))

    normalized = copy.deepcopy(submission)
    normalized.method_type = submission.method_type.strip()
    _apply_defaults(normalized, config)

    rule = matching_rule(normalized.method_type)
    if rule is not None:
        name, _, override = rule
        logger.debug("Applying %s overrides for method type %s", name, normalized.method_type)
        override(normalized, config, cart)

    return normalized


def payment_methods_request(method_hint: Optional[str], config: CheckoutConfig) -> Dict[str, Any]:
    """Build the /paymentMethods request; a dotpay hint asks for PLN-priced methods."""
    currency = "PLN" if method_hint and "dotpay" in method_hint else DEFAULT_CURRENCY
    return {
        "merchantAccount": config.merchant_account,
        "amount": {"currency": currency, "value": DEFAULT_AMOUNT_VALUE},
        "channel": Channel.WEB.value,
    }
