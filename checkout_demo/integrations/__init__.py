"""
Integrations layer.
This package contains all code used to communicate with the payment provider's
Checkout API (/paymentMethods, /payments, /payments/details).

Key rule:
- Endpoints MUST NOT call the provider directly.
- Endpoints call a CheckoutApiClient (under checkout_demo/integrations/clients).
- The MOCK client is used offline; the REAL_HTTP client when an API key is configured.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (checkout_demo/api/dependencies.py).
"""

from .contracts.interfaces import (
    DEMO_CART,
    Amount,
    CartItem,
    Channel,
    CheckoutApiClient,
    LineItem,
    NavigationTarget,
    PaymentSubmission,
    ResultCode,
)
from .contracts.payments import details_request, parse_submission, validate_submission

__all__ = [
    # interfaces
    "DEMO_CART", "Amount", "CartItem", "Channel", "CheckoutApiClient",
    "LineItem", "NavigationTarget", "PaymentSubmission", "ResultCode",
    # payments
    "details_request", "parse_submission", "validate_submission",
]
