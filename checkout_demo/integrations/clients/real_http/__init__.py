"""
Real HTTP integration clients.

These clients communicate with the payment provider's Checkout API via HTTP.

Important:
- Must implement the same interface as the mock clients
- Provider failures surface as UpstreamError; nothing is retried

Switching:
The selection of mock vs real clients happens in checkout_demo/api/dependencies.py only.
"""
