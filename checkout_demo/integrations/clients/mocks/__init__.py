"""
Mock integration clients.

These clients return fake (but realistic) Checkout API responses without calling
the provider. They are used when:
- No API key is configured (local development)
- We want to exercise the checkout flow end-to-end in tests

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped like the provider's JSON responses.
"""
