"""
Contracts (data models).

This folder defines the request/response shapes exchanged with the payment
provider and with the Drop-in widget:
- the payment submission and the fields the server adjusts on it
- result codes and the terminal views they lead to
- the Checkout API client interface

Both mock and real HTTP clients use these contracts.
"""
