"""
Utility modules for the checkout server
"""
from .config_loader import CheckoutConfig, load_checkout_config

__all__ = [
    'CheckoutConfig',
    'load_checkout_config',
]
