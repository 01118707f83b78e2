"""
Configuration loader for the checkout demo server
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.properties"

# field name -> (keys accepted in the config file, environment variable)
_CONFIG_KEYS: Dict[str, tuple] = {
    "merchant_account": (("merchantAccount", "MERCHANT_ACCOUNT"), "MERCHANT_ACCOUNT"),
    "api_key": (("apiKey", "API_KEY"), "API_KEY"),
    "client_key": (("clientKey", "CLIENT_KEY"), "CLIENT_KEY"),
    "environment": (("environment", "ENVIRONMENT"), "CHECKOUT_ENVIRONMENT"),
    "checkout_url": (("checkoutUrl", "CHECKOUT_URL"), "CHECKOUT_URL"),
    "base_url": (("baseUrl", "BASE_URL"), "BASE_URL"),
    "shopper_email": (("shopperEmail", "SHOPPER_EMAIL"), "SHOPPER_EMAIL"),
    "reference": (("reference", "REFERENCE"), "PAYMENT_REFERENCE"),
    "shopper_reference": (("shopperReference", "SHOPPER_REFERENCE"), "SHOPPER_REFERENCE"),
    "request_timeout_seconds": (("requestTimeoutSeconds", "REQUEST_TIMEOUT_SECONDS"), "REQUEST_TIMEOUT_SECONDS"),
    "integrations_mode": (("integrationsMode", "INTEGRATIONS_MODE"), "INTEGRATIONS_MODE"),
}

REQUIRED_FIELDS = ("merchant_account", "api_key", "client_key")


class CheckoutConfig(BaseModel):
    """Process-wide checkout settings, read once at startup and never mutated."""

    model_config = {"frozen": True}

    merchant_account: str = ""
    api_key: str = ""
    client_key: str = ""
    environment: str = "test"
    checkout_url: str = "https://checkout-test.adyen.com/v71"
    base_url: str = "http://localhost:8080"
    shopper_email: str = "myEmail@adyen.com"
    reference: str = "Python Integration Test Reference"
    shopper_reference: str = "Python Checkout Shopper"
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    integrations_mode: str = ""

    @property
    def return_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/handleShopperRedirect"

    def missing_required(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]


def _lookup(values: Dict[str, Optional[str]], keys: tuple) -> Optional[str]:
    for key in keys:
        value = values.get(key)
        if value is not None and value.strip():
            return value.strip()
    return None


def load_checkout_config(config_path: Optional[Path] = None) -> CheckoutConfig:
    """
    Load checkout configuration from a key-value file, overlaid by the environment

    Args:
        config_path: Path to the key-value file. Defaults to $CHECKOUT_CONFIG_FILE
            or config.properties in the working directory.

    Returns:
        Validated CheckoutConfig object. Missing credentials are logged, not raised.

    Raises:
        ValidationError: If a present value doesn't match the schema
    """
    if config_path is None:
        config_path = Path(os.getenv("CHECKOUT_CONFIG_FILE", DEFAULT_CONFIG_FILE))

    file_values: Dict[str, Optional[str]] = {}
    if config_path.exists():
        file_values = dict(dotenv_values(config_path))
        logger.info("Loaded checkout config from %s", config_path)
    else:
        logger.warning("Config file not found: %s (falling back to environment)", config_path)

    data: Dict[str, str] = {}
    for field_name, (file_keys, env_key) in _CONFIG_KEYS.items():
        value = _lookup(dict(os.environ), (env_key,)) or _lookup(file_values, file_keys)
        if value is not None:
            data[field_name] = value

    try:
        config = CheckoutConfig(**data)
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise

    missing = config.missing_required()
    if missing:
        logger.warning("Checkout config is missing required values: %s", ", ".join(missing))
    return config
