import logging

from fastapi import Request
from fastapi.templating import Jinja2Templates

from checkout_demo.integrations.clients.mocks.payments import MockCheckoutClient
from checkout_demo.integrations.clients.real_http.payments import AdyenCheckoutClient
from checkout_demo.integrations.contracts.interfaces import CheckoutApiClient
from checkout_demo.utils.config_loader import CheckoutConfig

logger = logging.getLogger(__name__)


def _should_use_real_integrations(config: CheckoutConfig) -> bool:
    mode = config.integrations_mode.strip().lower()
    if mode in {"real", "live"}:
        return True
    if mode in {"mock", "test"}:
        return False
    return bool(config.api_key)


def build_checkout_client(config: CheckoutConfig) -> CheckoutApiClient:
    if _should_use_real_integrations(config):
        logger.info("Using Checkout API at %s", config.checkout_url)
        return AdyenCheckoutClient(
            base_url=config.checkout_url,
            api_key=config.api_key,
            timeout_seconds=config.request_timeout_seconds,
        )

    logger.warning("No provider API key configured; using the mock Checkout client")
    return MockCheckoutClient()


def get_config(request: Request) -> CheckoutConfig:
    return request.app.state.config


def get_checkout_client(request: Request) -> CheckoutApiClient:
    return request.app.state.checkout_client


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates
