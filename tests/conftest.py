"""Pytest fixtures for the checkout server tests."""

import pytest
from fastapi.testclient import TestClient

from checkout_demo.api.main import create_app
from checkout_demo.integrations.clients.mocks.payments import MockCheckoutClient
from checkout_demo.utils.config_loader import CheckoutConfig

FAVICON_BYTES = b"\x00\x00\x01\x00\x01\x00fake-icon"


@pytest.fixture
def config():
    return CheckoutConfig(
        merchant_account="TestMerchantECOM",
        api_key="test-api-key",
        client_key="test_CLIENTKEY",
        base_url="http://localhost:8080",
        shopper_email="shopper@example.com",
    )


@pytest.fixture
def mock_client():
    """Offline Checkout API client that records every request."""
    return MockCheckoutClient()


@pytest.fixture
def favicon_path(tmp_path):
    path = tmp_path / "favicon.ico"
    path.write_bytes(FAVICON_BYTES)
    return path


@pytest.fixture
def app(config, mock_client, favicon_path):
    return create_app(config, mock_client, favicon_path=favicon_path)


@pytest.fixture
def client(app):
    return TestClient(app)
