from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from checkout_demo.api.endpoints.pages import read_favicon
from checkout_demo.api.main import create_app
from checkout_demo.error_handler import AssetNotFound, AssetReadError


def test_home_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "/cart/dropin" in response.text


def test_cart_page_links_to_checkout(client):
    response = client.get("/cart/dropin")

    assert response.status_code == 200
    assert 'href="/checkout/dropin"' in response.text
    assert "Sunglasses" in response.text
    assert "100.00" in response.text


def test_checkout_page_injects_methods_and_client_key(client, mock_client):
    response = client.get("/checkout/dropin")

    assert response.status_code == 200
    assert '"test_CLIENTKEY"' in response.text
    assert '"type": "scheme"' in response.text
    assert mock_client.requests[0]["endpoint"] == "/paymentMethods"


def test_checkout_page_for_dotpay_asks_for_pln(client, mock_client):
    response = client.get("/checkout/dotpay")

    assert '"type": "dotpay"' in response.text
    assert mock_client.requests[0]["body"]["amount"]["currency"] == "PLN"


@pytest.mark.parametrize(
    "path, text",
    [
        ("/success", "successfully placed"),
        ("/pending", "pending"),
        ("/failed", "refused"),
        ("/error", "Error!"),
    ],
)
def test_terminal_views(client, path, text):
    response = client.get(path)
    assert response.status_code == 200
    assert text in response.text


@pytest.mark.parametrize(
    "code, location",
    [
        ("Authorised", "/success"),
        ("Received", "/pending"),
        ("Pending", "/pending"),
        ("Refused", "/failed"),
        ("Cancelled", "/failed"),
    ],
)
def test_result_redirect_uses_three_way_mapping(client, code, location):
    response = client.get(f"/result/{code}", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == location


def test_favicon(client, favicon_path):
    response = client.get("/favicon.ico")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/x-icon"
    assert response.content == favicon_path.read_bytes()


def test_missing_favicon_is_404(config, mock_client, tmp_path):
    client = TestClient(create_app(config, mock_client, favicon_path=tmp_path / "missing.ico"))

    response = client.get("/favicon.ico")

    assert response.status_code == 404
    assert response.text


def test_unreadable_favicon_is_500(client, monkeypatch):
    def deny(self):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "read_bytes", deny)

    response = client.get("/favicon.ico")

    assert response.status_code == 500
    assert "Permission denied" in response.text


def test_favicon_directory_is_read_error(tmp_path):
    with pytest.raises(AssetReadError):
        read_favicon(tmp_path)

    with pytest.raises(AssetNotFound):
        read_favicon(tmp_path / "nope.ico")


def test_shipped_favicon_exists():
    from checkout_demo.api.main import FAVICON_PATH

    assert FAVICON_PATH.read_bytes()[:4] == b"\x00\x00\x01\x00"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
