import json

import httpx
import pytest

from checkout_demo.api.dependencies import build_checkout_client
from checkout_demo.error_handler import UpstreamError
from checkout_demo.integrations.clients.mocks.payments import MockCheckoutClient
from checkout_demo.integrations.clients.real_http.payments import AdyenCheckoutClient
from checkout_demo.utils.config_loader import CheckoutConfig


def _client(handler):
    return AdyenCheckoutClient(
        base_url="https://checkout-test.example.com/v71/",
        api_key="secret-key",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_payments_posts_json_with_api_key_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["api_key"] = request.headers.get("X-API-Key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"resultCode": "Authorised", "pspReference": "PSP1"})

    result = await _client(handler).payments({"amount": {"currency": "EUR", "value": 1000}})

    assert result["resultCode"] == "Authorised"
    assert seen["url"] == "https://checkout-test.example.com/v71/payments"
    assert seen["api_key"] == "secret-key"
    assert seen["body"]["amount"]["value"] == 1000


@pytest.mark.asyncio
async def test_endpoint_paths():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={})

    client = _client(handler)
    await client.payment_methods({})
    await client.payments_details({"details": {}})

    assert paths == ["/v71/paymentMethods", "/v71/payments/details"]


@pytest.mark.asyncio
async def test_http_error_becomes_upstream_error_with_provider_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401,
            json={"status": 401, "errorCode": "000", "message": "HTTP Status Response - Unauthorized"},
        )

    with pytest.raises(UpstreamError) as exc:
        await _client(handler).payments({})

    assert exc.value.provider_status == 401
    assert "Unauthorized" in str(exc.value)
    assert exc.value.to_dict()["error"]["provider_status"] == 401


@pytest.mark.asyncio
async def test_network_error_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc:
        await _client(handler).payment_methods({})

    assert exc.value.provider_status is None
    assert "connection refused" in str(exc.value)


@pytest.mark.asyncio
async def test_invalid_json_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(UpstreamError):
        await _client(handler).payments({})


@pytest.mark.asyncio
async def test_mock_client_redirects_redirect_methods_and_authorises_cards():
    client = MockCheckoutClient()

    redirect = await client.payments({"paymentMethod": {"type": "ideal"}})
    assert redirect["resultCode"] == "RedirectShopper"
    assert redirect["action"]["type"] == "redirect"
    assert redirect["action"]["paymentData"].startswith("mock-")

    card = await client.payments({"paymentMethod": {"type": "scheme"}, "reference": "ref-1"})
    assert card["resultCode"] == "Authorised"
    assert card["merchantReference"] == "ref-1"

    assert [r["endpoint"] for r in client.requests] == ["/payments", "/payments"]


@pytest.mark.asyncio
async def test_mock_client_lists_dotpay_only_for_pln():
    client = MockCheckoutClient()

    eur = await client.payment_methods({"amount": {"currency": "EUR", "value": 1000}})
    pln = await client.payment_methods({"amount": {"currency": "PLN", "value": 1000}})

    assert "dotpay" not in {m["type"] for m in eur["paymentMethods"]}
    assert "dotpay" in {m["type"] for m in pln["paymentMethods"]}


@pytest.mark.asyncio
async def test_mock_details_follow_result_code_hint():
    client = MockCheckoutClient()

    assert (await client.payments_details({"details": {"resultCode": "Refused"}}))["resultCode"] == "Refused"
    assert (await client.payments_details({"details": {"redirectResult": "x"}}))["resultCode"] == "Authorised"


@pytest.mark.asyncio
async def test_mock_details_tolerate_non_object_details():
    client = MockCheckoutClient()

    assert (await client.payments_details({"details": "x"}))["resultCode"] == "Authorised"
    assert (await client.payments_details({"details": ["Refused"]}))["resultCode"] == "Authorised"
    assert (await client.payments_details({}))["resultCode"] == "Authorised"


@pytest.mark.parametrize(
    "mode, api_key, expected",
    [
        ("", "key", AdyenCheckoutClient),
        ("", "", MockCheckoutClient),
        ("mock", "key", MockCheckoutClient),
        ("real", "", AdyenCheckoutClient),
    ],
)
def test_build_checkout_client_selection(mode, api_key, expected):
    cfg = CheckoutConfig(api_key=api_key, integrations_mode=mode)
    assert isinstance(build_checkout_client(cfg), expected)
