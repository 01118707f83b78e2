import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from checkout_demo.api.dependencies import get_checkout_client, get_config, get_templates
from checkout_demo.error_handler import UpstreamError, ValidationError
from checkout_demo.integrations.contracts.interfaces import CheckoutApiClient, NavigationTarget
from checkout_demo.integrations.contracts.payments import details_request, parse_submission
from checkout_demo.integrations.policy.outcome_router import route_redirect
from checkout_demo.integrations.policy.request_normalizer import normalize, payment_methods_request
from checkout_demo.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    format_payment_response,
    result_code_of,
)
from checkout_demo.utils.config_loader import CheckoutConfig

logger = logging.getLogger(__name__)

api = APIRouter()
payments_api = api

REDIRECT_TEMPLATE = "fetch-payment-data.html"


async def _json_body(request: Request, *, required: bool = True) -> Any:
    raw = await request.body()
    if not raw.strip():
        if required:
            raise ValidationError("Request body must not be empty")
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"Request body is not valid JSON: {e}") from e


def _values_array(values: Dict[str, str]) -> str:
    # Embedded verbatim in a <script>; escape what could end the element.
    text = json.dumps(values, indent=1)
    return text.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def _render_redirect_page(request: Request, templates: Jinja2Templates, values: Dict[str, str]) -> HTMLResponse:
    return templates.TemplateResponse(request, REDIRECT_TEMPLATE, {"valuesArray": _values_array(values)})


@api.post("/getPaymentMethods", tags=["Payments"])
async def get_payment_methods(
    request: Request,
    config: CheckoutConfig = Depends(get_config),
    client: CheckoutApiClient = Depends(get_checkout_client),
):
    body = await _json_body(request, required=False)
    method_hint: Optional[str] = body.get("type") if isinstance(body, dict) else None

    response = await client.payment_methods(payment_methods_request(method_hint, config))
    return JSONResponse(response)


@api.post("/initiatePayment", tags=["Payments"])
async def initiate_payment(
    request: Request,
    config: CheckoutConfig = Depends(get_config),
    client: CheckoutApiClient = Depends(get_checkout_client),
):
    body = await _json_body(request)
    submission = normalize(parse_submission(body), config)

    raw = await client.payments(submission.to_provider_payload())
    try:
        return JSONResponse(format_payment_response(raw))
    except IntegrationResponseError as e:
        raise UpstreamError(str(e), payload=e.payload) from e


@api.post("/submitAdditionalDetails", tags=["Payments"])
async def submit_additional_details(
    request: Request,
    client: CheckoutApiClient = Depends(get_checkout_client),
):
    body = await _json_body(request)
    if not isinstance(body, dict):
        raise ValidationError("Details submission must be a JSON object")

    response = await client.payments_details(body)
    return JSONResponse(response)


@api.get("/handleShopperRedirect", tags=["Payments"])
async def handle_shopper_redirect_get(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
):
    params = request.query_params
    values: Dict[str, str] = {}
    if "redirectResult" in params:
        values["redirectResult"] = params["redirectResult"]
    elif "payload" in params:
        values["payload"] = params["payload"]
    else:
        logger.warning("Shopper redirect without redirectResult or payload")
        return RedirectResponse(NavigationTarget.ERROR.path, status_code=302)

    return _render_redirect_page(request, templates, values)


@api.post("/handleShopperRedirect", tags=["Payments"])
async def handle_shopper_redirect_post(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
    client: CheckoutApiClient = Depends(get_checkout_client),
):
    raw = await request.body()

    # Issuer callback after a 3D Secure challenge posts MD and PaRes as a form.
    if b"paymentData" not in raw:
        params = parse_qsl(raw.decode("utf-8", errors="replace"), keep_blank_values=True)
        if len(params) < 2:
            raise ValidationError("Redirect callback must carry MD and PaRes")
        values = {"MD": params[0][1], "PaRes": params[1][1]}
        return _render_redirect_page(request, templates, values)

    try:
        body = json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"Request body is not valid JSON: {e}") from e

    response = await client.payments_details(details_request(body))
    target = route_redirect(result_code_of(response))
    logger.info("Shopper redirect resolved to %s", target.value)
    return RedirectResponse(target.path, status_code=302)
