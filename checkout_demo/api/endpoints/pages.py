"""
HTML views: landing, cart, Drop-in checkout, terminal result pages and the favicon.
"""

import json
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from checkout_demo.api.dependencies import get_checkout_client, get_config, get_templates
from checkout_demo.error_handler import AssetNotFound, AssetReadError
from checkout_demo.integrations.contracts.interfaces import DEMO_CART, CheckoutApiClient, NavigationTarget
from checkout_demo.integrations.policy.outcome_router import route
from checkout_demo.integrations.policy.request_normalizer import payment_methods_request
from checkout_demo.utils.config_loader import CheckoutConfig

logger = logging.getLogger(__name__)

router = APIRouter()

# terminal view -> (template, heading)
_RESULT_PAGES = {
    NavigationTarget.SUCCESS: ("checkout-success.html", "Your order has been successfully placed."),
    NavigationTarget.PENDING: ("checkout-success.html", "Your order has been received! Payment completion pending."),
    NavigationTarget.FAILED: ("checkout-failed.html", "The payment was refused. Please try a different payment method or card."),
    NavigationTarget.ERROR: ("checkout-failed.html", "Error! Please review response in console and refer to Adyen API documentation."),
}


def read_favicon(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise AssetNotFound(f"{path} (No such file or directory)") from e
    except OSError as e:
        raise AssetReadError(f"{path} could not be read: {e.strerror or e}") from e


@router.get("/", include_in_schema=False)
async def home(request: Request, templates: Jinja2Templates = Depends(get_templates)):
    return templates.TemplateResponse(request, "home.html", {})


@router.get("/cart/{integration}", include_in_schema=False)
async def cart(integration: str, request: Request, templates: Jinja2Templates = Depends(get_templates)):
    context = {
        "integrationType": f"/checkout/{integration}",
        "cart": DEMO_CART,
        "total": sum(item.total for item in DEMO_CART),
    }
    return templates.TemplateResponse(request, "cart.html", context)


@router.get("/checkout/{integration}", include_in_schema=False)
async def checkout(
    integration: str,
    request: Request,
    config: CheckoutConfig = Depends(get_config),
    client: CheckoutApiClient = Depends(get_checkout_client),
    templates: Jinja2Templates = Depends(get_templates),
):
    payment_methods = await client.payment_methods(payment_methods_request(integration, config))
    context = {
        "paymentMethods": json.dumps(payment_methods).replace("<", "\\u003c"),
        "clientKey": config.client_key,
        "environment": config.environment,
        "integrationType": integration,
    }
    return templates.TemplateResponse(request, "component.html", context)


@router.get("/result/{result_code}", include_in_schema=False)
async def result(result_code: str):
    return RedirectResponse(route(result_code).path, status_code=302)


def _result_page(target: NavigationTarget):
    template, message = _RESULT_PAGES[target]

    async def view(request: Request, templates: Jinja2Templates = Depends(get_templates)):
        return templates.TemplateResponse(request, template, {"outcome": target.value, "message": message})

    view.__name__ = f"{target.value}_page"
    return view


for _target in NavigationTarget:
    router.add_api_route(_target.path, _result_page(_target), methods=["GET"], include_in_schema=False)


@router.get("/favicon.ico", include_in_schema=False)
async def favicon(request: Request):
    path: Path = request.app.state.favicon_path
    try:
        content = read_favicon(path)
    except (AssetNotFound, AssetReadError) as e:
        logger.warning("Favicon unavailable: %s", e)
        return PlainTextResponse(str(e), status_code=e.status_code)
    return Response(content=content, media_type="image/x-icon")


@router.get("/health")
async def health():
    return {"status": "ok"}
