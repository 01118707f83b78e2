"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from checkout_demo.api.dependencies import build_checkout_client
from checkout_demo.api.endpoints.pages import router as pages_router
from checkout_demo.api.endpoints.payments import payments_api
from checkout_demo.error_handler import CheckoutError, ErrorHandler
from checkout_demo.integrations.contracts.interfaces import CheckoutApiClient
from checkout_demo.utils.config_loader import CheckoutConfig, load_checkout_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
TEMPLATE_DIR = PACKAGE_ROOT / "templates"
STATIC_DIR = PACKAGE_ROOT / "static"
FAVICON_PATH = STATIC_DIR / "img" / "favicon.ico"

error_handler = ErrorHandler()


def create_app(
    config: Optional[CheckoutConfig] = None,
    checkout_client: Optional[CheckoutApiClient] = None,
    *,
    template_dir: Path = TEMPLATE_DIR,
    static_dir: Path = STATIC_DIR,
    favicon_path: Path = FAVICON_PATH,
) -> FastAPI:
    """Build the checkout app; configuration is read once here and shared read-only by every handler."""
    config = config or load_checkout_config()

    app = FastAPI(
        title="Drop-in Checkout Demo",
        description="Demo checkout server proxying the payment provider's Checkout API",
        version="1.0.0",
    )

    app.state.config = config
    app.state.checkout_client = checkout_client or build_checkout_client(config)
    app.state.templates = Jinja2Templates(directory=str(template_dir))
    app.state.favicon_path = Path(favicon_path)

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        status_code, payload = error_handler.handle_exception(exc, context={"path": request.url.path})
        return JSONResponse(status_code=status_code, content=payload)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        status_code, payload = error_handler.handle_exception(exc, context={"path": request.url.path})
        return JSONResponse(status_code=status_code, content=payload)

    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    app.include_router(payments_api, prefix="/api")
    app.include_router(pages_router)

    return app


app = create_app()
