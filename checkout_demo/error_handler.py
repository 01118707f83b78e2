"""Error taxonomy and error payloads for the checkout endpoints."""
from typing import Any, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    kind = "checkout_error"
    status_code = 500

    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": {"kind": self.kind, "message": str(self)}}


class ValidationError(CheckoutError):
    """A payment submission is missing a required field."""

    kind = "validation_error"
    status_code = 422


class UpstreamError(CheckoutError):
    """The payment provider call failed at the network or HTTP level."""

    kind = "upstream_error"
    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        provider_status: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, payload=payload)
        self.provider_status = provider_status

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.provider_status is not None:
            body["error"]["provider_status"] = self.provider_status
        return body


class AssetNotFound(CheckoutError):
    kind = "asset_not_found"
    status_code = 404


class AssetReadError(CheckoutError):
    kind = "asset_read_error"
    status_code = 500


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Tuple[int, Dict[str, Any]]:
        if isinstance(exc, CheckoutError):
            logger.warning("%s while handling %s: %s", exc.kind, (context or {}).get("path", "-"), exc)
            return exc.status_code, exc.to_dict()

        logger.error("Unhandled exception in checkout server: %s", exc, exc_info=True)
        return 500, {
            "error": {
                "kind": "internal_error",
                "message": "An internal error occurred while processing your request. Please try again later.",
            }
        }
