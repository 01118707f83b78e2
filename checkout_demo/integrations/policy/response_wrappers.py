from __future__ import annotations

from typing import Any, Dict, Optional

from checkout_demo.integrations.contracts.interfaces import ResultCode


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


def format_payment_response(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a /payments response to what the widget needs: resultCode and, if any, action."""
    result_code = _first_non_empty(raw, "resultCode")
    formatted: Dict[str, Any] = {"resultCode": str(result_code)}

    action = raw.get("action")
    if action is not None:
        if not isinstance(action, dict):
            raise IntegrationResponseError("Provider returned a non-object action.", payload=raw)
        formatted["action"] = action
    return formatted


def result_code_of(raw: Dict[str, Any]) -> ResultCode:
    """Result code of a provider response; missing or unrecognised codes are UNKNOWN."""
    if not isinstance(raw, dict):
        return ResultCode.UNKNOWN
    return ResultCode.parse(raw.get("resultCode"))


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)
