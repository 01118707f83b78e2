"""
Result code -> terminal view routing.

Two mappings exist and are kept apart:

- route(): used when the widget reports a final result to the browser.
  Authorised -> success, Received/Pending -> pending, anything else -> failed.
- route_redirect(): used after a shopper returns to /api/handleShopperRedirect.
  Authorised -> success, Pending -> pending, Refused -> failed, anything else -> error.
"""

from typing import Union

from checkout_demo.integrations.contracts.interfaces import NavigationTarget, ResultCode


def route(result_code: Union[ResultCode, str, None]) -> NavigationTarget:
    code = ResultCode.parse(result_code)
    if code == ResultCode.AUTHORISED:
        return NavigationTarget.SUCCESS
    if code in (ResultCode.RECEIVED, ResultCode.PENDING):
        return NavigationTarget.PENDING
    return NavigationTarget.FAILED


def route_redirect(result_code: Union[ResultCode, str, None]) -> NavigationTarget:
    code = ResultCode.parse(result_code)
    if code == ResultCode.AUTHORISED:
        return NavigationTarget.SUCCESS
    if code == ResultCode.PENDING:
        return NavigationTarget.PENDING
    if code == ResultCode.REFUSED:
        return NavigationTarget.FAILED
    return NavigationTarget.ERROR
