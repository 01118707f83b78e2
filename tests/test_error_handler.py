from checkout_demo.error_handler import (
    AssetNotFound,
    AssetReadError,
    ErrorHandler,
    UpstreamError,
    ValidationError,
)


def test_checkout_errors_map_to_kind_and_status():
    eh = ErrorHandler()

    cases = [
        (ValidationError("paymentMethod.type is required"), 422, "validation_error"),
        (UpstreamError("timed out"), 502, "upstream_error"),
        (AssetNotFound("missing"), 404, "asset_not_found"),
        (AssetReadError("denied"), 500, "asset_read_error"),
    ]
    for exc, status, kind in cases:
        code, payload = eh.handle_exception(exc, context={"path": "/api/initiatePayment"})
        assert code == status
        assert payload == {"error": {"kind": kind, "message": str(exc)}}


def test_handle_exception_hides_unexpected_errors():
    eh = ErrorHandler()
    code, payload = eh.handle_exception(Exception("boom"), context={"k": "v"})

    assert code == 500
    assert payload["error"]["kind"] == "internal_error"
    assert "internal error" in payload["error"]["message"].lower()
    assert "boom" not in payload["error"]["message"]
