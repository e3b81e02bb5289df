import asyncio
from unittest.mock import patch

import httpx
import pytest

from udyam.lookup.postal import Location, lookup_pincode, _parse_response
from udyam.settings import settings

SUCCESS_BODY = [{
    "Message": "Number of pincode(s) found:2",
    "Status": "Success",
    "PostOffice": [
        {"Name": "Bangalore G.P.O.", "District": "Bengaluru", "State": "Karnataka"},
        {"Name": "Other", "District": "Elsewhere", "State": "Nowhere"},
    ],
}]


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _run(pin, handler):
    async def go():
        async with _client(handler) as c:
            return await lookup_pincode(pin, client=c)
    return asyncio.run(go())


def test_remote_success_uses_first_post_office():
    calls = []

    def handler(request):
        calls.append(str(request.url))
        return httpx.Response(200, json=SUCCESS_BODY)

    loc = _run("560001", handler)
    assert loc == Location(state="Karnataka", city="Bengaluru")
    assert calls == ["https://api.postalpincode.in/pincode/560001"]


@pytest.mark.parametrize("pin", ["", "5600", "56000a", "5600011"])
def test_non_six_digit_input_never_hits_network(pin):
    def handler(request):
        raise AssertionError("network must not be called")

    assert _run(pin, handler) is None


def test_network_error_falls_back_to_local_table():
    def handler(request):
        raise httpx.ConnectError("down")

    assert _run("110001", handler) == Location(state="Delhi", city="New Delhi")


def test_error_status_falls_back():
    assert _run("400001", lambda r: httpx.Response(503)) == Location(state="Maharashtra", city="Mumbai")


def test_non_success_status_falls_back_or_none():
    body = [{"Status": "Error", "PostOffice": None}]
    assert _run("600001", lambda r: httpx.Response(200, json=body)) == Location(state="Tamil Nadu", city="Chennai")
    assert _run("999999", lambda r: httpx.Response(200, json=body)) is None


def test_malformed_json_falls_back():
    assert _run("700001", lambda r: httpx.Response(200, text="<html>")) == Location(state="West Bengal", city="Kolkata")


def test_remote_disabled_uses_table_only():
    def handler(request):
        raise AssertionError("network must not be called")

    with patch.object(settings, "PINCODE_REMOTE_ENABLED", False):
        assert _run("560001", handler) == Location(state="Karnataka", city="Bengaluru")
        assert _run("123456", handler) is None


def test_parse_response_shapes():
    assert _parse_response(SUCCESS_BODY) == Location(state="Karnataka", city="Bengaluru")
    assert _parse_response([]) is None
    assert _parse_response({"Status": "Success"}) is None
    assert _parse_response([{"Status": "Success", "PostOffice": []}]) is None
    assert _parse_response([{"Status": "Success", "PostOffice": [{"State": "", "District": ""}]}]) is None
