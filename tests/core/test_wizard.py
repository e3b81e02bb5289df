import asyncio
from unittest.mock import patch

import httpx

from udyam.core.wizard import Wizard

OFFICES = {
    "560001": ("Karnataka", "Bengaluru"),
    "110001": ("Delhi", "New Delhi"),
}


def _body(pin):
    state, district = OFFICES[pin]
    return [{"Status": "Success", "PostOffice": [{"State": state, "District": district}]}]


def test_pincode_change_triggers_lookup():
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(
            lambda r: httpx.Response(200, json=_body(r.url.path.rsplit("/", 1)[-1]))
        )) as c:
            w = Wizard(client=c)
            await w.change("pincode", "110001")
            return w
    w = asyncio.run(go())
    assert w.state.values["state"] == "Delhi"
    assert w.state.values["city"] == "New Delhi"


def test_partial_pincode_skips_lookup_and_clears():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_body("560001"))

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as c:
            w = Wizard(client=c)
            await w.change("pincode", "560001")
            await w.change("pincode", "56000")
            return w
    w = asyncio.run(go())
    assert len(calls) == 1
    assert w.state.values["state"] == ""
    assert w.state.values["city"] == ""


def test_out_of_order_resolution_keeps_latest_pincode():
    async def go():
        first_may_finish = asyncio.Event()

        async def handler(request):
            pin = request.url.path.rsplit("/", 1)[-1]
            if pin == "560001":
                await first_may_finish.wait()
            return httpx.Response(200, json=_body(pin))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as c:
            w = Wizard(client=c)
            slow = asyncio.create_task(w.change("pincode", "560001"))
            await asyncio.sleep(0)
            await w.change("pincode", "110001")
            first_may_finish.set()
            await slow
            return w

    w = asyncio.run(go())
    assert w.state.values["pincode"] == "110001"
    assert w.state.values["state"] == "Delhi"
    assert w.state.values["city"] == "New Delhi"


def test_full_scenario_through_controller_with_fallback():
    async def go():
        def handler(request):
            raise httpx.ConnectError("offline")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as c:
            w = Wizard(client=c)
            await w.change("aadhaarName", "Jane Doe")
            await w.change("aadhaarNumber", "123456789012")
            await w.change("mobile", "9876543210")
            await w.change("pincode", "560001")
            with patch("udyam.core.otp.generate_code", return_value="123456"):
                w.send_otp()
            w.verify_otp("123456")
            w.next()
            await w.change("panHolder", "Jane Doe")
            await w.change("panNumber", "abcde1234f")
            w.submit()
            return w

    w = asyncio.run(go())
    p = w.state.payload
    assert p is not None
    assert p["step1"]["pincode"] == "560001"
    assert p["step1"]["state"] == "Karnataka"
    assert p["step2"]["panNumber"] == "ABCDE1234F"
    assert p["consent"] is True
    assert w.view()["wizardId"] == w.id
