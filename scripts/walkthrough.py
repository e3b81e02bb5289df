#!/usr/bin/env python3
"""
Drive one wizard end to end against the in-process core and print the payload.

    python scripts/walkthrough.py [--offline]
"""
import asyncio
import json
import os
import sys


async def run() -> int:
    from udyam.core.wizard import Wizard

    w = Wizard()
    for name, value in (
        ("aadhaarName", "Jane Doe"),
        ("aadhaarNumber", "123456789012"),
        ("mobile", "9876543210"),
        ("pincode", "560001"),
    ):
        await w.change(name, value)
    print(f"state={w.state.values['state']!r} city={w.state.values['city']!r}")

    w.send_otp()
    w.verify_otp(w.state.otp.serverCode)
    w.next()
    await w.change("panHolder", "Jane Doe")
    await w.change("panNumber", "abcde1234f")
    w.submit()

    if w.state.payload is None:
        print(f"Submission blocked: {w.state.message}")
        return 1
    print(json.dumps(w.view()["payload"], indent=2))
    return 0


if __name__ == "__main__":
    if "--offline" in sys.argv[1:]:
        os.environ["PINCODE_REMOTE_ENABLED"] = "false"
    sys.exit(asyncio.run(run()))
