from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from udyam.forms.validators import is_pincode
from udyam.observability.logging import log
from udyam.settings import settings


@dataclass(frozen=True)
class Location:
    state: str
    city: str


# Used whenever the remote service fails or has no answer
PIN_LOCAL: Dict[str, Location] = {
    "560001": Location(state="Karnataka", city="Bengaluru"),
    "110001": Location(state="Delhi", city="New Delhi"),
    "400001": Location(state="Maharashtra", city="Mumbai"),
    "700001": Location(state="West Bengal", city="Kolkata"),
    "600001": Location(state="Tamil Nadu", city="Chennai"),
}


def _parse_response(data: Any) -> Optional[Location]:
    """
    Expected shape: [{"Status": "Success", "PostOffice": [{"State": ..., "District": ...}, ...]}]
    Anything else is treated as no answer.
    """
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    if not isinstance(first, dict) or first.get("Status") != "Success":
        return None
    offices = first.get("PostOffice") or []
    if not isinstance(offices, list) or not offices or not isinstance(offices[0], dict):
        return None
    po = offices[0]
    state = str(po.get("State") or "").strip()
    city = str(po.get("District") or "").strip()
    if not state and not city:
        return None
    return Location(state=state, city=city)


async def _query_remote(pin: str, client: Optional[httpx.AsyncClient]) -> Optional[Location]:
    url = settings.PINCODE_API_URL.format(pin=pin)
    if client is not None:
        resp = await client.get(url)
    else:
        async with httpx.AsyncClient(timeout=settings.PINCODE_TIMEOUT_SEC) as c:
            resp = await c.get(url)
    resp.raise_for_status()
    return _parse_response(resp.json())


async def lookup_pincode(pin: str, client: Optional[httpx.AsyncClient] = None) -> Optional[Location]:
    """
    Resolve a 6-digit PIN code to (state, city).

    One remote attempt, then the local table. Never raises: every failure
    degrades to the fallback, or None when the code is unknown there too.
    Non-6-digit input returns None without touching the network.
    """
    if not is_pincode(pin):
        return None

    if settings.PINCODE_REMOTE_ENABLED:
        try:
            loc = await _query_remote(pin, client)
            if loc is not None:
                log(event="pincode_lookup_resolved", pincode=pin, source="remote")
                return loc
        except Exception as e:
            log(
                event="pincode_lookup_remote_failed",
                pincode=pin,
                errorType=type(e).__name__,
                error=str(e)[:200],
            )

    loc = PIN_LOCAL.get(pin)
    log(event="pincode_lookup_resolved", pincode=pin, source="local" if loc else "none")
    return loc
