import re
from typing import Callable, Dict, Iterable, Mapping, Optional

AADHAAR_RE = re.compile(r"^\d{12}$")
MOBILE_RE = re.compile(r"^[6-9]\d{9}$")
PINCODE_RE = re.compile(r"^\d{6}$")
PAN_RE = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")

# fullmatch, not match: "$" alone would accept a trailing newline
def _pattern(rx: re.Pattern, message: str) -> Callable[[str], str]:
    def check(v: str) -> str:
        return "" if rx.fullmatch(v or "") else message
    return check


def _name_required(v: str) -> str:
    return "" if (v or "").strip() else "Name is required."


VALIDATORS: Dict[str, Callable[[str], str]] = {
    "aadhaarNumber": _pattern(AADHAAR_RE, "Aadhaar must be exactly 12 digits."),
    "mobile": _pattern(MOBILE_RE, "Enter a valid 10-digit Indian mobile."),
    "pincode": _pattern(PINCODE_RE, "PIN must be 6 digits."),
    "panNumber": _pattern(PAN_RE, "PAN format should be AAAAA9999A."),
    "aadhaarName": _name_required,
    "panHolder": _name_required,
}

# Fields stored case-normalized
UPPERCASE_FIELDS = frozenset({"panNumber"})


def normalize(name: str, value: Optional[str]) -> str:
    v = "" if value is None else str(value)
    if name in UPPERCASE_FIELDS:
        v = v.upper()
    return v


def validate(name: str, value: Optional[str]) -> str:
    """
    Error message for `value` in field `name`; "" means valid.
    Fields without a registered validator (state/city) are always valid here.
    """
    fn = VALIDATORS.get(name)
    if fn is None:
        return ""
    return fn(normalize(name, value))


def validate_many(names: Iterable[str], values: Mapping[str, str]) -> Dict[str, str]:
    return {n: validate(n, values.get(n, "")) for n in names}


def is_valid(values: Mapping[str, str]) -> bool:
    """Global validity over every validator-governed field."""
    return not any(validate_many(VALIDATORS.keys(), values).values())


def is_pincode(value: Optional[str]) -> bool:
    return bool(PINCODE_RE.fullmatch(value or ""))
