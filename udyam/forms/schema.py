"""
Declarative wizard schema.

Steps and fields are plain data so a single generic renderer can draw any step:
an ordered tuple of StepSpec, each holding an ordered tuple of FieldSpec tagged
by `kind`. Nothing here changes after import.
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Literal, Optional, Tuple

FieldKind = Literal["text", "tel", "select"]


@dataclass(frozen=True)
class SelectOption:
    value: str
    label: str


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: FieldKind = "text"
    required: bool = False
    pattern: Optional[str] = None
    maxLength: Optional[int] = None
    readOnly: bool = False
    placeholder: str = ""
    inputMode: Optional[str] = None
    options: Tuple[SelectOption, ...] = ()

    def to_dict(self) -> dict:
        d = asdict(self)
        d["options"] = [asdict(o) for o in self.options]
        return d


@dataclass(frozen=True)
class StepSpec:
    key: str
    title: str
    description: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "title": self.title,
            "description": self.description,
            "fields": [f.to_dict() for f in self.fields],
        }


TITLE = "Udyam Registration"
STEP_LABELS: Tuple[str, ...] = ("Aadhaar & OTP", "PAN Validation")

STEPS: Tuple[StepSpec, ...] = (
    StepSpec(
        key="aadhaar",
        title="Step 1 — Aadhaar & OTP Verification",
        description="Enter Aadhaar details to receive and verify OTP (simulated).",
        fields=(
            FieldSpec("aadhaarName", "Name (as per Aadhaar)", "text", required=True,
                      maxLength=60, placeholder="Full name"),
            FieldSpec("aadhaarNumber", "Aadhaar Number", "text", required=True,
                      pattern=r"^\d{12}$", placeholder="12-digit Aadhaar", inputMode="numeric"),
            FieldSpec("mobile", "Mobile (linked to Aadhaar)", "tel", required=True,
                      pattern=r"^[6-9]\d{9}$", placeholder="10-digit mobile"),
            FieldSpec("pincode", "PIN Code", "text", required=True,
                      pattern=r"^\d{6}$", placeholder="e.g., 560001", inputMode="numeric"),
            FieldSpec("state", "State", "text", required=True, readOnly=True,
                      placeholder="Auto-filled from PIN"),
            FieldSpec("city", "City/District", "text", required=True, readOnly=True,
                      placeholder="Auto-filled from PIN"),
        ),
    ),
    StepSpec(
        key="pan",
        title="Step 2 — PAN Validation",
        description="Provide PAN to proceed. Client-side format check applies.",
        fields=(
            FieldSpec("panHolder", "Name (as per PAN)", "text", required=True,
                      maxLength=60, placeholder="Full name"),
            FieldSpec("panNumber", "PAN Number", "text", required=True,
                      pattern=r"^[A-Z]{5}[0-9]{4}[A-Z]$", placeholder="ABCDE1234F"),
        ),
    ),
)

# Written only by the postal lookup, never by the user
DERIVED_FIELDS = frozenset({"state", "city"})

_BY_NAME: Dict[str, FieldSpec] = {f.name: f for s in STEPS for f in s.fields}


class UnknownFieldError(KeyError):
    pass


def field_names() -> List[str]:
    return [f.name for s in STEPS for f in s.fields]


def get_field(name: str) -> FieldSpec:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownFieldError(name) from None


def step_field_names(index: int) -> List[str]:
    return [f.name for f in STEPS[index].fields]


def last_step_index() -> int:
    return len(STEPS) - 1


def schema_dict() -> dict:
    return {
        "meta": {"title": TITLE, "steps": list(STEP_LABELS)},
        "steps": [s.to_dict() for s in STEPS],
    }
