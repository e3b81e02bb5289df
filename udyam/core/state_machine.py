"""
Form state machine for the registration wizard.

One immutable WizardState plus named transitions. Every transition takes the
old state and the action's arguments and returns a new state; rejections are
soft (a message and/or per-field errors), never exceptions. The only
exceptions raised are for programming errors at the boundary: unknown field
names and direct edits of derived fields.
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from udyam.core import otp as otp_engine
from udyam.core.otp import OtpState
from udyam.core.payload import build_submission_payload, payload_dict
from udyam.forms import validators
from udyam.forms.schema import (
    DERIVED_FIELDS,
    STEPS,
    STEP_LABELS,
    TITLE,
    field_names,
    get_field,
    last_step_index,
    step_field_names,
)
from udyam.observability.logging import log

MSG_VERIFY_OTP_FIRST = "Please verify OTP first."
MSG_FIX_ERRORS = "Please fix errors before submitting."
MSG_NOT_TERMINAL = "Complete the remaining steps before submitting."


class ReadOnlyFieldError(ValueError):
    """A derived field (state/city) was edited directly."""


def _frozen(d: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class WizardState:
    active: int = 0
    values: Mapping[str, str] = field(default_factory=lambda: _frozen({n: "" for n in field_names()}))
    errors: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    otp: OtpState = field(default_factory=OtpState)
    message: Optional[str] = None
    payload: Optional[Mapping[str, Any]] = None
    # Monotonic id of the latest pincode lookup; older results are discarded
    lookup_seq: int = 0


def initial_state() -> WizardState:
    return WizardState()


# ---------------------------------------------------------------------------
# Derived flags (consumed by the renderer to enable/disable controls)
# ---------------------------------------------------------------------------
def is_terminal(state: WizardState) -> bool:
    return state.active == last_step_index()


def can_send_otp(state: WizardState) -> bool:
    return not state.otp.pending


def can_verify_otp(state: WizardState) -> bool:
    return state.otp.pending


def can_submit(state: WizardState) -> bool:
    return is_terminal(state) and validators.is_valid(state.values) and state.otp.verified


# ---------------------------------------------------------------------------
# Field transitions
# ---------------------------------------------------------------------------
def _with_values(state: WizardState, updates: Mapping[str, str]) -> WizardState:
    values = dict(state.values)
    values.update(updates)
    return replace(state, values=_frozen(values))


def _with_errors(state: WizardState, errors: Mapping[str, str]) -> WizardState:
    merged = dict(state.errors)
    merged.update(errors)
    return replace(state, errors=_frozen(merged))


def set_field(state: WizardState, name: str, value: str, *, allow_derived: bool = False) -> WizardState:
    """
    Store a value without validating it. panNumber is uppercased.
    Any pincode edit clears state/city in the same step (a complete code gets
    them back from the lookup), so no location outlives the code it belongs to.
    """
    get_field(name)
    if name in DERIVED_FIELDS and not allow_derived:
        raise ReadOnlyFieldError(name)

    v = validators.normalize(name, value)
    if name == "pincode" and (not validators.is_pincode(v) or v != state.values.get("pincode")):
        return _with_values(state, {"pincode": v, "state": "", "city": ""})
    return _with_values(state, {name: v})


def blur(state: WizardState, name: str) -> WizardState:
    get_field(name)
    msg = validators.validate(name, state.values.get(name, ""))
    return _with_errors(state, {name: msg})


def begin_lookup(state: WizardState) -> WizardState:
    return replace(state, lookup_seq=state.lookup_seq + 1)


def apply_lookup(state: WizardState, seq: int, pincode: str, location) -> WizardState:
    """
    Apply a resolved lookup only if it is the latest one issued and the pincode
    still holds the value it was issued for. `location` may be None (no result),
    in which case state/city are left as they are.
    """
    if seq != state.lookup_seq or state.values.get("pincode") != pincode:
        log(event="pincode_lookup_stale_discarded", pincode=pincode, seq=seq, latestSeq=state.lookup_seq)
        return state
    if location is None:
        return state
    return _with_values(state, {"state": location.state or "", "city": location.city or ""})


# ---------------------------------------------------------------------------
# OTP transitions
# ---------------------------------------------------------------------------
def issue_otp(state: WizardState) -> WizardState:
    checked = _with_errors(state, validators.validate_many(("aadhaarNumber", "mobile"), state.values))
    if checked.errors["aadhaarNumber"] or checked.errors["mobile"]:
        log(event="otp_issue_refused", reason="invalid_identity")
        return checked
    new_otp, issued = otp_engine.issue(state.otp)
    if not issued:
        log(event="otp_issue_refused", reason="pending")
    else:
        log(event="otp_issued", code=new_otp.serverCode)
    return replace(checked, otp=new_otp, message=new_otp.message)


def press_otp_key(state: WizardState, index: int, key: str) -> WizardState:
    # Entry boxes are disabled until a code is pending
    if not state.otp.pending:
        return state
    value, _ = otp_engine.press_key(state.otp.userInput, index, key)
    return replace(state, otp=otp_engine.set_input(state.otp, value))


def submit_otp(state: WizardState, code: Optional[str] = None) -> WizardState:
    """Verify `code`, or the digits already captured by the entry boxes when omitted."""
    if code is None:
        new_otp = otp_engine.verify(state.otp)
    else:
        new_otp = otp_engine.submit_input(state.otp, code)
    log(event="otp_verified" if new_otp.verified else "otp_verify_failed")
    return replace(state, otp=new_otp, message=new_otp.message)


def reset_otp(state: WizardState) -> WizardState:
    return replace(state, otp=otp_engine.reset(), message=None)


# ---------------------------------------------------------------------------
# Step transitions
# ---------------------------------------------------------------------------
def next_step(state: WizardState) -> WizardState:
    names = step_field_names(state.active)
    checked = _with_errors(state, validators.validate_many(names, state.values))
    failed = [n for n in names if checked.errors[n]]
    if failed:
        log(event="step_blocked", step=state.active, reason="invalid_fields", fields=failed)
        return checked
    if state.active == 0 and not state.otp.verified:
        log(event="step_blocked", step=state.active, reason="otp_unverified")
        return replace(checked, message=MSG_VERIFY_OTP_FIRST)
    target = min(state.active + 1, last_step_index())
    log(event="step_advanced", step=target)
    return replace(checked, active=target)


def back(state: WizardState) -> WizardState:
    target = max(state.active - 1, 0)
    log(event="step_back", step=target)
    return replace(state, active=target)


def submit(state: WizardState) -> WizardState:
    if not is_terminal(state):
        log(event="submit_blocked", reason="not_terminal", step=state.active)
        return replace(state, message=MSG_NOT_TERMINAL)
    if not can_submit(state):
        log(event="submit_blocked", reason="invalid")
        return replace(state, message=MSG_FIX_ERRORS)
    payload = build_submission_payload(state.values)
    log(event="submitted", payload=payload_dict(payload), submittedAt=payload["submittedAt"])
    return replace(state, payload=payload, message=None)


# ---------------------------------------------------------------------------
# Rendering snapshot
# ---------------------------------------------------------------------------
def view(state: WizardState) -> dict:
    step = STEPS[state.active]
    return {
        "meta": {"title": TITLE, "steps": list(STEP_LABELS)},
        "active": state.active,
        "step": {
            "key": step.key,
            "title": step.title,
            "description": step.description,
            "fields": [
                {
                    "spec": f.to_dict(),
                    "value": state.values.get(f.name, ""),
                    "error": state.errors.get(f.name, ""),
                }
                for f in step.fields
            ],
        },
        "otp": state.otp.public_dict(),
        "flags": {
            "canSendOtp": can_send_otp(state),
            "canVerifyOtp": can_verify_otp(state),
            "canGoBack": state.active > 0,
            "isTerminal": is_terminal(state),
            "canSubmit": can_submit(state),
        },
        "message": state.message,
        "payload": payload_dict(state.payload) if state.payload is not None else None,
    }


