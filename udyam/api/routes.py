from fastapi import APIRouter, HTTPException

from udyam.api.schemas import FieldChange, OtpKeyRequest, OtpVerifyRequest, WizardView
from udyam.core.state_machine import ReadOnlyFieldError
from udyam.core.wizard import Wizard
from udyam.forms.schema import UnknownFieldError, schema_dict
from udyam.store.wizard_repo import WizardNotFound, create_wizard, drop_wizard, load_wizard

# Every handler is async: wizard state is only mutated on the event-loop thread,
# never from the threadpool FastAPI uses for plain `def` endpoints.
router = APIRouter()


def _wizard(wizard_id: str) -> Wizard:
    try:
        return load_wizard(wizard_id)
    except WizardNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown wizard: {wizard_id}")


@router.get("/schema")
async def get_schema():
    """Static field/step schema for renderers that draw before creating a wizard."""
    return schema_dict()


@router.post("/wizards", response_model=WizardView, status_code=201)
async def new_wizard():
    return create_wizard().view()


@router.get("/wizards/{wizard_id}", response_model=WizardView)
async def get_wizard(wizard_id: str):
    return _wizard(wizard_id).view()


@router.delete("/wizards/{wizard_id}", status_code=204)
async def delete_wizard(wizard_id: str):
    if not drop_wizard(wizard_id):
        raise HTTPException(status_code=404, detail=f"Unknown wizard: {wizard_id}")


# ---------------------------------------------------------------------------
# onChange / onBlur
# ---------------------------------------------------------------------------
@router.put("/wizards/{wizard_id}/fields/{name}", response_model=WizardView)
async def change_field(wizard_id: str, name: str, body: FieldChange):
    w = _wizard(wizard_id)
    try:
        await w.change(name, body.value)
    except UnknownFieldError:
        raise HTTPException(status_code=422, detail=f"Unknown field: {name}")
    except ReadOnlyFieldError:
        raise HTTPException(status_code=409, detail=f"Field is read-only: {name}")
    return w.view()


@router.post("/wizards/{wizard_id}/fields/{name}/blur", response_model=WizardView)
async def blur_field(wizard_id: str, name: str):
    w = _wizard(wizard_id)
    try:
        w.blur(name)
    except UnknownFieldError:
        raise HTTPException(status_code=422, detail=f"Unknown field: {name}")
    return w.view()


# ---------------------------------------------------------------------------
# OTP
# ---------------------------------------------------------------------------
@router.post("/wizards/{wizard_id}/otp/send", response_model=WizardView)
async def send_otp(wizard_id: str):
    w = _wizard(wizard_id)
    w.send_otp()
    return w.view()


@router.post("/wizards/{wizard_id}/otp/verify", response_model=WizardView)
async def verify_otp(wizard_id: str, body: OtpVerifyRequest):
    w = _wizard(wizard_id)
    w.verify_otp(body.code)
    return w.view()


@router.post("/wizards/{wizard_id}/otp/key", response_model=WizardView)
async def otp_key(wizard_id: str, body: OtpKeyRequest):
    w = _wizard(wizard_id)
    w.otp_key(body.index, body.key)
    return w.view()


@router.post("/wizards/{wizard_id}/otp/reset", response_model=WizardView)
async def reset_otp(wizard_id: str):
    w = _wizard(wizard_id)
    w.reset_otp()
    return w.view()


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------
@router.post("/wizards/{wizard_id}/next", response_model=WizardView)
async def next_step(wizard_id: str):
    w = _wizard(wizard_id)
    w.next()
    return w.view()


@router.post("/wizards/{wizard_id}/back", response_model=WizardView)
async def back(wizard_id: str):
    w = _wizard(wizard_id)
    w.back()
    return w.view()


@router.post("/wizards/{wizard_id}/submit", response_model=WizardView)
async def submit(wizard_id: str):
    w = _wizard(wizard_id)
    w.submit()
    return w.view()
