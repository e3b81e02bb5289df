from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

class FieldChange(BaseModel):
    value: str = ""

class OtpVerifyRequest(BaseModel):
    # Omit to verify the digits captured via /otp/key
    code: Optional[str] = None

class OtpKeyRequest(BaseModel):
    index: int = Field(ge=0, le=5)
    key: str

class FieldView(BaseModel):
    spec: Dict[str, Any]
    value: str = ""
    error: str = ""

class StepView(BaseModel):
    key: str
    title: str
    description: str
    fields: List[FieldView] = Field(default_factory=list)

class OtpView(BaseModel):
    sent: bool = False
    userInput: str = ""
    verified: bool = False
    message: Optional[str] = None

class Flags(BaseModel):
    canSendOtp: bool
    canVerifyOtp: bool
    canGoBack: bool
    isTerminal: bool
    canSubmit: bool

class WizardView(BaseModel):
    wizardId: str
    meta: Dict[str, Any]
    active: int
    step: StepView
    otp: OtpView
    flags: Flags
    message: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None

class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
