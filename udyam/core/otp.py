"""
Simulated OTP engine.

The code never leaves the process: issuance stores it in OtpState and (in demo
mode) echoes it in the user-facing message. All functions are pure over
OtpState except generate_code(), which draws from the process random source.
"""
import secrets
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from udyam.settings import settings

OTP_LENGTH = 6

MSG_VERIFIED = "OTP verified successfully."
MSG_INVALID = "Invalid OTP. Please try again."
MSG_PENDING = "OTP already sent. Verify it or reset before requesting a new one."
MSG_NOT_SENT = "Request an OTP first."

BACKSPACE = "Backspace"


@dataclass(frozen=True)
class OtpState:
    sent: bool = False
    serverCode: str = ""
    userInput: str = ""
    verified: bool = False
    message: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self.sent and not self.verified

    def public_dict(self) -> dict:
        # serverCode stays server-side; the message is the only (demo) echo channel
        return {
            "sent": self.sent,
            "userInput": self.userInput,
            "verified": self.verified,
            "message": self.message,
        }


def generate_code() -> str:
    """Uniform over 100000..999999 inclusive."""
    return str(100000 + secrets.randbelow(900000))


def sent_message(code: str) -> str:
    if settings.OTP_ECHO_CODE:
        return f"Simulated OTP sent to your mobile. (Code: {code})"
    return "Simulated OTP sent to your mobile."


def issue(otp: OtpState) -> Tuple[OtpState, bool]:
    """
    Issue a fresh code. Refused while a previous code is pending verification;
    reset() is the explicit way out. Returns (new_state, issued).
    """
    if otp.pending:
        return replace(otp, message=MSG_PENDING), False
    code = generate_code()
    return OtpState(sent=True, serverCode=code, userInput="", verified=False, message=sent_message(code)), True


def set_input(otp: OtpState, code: str) -> OtpState:
    return replace(otp, userInput=code or "")


def verify(otp: OtpState) -> OtpState:
    if otp.verified:
        return otp
    if not otp.sent:
        return replace(otp, message=MSG_NOT_SENT)
    if len(otp.userInput) == OTP_LENGTH and otp.userInput == otp.serverCode:
        return replace(otp, verified=True, message=MSG_VERIFIED)
    return replace(otp, verified=False, message=MSG_INVALID)


def submit_input(otp: OtpState, code: str) -> OtpState:
    if otp.verified:
        return otp
    return verify(set_input(otp, code))


def reset() -> OtpState:
    return OtpState()


def press_key(value: str, index: int, key: str, length: int = OTP_LENGTH) -> Tuple[str, int]:
    """
    Digit-by-digit entry box. `index` is the focused box; returns (value, focus).

    Backspace at i drops the digit at i-1 and moves focus left. A digit at i
    overwrites position i and moves focus right unless on the last box.
    Anything else is ignored. The captured value never exceeds `length`.
    """
    value = (value or "")[:length]
    i = min(max(int(index), 0), length - 1)

    if key == BACKSPACE:
        new_value = value[:max(0, i - 1)] + value[i:]
        return new_value, max(0, i - 1)

    if len(key) == 1 and key in "0123456789":
        new_value = (value[:i] + key + value[i + 1:])[:length]
        return new_value, (i + 1 if i < length - 1 else i)

    return value, i
