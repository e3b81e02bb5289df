import uuid
from typing import Optional

import httpx

from udyam.core import state_machine as sm
from udyam.core.state_machine import WizardState
from udyam.forms.validators import is_pincode
from udyam.lookup.postal import lookup_pincode
from udyam.observability.logging import log


class Wizard:
    """
    Holds one wizard's current state and drives the transitions.

    Everything is synchronous except the pincode lookup in change(). Several
    lookups may be in flight at once (rapid edits, concurrent requests); each
    takes a sequence number before suspending and its result is applied only
    if it is still the latest and the pincode is unchanged.
    """

    def __init__(self, wizard_id: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.id = wizard_id or uuid.uuid4().hex
        self.state: WizardState = sm.initial_state()
        self._client = client

    async def change(self, name: str, value: str) -> WizardState:
        self.state = sm.set_field(self.state, name, value)
        log(event="field_changed", wizardId=self.id, field=name, value=self.state.values[name])

        pin = self.state.values.get("pincode", "")
        if name == "pincode" and is_pincode(pin):
            self.state = sm.begin_lookup(self.state)
            seq = self.state.lookup_seq
            location = await lookup_pincode(pin, client=self._client)
            self.state = sm.apply_lookup(self.state, seq, pin, location)
        return self.state

    def blur(self, name: str) -> WizardState:
        self.state = sm.blur(self.state, name)
        log(event="field_blurred", wizardId=self.id, field=name, valid=not self.state.errors[name])
        return self.state

    def send_otp(self) -> WizardState:
        self.state = sm.issue_otp(self.state)
        return self.state

    def verify_otp(self, code: Optional[str] = None) -> WizardState:
        self.state = sm.submit_otp(self.state, code)
        return self.state

    def otp_key(self, index: int, key: str) -> WizardState:
        self.state = sm.press_otp_key(self.state, index, key)
        return self.state

    def reset_otp(self) -> WizardState:
        self.state = sm.reset_otp(self.state)
        return self.state

    def next(self) -> WizardState:
        self.state = sm.next_step(self.state)
        return self.state

    def back(self) -> WizardState:
        self.state = sm.back(self.state)
        return self.state

    def submit(self) -> WizardState:
        self.state = sm.submit(self.state)
        return self.state

    def view(self) -> dict:
        return {"wizardId": self.id, **sm.view(self.state)}
