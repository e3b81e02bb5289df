from collections import OrderedDict
from typing import Optional

import httpx

from udyam.core.wizard import Wizard
from udyam.observability.logging import log
from udyam.settings import settings

# In-process only: wizards live as long as the server process
_WIZARDS: "OrderedDict[str, Wizard]" = OrderedDict()


class WizardNotFound(KeyError):
    pass


def create_wizard(client: Optional[httpx.AsyncClient] = None) -> Wizard:
    w = Wizard(client=client)
    _WIZARDS[w.id] = w
    limit = max(1, int(settings.MAX_WIZARDS))
    while len(_WIZARDS) > limit:
        evicted_id, _ = _WIZARDS.popitem(last=False)
        log(event="wizard_evicted", wizardId=evicted_id)
    log(event="wizard_created", wizardId=w.id, live=len(_WIZARDS))
    return w


def load_wizard(wizard_id: str) -> Wizard:
    try:
        w = _WIZARDS[wizard_id]
    except KeyError:
        raise WizardNotFound(wizard_id) from None
    # Least recently used wizards are evicted first
    _WIZARDS.move_to_end(wizard_id)
    return w


def drop_wizard(wizard_id: str) -> bool:
    return _WIZARDS.pop(wizard_id, None) is not None


def clear() -> None:
    _WIZARDS.clear()


def count() -> int:
    return len(_WIZARDS)
