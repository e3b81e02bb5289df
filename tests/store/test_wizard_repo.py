from unittest.mock import patch

import pytest

from udyam.settings import settings
from udyam.store import wizard_repo


@pytest.fixture(autouse=True)
def empty_repo():
    wizard_repo.clear()
    yield
    wizard_repo.clear()


def test_create_load_drop():
    w = wizard_repo.create_wizard()
    assert wizard_repo.load_wizard(w.id) is w
    assert wizard_repo.drop_wizard(w.id) is True
    assert wizard_repo.drop_wizard(w.id) is False
    with pytest.raises(wizard_repo.WizardNotFound):
        wizard_repo.load_wizard(w.id)


def test_oldest_wizard_evicted_past_limit():
    with patch.object(settings, "MAX_WIZARDS", 2):
        a = wizard_repo.create_wizard()
        b = wizard_repo.create_wizard()
        c = wizard_repo.create_wizard()
    assert wizard_repo.count() == 2
    with pytest.raises(wizard_repo.WizardNotFound):
        wizard_repo.load_wizard(a.id)
    assert wizard_repo.load_wizard(b.id) is b
    assert wizard_repo.load_wizard(c.id) is c


def test_recently_loaded_wizard_survives_eviction():
    with patch.object(settings, "MAX_WIZARDS", 2):
        a = wizard_repo.create_wizard()
        b = wizard_repo.create_wizard()
        wizard_repo.load_wizard(a.id)
        wizard_repo.create_wizard()
    assert wizard_repo.load_wizard(a.id) is a
    with pytest.raises(wizard_repo.WizardNotFound):
        wizard_repo.load_wizard(b.id)
