import pytest
from udyam.forms.schema import (
    STEPS, DERIVED_FIELDS, UnknownFieldError, field_names, get_field,
    step_field_names, schema_dict, last_step_index,
)


def test_two_ordered_steps():
    assert [s.key for s in STEPS] == ["aadhaar", "pan"]
    assert last_step_index() == 1
    assert step_field_names(0) == ["aadhaarName", "aadhaarNumber", "mobile", "pincode", "state", "city"]
    assert step_field_names(1) == ["panHolder", "panNumber"]


def test_derived_fields_are_read_only():
    for name in DERIVED_FIELDS:
        assert get_field(name).readOnly is True
    assert get_field("pincode").readOnly is False


def test_field_lookup():
    assert get_field("mobile").kind == "tel"
    assert get_field("aadhaarName").maxLength == 60
    with pytest.raises(UnknownFieldError):
        get_field("email")
    assert len(field_names()) == 8


def test_schema_dict_is_json_shaped():
    d = schema_dict()
    assert d["meta"]["steps"] == ["Aadhaar & OTP", "PAN Validation"]
    pan = d["steps"][1]["fields"][1]
    assert pan["name"] == "panNumber"
    assert pan["pattern"] == r"^[A-Z]{5}[0-9]{4}[A-Z]$"
    assert pan["options"] == []


def test_numeric_fields_carry_input_mode():
    d = schema_dict()
    by_name = {f["name"]: f for s in d["steps"] for f in s["fields"]}
    assert by_name["aadhaarNumber"]["inputMode"] == "numeric"
    assert by_name["pincode"]["inputMode"] == "numeric"
    assert by_name["panNumber"]["inputMode"] is None
