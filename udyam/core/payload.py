from types import MappingProxyType
from typing import Any, Mapping

from udyam.forms.schema import step_field_names
from udyam.utils.time import now_iso


def build_submission_payload(values: Mapping[str, str]) -> Mapping[str, Any]:
    """
    Read-only snapshot of the submitted form. Callers must have checked global
    validity and OTP verification first; this only shapes the data.
    """
    return MappingProxyType({
        "step1": MappingProxyType({name: values.get(name, "") for name in step_field_names(0)}),
        "step2": MappingProxyType({name: values.get(name, "") for name in step_field_names(1)}),
        "consent": True,
        "submittedAt": now_iso(),
    })


def payload_dict(payload: Mapping[str, Any]) -> dict:
    """Plain, independent copy for serialization and rendering."""
    return {k: (payload_dict(v) if isinstance(v, Mapping) else v) for k, v in payload.items()}
