#!/usr/bin/env python3
import sys
import os

print("Running preflight import check...")
try:
    # Stay offline during the check
    os.environ.setdefault("PINCODE_REMOTE_ENABLED", "false")

    import udyam.main
    print("Import udyam.main: OK")

    from udyam.forms.schema import field_names
    from udyam.forms.validators import VALIDATORS
    missing = [n for n in VALIDATORS if n not in field_names()]
    if missing:
        raise RuntimeError(f"Validators registered for unknown fields: {missing}")
    print("Validator/schema alignment: OK")

    print("Preflight check passed.")
    sys.exit(0)
except Exception as e:
    print(f"Preflight check FAILED: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)
