import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    # Postal lookup
    PINCODE_API_URL: str = os.getenv("PINCODE_API_URL", "https://api.postalpincode.in/pincode/{pin}")
    PINCODE_TIMEOUT_SEC: float = float(os.getenv("PINCODE_TIMEOUT_SEC", "5.0"))
    # Offline/demo mode: skip the remote call and use the local table only
    PINCODE_REMOTE_ENABLED: bool = os.getenv("PINCODE_REMOTE_ENABLED", "true").lower() == "true"

    # OTP (simulated transport). The code is echoed back in the "sent" message
    # because there is no delivery channel; turn off outside demos.
    OTP_ECHO_CODE: bool = os.getenv("OTP_ECHO_CODE", "true").lower() == "true"

    # Wizard registry (in-process only)
    MAX_WIZARDS: int = int(os.getenv("MAX_WIZARDS", "1000"))

    # Security & Privacy
    ENABLE_PII_REDACTION: bool = os.getenv("ENABLE_PII_REDACTION", "true").lower() == "true"
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

settings = Settings()
