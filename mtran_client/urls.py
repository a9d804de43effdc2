from typing import Optional

DEFAULT_URL = "http://localhost:8989"

ENDPOINT_TRANSLATE = "/translate"
ENDPOINT_TRANSLATE_BATCH = "/translate/batch"
ENDPOINT_MODELS = "/models"
ENDPOINT_VERSION = "/version"
ENDPOINT_HEALTH = "/health"


def normalize_url(url: Optional[str], default: str = DEFAULT_URL) -> str:
    """Canonicalizes a user-supplied server address into a base URL."""
    if not isinstance(url, str) or not url.strip():
        return default

    trimmed = url.strip().rstrip("/")

    if trimmed.startswith(("http://", "https://")):
        return trimmed

    # Port 443 without a scheme almost always means TLS.
    if ":443" in trimmed:
        return f"https://{trimmed}"

    return f"http://{trimmed}"
