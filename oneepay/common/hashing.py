import base64
import hashlib


def digest(value: str) -> str:
    """Base64-encoded SHA-1 of the UTF-8 bytes of ``value``."""
    raw = hashlib.sha1(value.encode("utf-8")).digest()
    return base64.b64encode(raw).decode("utf-8")
