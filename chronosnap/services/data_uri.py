"""
Purpose:
- Small helpers for base64 data URIs (the in-memory form of captured and generated images).

Notes:
- Any data:<mime>;base64, prefix is stripped before upload, whatever the media type;
  a bare base64 payload passes through unchanged.
"""

from __future__ import annotations
import base64
import re
from typing import Tuple

BASE64_PREFIX_RE = re.compile(r"^data:[^,]*;base64,")
DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<b64>;base64)?,(?P<data>.*)$", re.DOTALL)

def strip_base64_prefix(image: str) -> str:
    """Drop a leading data:...;base64, prefix, leaving the encoded payload."""
    return BASE64_PREFIX_RE.sub("", image, count=1)

def payload_bytes(image: str) -> bytes:
    """
    Raw bytes behind a data URI or bare base64 string.
    Raises binascii.Error (a ValueError) on anything that is not clean base64.
    """
    return base64.b64decode(strip_base64_prefix(image), validate=True)

def to_data_uri(data: bytes | str, mime_type: str) -> str:
    """Wrap raw bytes (or an already-encoded base64 string) as a data URI."""
    if isinstance(data, (bytes, bytearray)):
        data = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{data}"

def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a data URI into (mime_type, raw bytes).
    Raises ValueError when the string is not a data URI.
    """
    m = DATA_URI_RE.match(uri or "")
    if not m:
        raise ValueError("not a data URI")
    mime = m.group("mime") or "text/plain"
    payload = m.group("data")
    if m.group("b64"):
        return mime, base64.b64decode(payload)
    return mime, payload.encode("utf-8")
