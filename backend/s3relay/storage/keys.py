"""
Object key derivation and public URL construction.

Key format: {unix-timestamp}-{basename}, optionally {unix-timestamp}-{nonce}-{basename}.
Consumers rebuild URLs from this convention, so it must stay stable.
"""
import secrets
import time
from typing import Optional
from urllib.parse import quote

from s3relay.errors import InvalidInput


def sanitize_filename(filename: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to its last path component.

    Both '/' and '\\' count as separators so '../../etc/passwd' and
    'C:\\Users\\me\\a.txt' become 'passwd' and 'a.txt'.

    Raises:
        InvalidInput: if nothing usable is left
    """
    if not filename:
        raise InvalidInput("empty filename")

    base = filename.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1].strip()
    if base in ("", ".", ".."):
        raise InvalidInput(f"unusable filename: {filename!r}")
    return base


def build_object_key(
    filename: Optional[str],
    timestamp: Optional[int] = None,
    nonce: bool = False
) -> str:
    """
    Build the object key for an upload.

    Args:
        filename: Client-supplied filename (untrusted)
        timestamp: Unix seconds, defaults to now
        nonce: Insert 8 random hex chars so same-second uploads of the same
            name never collide

    Returns:
        Object key string
    """
    base = sanitize_filename(filename)
    if timestamp is None:
        timestamp = int(time.time())
    if nonce:
        return f"{timestamp}-{secrets.token_hex(4)}-{base}"
    return f"{timestamp}-{base}"


def build_object_url(
    bucket: str,
    region: str,
    key: str,
    endpoint_url: Optional[str] = None
) -> str:
    """Public URL of an object, virtual-hosted style unless a custom endpoint is set."""
    quoted_key = quote(key)
    if endpoint_url:
        return f"{endpoint_url.rstrip('/')}/{bucket}/{quoted_key}"
    return f"https://{bucket}.s3.{region}.amazonaws.com/{quoted_key}"
