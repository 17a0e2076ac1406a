"""
MD5 digests used for IV seeding, file entries and the element signature.
"""

import hashlib


def md5_digest(data: bytes) -> bytes:
    """Return the raw 16-byte MD5 digest of data."""
    return hashlib.md5(data).digest()


def md5_hex(data: bytes) -> str:
    """Return the lowercase hex MD5 digest of data."""
    return hashlib.md5(data).hexdigest()
