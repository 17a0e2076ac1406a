"""
Utility functions for FormCrypt.
"""

import base64
import secrets

SYMMETRIC_KEY_SIZE = 32


def b64encode(data: bytes) -> str:
    """
    Base64 encode bytes to string.
    
    Args:
        data: Bytes to encode
    
    Returns:
        Base64-encoded string
    """
    return base64.b64encode(data).decode('ascii')


def b64decode(data: str) -> bytes:
    """
    Base64 decode string to bytes.
    
    Args:
        data: Base64-encoded string
    
    Returns:
        Decoded bytes
    """
    return base64.b64decode(data)


def generate_symmetric_key(length: int = SYMMETRIC_KEY_SIZE) -> bytes:
    """
    Generate a fresh AES-256 key from the OS CSPRNG.
    
    Args:
        length: Length in bytes (default: 32)
    
    Returns:
        Random bytes
    """
    return secrets.token_bytes(length)
