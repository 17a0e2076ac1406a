"""
Cryptographic primitives for FormCrypt.

This package provides implementations of:
- MD5 digests
- Deterministic IV sequence (Seed)
- AES-256-CFB encryption with PKCS#7 padding
- RSA-OAEP key wrapping
"""

from .digest import md5_digest, md5_hex
from .seed import Seed
from .aes import encrypt_content, pkcs7_pad
from .rsa import load_public_key, wrap, wrap_b64, OAEP_PADDING

__all__ = [
    'md5_digest',
    'md5_hex',
    'Seed',
    'encrypt_content',
    'pkcs7_pad',
    'load_public_key',
    'wrap',
    'wrap_b64',
    'OAEP_PADDING',
]
