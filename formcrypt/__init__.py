"""
FormCrypt

Envelope encryption for form submissions, byte-compatible with the
ODK encrypted-submission format:
- RSA-OAEP wrapped AES-256 key
- AES-256-CFB content encryption with PKCS#7 padding
- Deterministic IV sequence derived from the instance ID
- Signed submission manifest
"""

__version__ = "1.0.0"
