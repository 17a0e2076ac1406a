"""
RSA-OAEP Key Wrapping

Equivalent to Java "RSA/NONE/OAEPWithSHA256AndMGF1Padding": OAEP with
SHA-256 as the label hash and MGF1 over SHA-1. The same padding wraps
the record's symmetric key and the element signature digest.
"""

import base64
import binascii
import re
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization, hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from formcrypt.common.exceptions import KeyParseError, WrapError
from formcrypt.common.utils import b64encode

OAEP_PADDING = padding.OAEP(
    mgf=padding.MGF1(algorithm=hashes.SHA1()),
    algorithm=hashes.SHA256(),
    label=None,
)

PEM_HEADER = "-----BEGIN PUBLIC KEY-----"
PEM_FOOTER = "-----END PUBLIC KEY-----"

_WHITESPACE = re.compile(r"\s+")


def load_public_key(encryption_key: str) -> RSAPublicKey:
    """
    Load an RSA public key.
    
    Form definitions publish the key as the bare base64 body of a
    SubjectPublicKeyInfo; a full PEM document is accepted as well.
    
    Args:
        encryption_key: PEM text or base64 DER body
    
    Returns:
        RSA public key object
    
    Raises:
        KeyParseError: If the key cannot be parsed or is not RSA
    """
    text = (encryption_key or "").strip()
    if not text:
        raise KeyParseError("Empty public key")
    
    # PEM armour is optional and may sit on a single line
    if text.startswith(PEM_HEADER):
        text = text[len(PEM_HEADER):].split(PEM_FOOTER, 1)[0]

    try:
        der = base64.b64decode(_WHITESPACE.sub("", text), validate=True)
        key = serialization.load_der_public_key(der)
    except (ValueError, TypeError, binascii.Error, UnsupportedAlgorithm) as e:
        raise KeyParseError(f"Invalid public key: {e}") from e
    
    if not isinstance(key, RSAPublicKey):
        raise KeyParseError(f"Expected an RSA public key, got {type(key).__name__}")
    
    return key


def wrap(data: bytes, public_key: RSAPublicKey) -> bytes:
    """
    Encrypt data with RSA-OAEP (SHA-256, MGF1-SHA1).
    
    Args:
        data: Bytes to wrap (symmetric key or digest)
        public_key: RSA public key
    
    Returns:
        Wrapped bytes, one modulus in length
    
    Raises:
        WrapError: If data exceeds the OAEP payload limit
    """
    try:
        return public_key.encrypt(data, OAEP_PADDING)
    except ValueError as e:
        raise WrapError(f"RSA-OAEP wrap failed: {e}") from e


def wrap_b64(data: bytes, public_key: RSAPublicKey) -> str:
    """Wrap data and return it base64-encoded."""
    return b64encode(wrap(data, public_key))
