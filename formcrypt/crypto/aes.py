"""
AES-256-CFB Encryption with PKCS#7 Padding

Equivalent to Java "AES/CFB/PKCS5Padding": the plaintext is PKCS#7
padded to a whole number of 16-byte blocks and then run through
AES-CFB with full 128-bit feedback. Decryptors strip the padding, so
it must be present even though CFB itself does not need it.
"""

import logging
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.decrepit.ciphers.modes import CFB
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms
from cryptography.hazmat.backends import default_backend

from formcrypt.common.exceptions import CipherFailure

logger = logging.getLogger(__name__)

KEY_SIZE = 32
BLOCK_SIZE = 16


def pkcs7_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Apply PKCS#7 padding to data.
    
    Args:
        data: Data to pad
        block_size: Block size in bytes (default: 16 for AES)
    
    Returns:
        Padded data (always at least one byte longer)
    """
    padder = padding.PKCS7(block_size * 8).padder()
    return padder.update(data) + padder.finalize()


def encrypt_content(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """
    Encrypt content using AES-256 CFB mode with PKCS#7 padding.
    
    Args:
        plaintext: Bytes to encrypt
        key: 32-byte AES key
        iv: 16-byte IV from the record's Seed
    
    Returns:
        Raw ciphertext, same length as the padded plaintext
    
    Raises:
        ValueError: If key or IV length is wrong
        CipherFailure: If the cipher cannot be created or finalized
    """
    if len(key) != KEY_SIZE:
        raise ValueError(f"AES-256 requires {KEY_SIZE}-byte key, got {len(key)} bytes")
    if len(iv) != BLOCK_SIZE:
        raise ValueError(f"AES-CFB requires {BLOCK_SIZE}-byte IV, got {len(iv)} bytes")
    
    padded_data = pkcs7_pad(plaintext)
    
    try:
        cipher = Cipher(
            algorithms.AES(key),
            CFB(iv),
            backend=default_backend()
        )
        encryptor = cipher.encryptor()
        ciphertext = encryptor.update(padded_data) + encryptor.finalize()
    except (UnsupportedAlgorithm, ValueError) as e:
        raise CipherFailure(f"Encryption failed: {e}") from e
    
    logger.debug("Encrypted %d bytes into %d bytes", len(plaintext), len(ciphertext))
    return ciphertext
