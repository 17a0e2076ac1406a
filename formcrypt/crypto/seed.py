"""
Deterministic IV sequence.

The IV for every encrypted item of a record is derived from
MD5(instanceID || symmetricKey). Before each item one byte of the seed
is incremented, cycling through positions 0..15, and the whole 16-byte
array is used as the IV. Decryptors replay the same sequence, so items
must be encrypted in order: media files first, submission XML last.
"""

from .digest import md5_digest

IV_BYTE_LENGTH = 16


class Seed:
    """
    IV generator scoped to a single record.
    """
    
    def __init__(self, instance_id: str, symmetric_key: bytes):
        """
        Derive the seed array.
        
        Args:
            instance_id: Record instance ID
            symmetric_key: 32-byte AES key of the record
        """
        digest = md5_digest(instance_id.encode('utf-8') + symmetric_key)
        self._iv = bytearray(
            digest[i % len(digest)] for i in range(IV_BYTE_LENGTH)
        )
        self._counter = 0
    
    @property
    def counter(self) -> int:
        """Number of IVs handed out so far."""
        return self._counter
    
    def next_iv(self) -> bytes:
        """
        Increment the seed and return the IV for the next item.
        
        Returns:
            16-byte IV
        """
        position = self._counter % IV_BYTE_LENGTH
        self._iv[position] = (self._iv[position] + 1) % 256
        self._counter += 1
        return bytes(self._iv)
