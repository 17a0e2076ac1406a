"""
Custom exceptions for FormCrypt.
"""


class FormCryptException(Exception):
    """Base exception for FormCrypt errors."""
    pass


class KeyParseError(FormCryptException):
    """Public key could not be parsed."""
    pass


class EncryptionError(FormCryptException):
    """Encryption failed."""
    pass


class CipherFailure(EncryptionError):
    """Symmetric cipher failed to finalize."""
    pass


class WrapError(EncryptionError):
    """RSA-OAEP wrapping failed."""
    pass


class EnvironmentUnsupported(FormCryptException):
    """Required primitives are not available in this environment."""
    pass
