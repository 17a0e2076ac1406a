"""
Common models, configuration and utilities for FormCrypt.
"""

from .models import FormKeyMaterial, Record, RecordFile, EncryptedBlob
from .utils import b64encode, b64decode, generate_symmetric_key
from .exceptions import *

__all__ = [
    'FormKeyMaterial',
    'Record',
    'RecordFile',
    'EncryptedBlob',
    'b64encode',
    'b64decode',
    'generate_symmetric_key',
    'FormCryptException',
    'KeyParseError',
    'EncryptionError',
    'CipherFailure',
    'WrapError',
    'EnvironmentUnsupported',
]
