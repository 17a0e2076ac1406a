"""
Submission Encryptor

Turns a Record into its encrypted form:
1. Generate an AES-256 key, wrap it with the form's RSA key, derive the IV seed
2. Encrypt media files in input order, one IV each
3. Encrypt the submission XML last, as 'submission.xml.enc'
4. Sign: MD5 over the newline-joined element list, wrapped with RSA-OAEP
5. Assemble the manifest and return a new Record

Items share one Seed, so encryption is strictly sequential. Changing the
order of steps 2-4 produces submissions that cannot be decrypted.
"""

import hashlib
import logging
from typing import List, Optional, Sequence

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.decrepit.ciphers.modes import CFB
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from formcrypt.common.exceptions import EnvironmentUnsupported
from formcrypt.common.models import EncryptedBlob, FormKeyMaterial, Record, RecordFile
from formcrypt.common.utils import generate_symmetric_key
from formcrypt.crypto.aes import encrypt_content
from formcrypt.crypto.digest import md5_digest, md5_hex
from formcrypt.crypto.rsa import OAEP_PADDING, load_public_key, wrap_b64
from formcrypt.crypto.seed import Seed
from formcrypt.manifest import Manifest

logger = logging.getLogger(__name__)

ENC_SUFFIX = '.enc'
SUBMISSION_XML = 'submission.xml'
SUBMISSION_XML_ENC = SUBMISSION_XML + ENC_SUFFIX


def is_supported() -> bool:
    """
    Check that MD5, AES-256-CFB and RSA-OAEP (SHA-256/MGF1-SHA1) are available.

    Callers must not invoke encrypt_record when this returns False.
    """
    try:
        hashlib.md5(b'')
        Cipher(
            algorithms.AES(bytes(32)),
            CFB(bytes(16)),
            backend=default_backend()
        ).encryptor()
    except (ValueError, UnsupportedAlgorithm):
        return False
    return default_backend().rsa_padding_supported(OAEP_PADDING)


def ensure_supported() -> None:
    """
    Raise EnvironmentUnsupported if is_supported() is False.
    """
    if not is_supported():
        raise EnvironmentUnsupported(
            "MD5, AES-256-CFB or RSA-OAEP with SHA-256/MGF1-SHA1 is unavailable"
        )


def element_signature(elements: Sequence[str], public_key: RSAPublicKey) -> str:
    """
    Compute the base64 encrypted element signature.

    The elements are joined with '\\n' and a trailing '\\n' is added, as
    ODK Collect does. The MD5 of that text is wrapped with RSA-OAEP.

    Args:
        elements: Form ID, version (if any), base64 key, instance ID,
            then one 'name::md5' entry per file
        public_key: RSA public key

    Returns:
        Base64-encoded wrapped digest
    """
    elements_str = '\n'.join(elements) + '\n'
    return wrap_b64(md5_digest(elements_str.encode('utf-8')), public_key)


def _encrypt_item(name: str, plaintext: bytes, symmetric_key: bytes, seed: Seed) -> EncryptedBlob:
    iv = seed.next_iv()
    content = encrypt_content(plaintext, symmetric_key, iv)
    logger.debug("Encrypted %s (%d bytes) with IV #%d", name, len(plaintext), seed.counter)
    return EncryptedBlob(name=name + ENC_SUFFIX, content=content, md5=md5_hex(plaintext))


def _encrypt_media_files(
    files: Sequence[RecordFile],
    symmetric_key: bytes,
    seed: Seed,
) -> List[EncryptedBlob]:
    # Sequential: each file consumes the next IV
    blobs = []
    for file in files:
        blobs.append(_encrypt_item(file.name, file.content, symmetric_key, seed))
    return blobs


def _encrypt_submission_xml(xml: str, symmetric_key: bytes, seed: Seed) -> EncryptedBlob:
    return _encrypt_item(SUBMISSION_XML, xml.encode('utf-8'), symmetric_key, seed)


def encrypt_record(
    form: FormKeyMaterial,
    record: Record,
    *,
    client_tag: Optional[str] = None,
) -> Record:
    """
    Encrypt a record for the form's public key.

    Args:
        form: Form ID, version and public key
        record: Instance ID, submission XML and media files
        client_tag: Optional '_client' attribute for the manifest

    Returns:
        New Record whose xml is the manifest and whose files are the
        encrypted blobs (media files in input order, then submission.xml.enc)

    Raises:
        KeyParseError: If the public key is invalid
        CipherFailure: If AES encryption fails
        WrapError: If RSA wrapping fails
        ValueError: If a media file uses the reserved submission name
    """
    public_key = load_public_key(form.encryption_key)

    for file in record.files:
        if file.name == SUBMISSION_XML:
            raise ValueError(f"Media file name '{SUBMISSION_XML}' is reserved")

    logger.info(
        "Encrypting record %s for form %s (%d media files)",
        record.instance_id, form.form_id, len(record.files)
    )

    symmetric_key = generate_symmetric_key()
    base64_encrypted_key = wrap_b64(symmetric_key, public_key)
    seed = Seed(record.instance_id, symmetric_key)

    manifest = Manifest(form.form_id, form.version, client_tag)
    manifest.add_element('base64EncryptedKey', base64_encrypted_key)
    manifest.add_meta_element('instanceID', record.instance_id)

    elements = [form.form_id]
    if form.version:
        elements.append(form.version)
    elements.extend([base64_encrypted_key, record.instance_id])

    blobs = _encrypt_media_files(record.files, symmetric_key, seed)
    manifest.add_media_files(blobs)

    submission = _encrypt_submission_xml(record.xml, symmetric_key, seed)
    manifest.add_xml_submission_file(submission)
    blobs.append(submission)

    elements.extend(f"{blob.plain_name}::{blob.md5}" for blob in blobs)
    manifest.add_element('base64EncryptedElementSignature', element_signature(elements, public_key))

    logger.info("Encrypted record %s into %d files", record.instance_id, len(blobs))
    return Record(instance_id=record.instance_id, xml=manifest.to_xml(), files=blobs)
