#!/usr/bin/env python3
"""
Offline Encrypted Submission Verification Tool

Decrypts a submission the way ODK Briefcase does and checks it:
1. Unwraps the AES key with the private key
2. Replays the IV sequence and decrypts every file in manifest order
3. Checks the element signature over the plaintext MD5s

Works directly on cryptography primitives so it can serve as an
independent check of the encryptor's output.

Usage:
    python scripts/verify_submission.py --submission encrypted/uuid_123 --key keys/private_key.pem
"""

import argparse
import base64
import hashlib
import os
import xml.etree.ElementTree as ET
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives import padding as sym_padding
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.decrepit.ciphers.modes import CFB
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

SUBMISSION_NS = '{http://opendatakit.org/submissions}'
XFORMS_NS = '{http://openrosa.org/xforms}'

OAEP = padding.OAEP(
    mgf=padding.MGF1(algorithm=hashes.SHA1()),
    algorithm=hashes.SHA256(),
    label=None,
)


def load_private_key(key_path: str):
    """Load RSA private key from PEM file."""
    with open(key_path, "rb") as f:
        return serialization.load_pem_private_key(f.read(), password=None)


def parse_manifest(manifest_xml: str) -> dict:
    """
    Extract the fields needed for decryption from a manifest.

    Returns:
        Dictionary with form_id, version, encrypted_key, instance_id,
        media (list of .enc names), xml_file and signature
    """
    root = ET.fromstring(manifest_xml)

    if root.tag != SUBMISSION_NS + 'data' or root.get('encrypted') != 'yes':
        raise ValueError("Not an encrypted submission manifest")

    return {
        'form_id': root.get('id'),
        'version': root.get('version'),
        'encrypted_key': root.findtext(SUBMISSION_NS + 'base64EncryptedKey'),
        'instance_id': root.findtext(f'{XFORMS_NS}meta/{XFORMS_NS}instanceID'),
        'media': [el.text for el in root.findall(f'{SUBMISSION_NS}media/{SUBMISSION_NS}file')],
        'xml_file': root.findtext(SUBMISSION_NS + 'encryptedXmlFile'),
        'signature': root.findtext(SUBMISSION_NS + 'base64EncryptedElementSignature'),
    }


def iv_sequence(instance_id: str, symmetric_key: bytes):
    """Yield the IVs for a submission, one per encrypted file."""
    digest = hashlib.md5(instance_id.encode('utf-8') + symmetric_key).digest()
    iv = bytearray(digest[i % len(digest)] for i in range(16))
    counter = 0
    while True:
        iv[counter % 16] = (iv[counter % 16] + 1) & 0xff
        counter += 1
        yield bytes(iv)


def decrypt_file(ciphertext: bytes, symmetric_key: bytes, iv: bytes) -> bytes:
    """Decrypt AES-256-CFB content and strip the PKCS#7 padding."""
    decryptor = Cipher(algorithms.AES(symmetric_key), CFB(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = sym_padding.PKCS7(128).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def decrypt_submission(manifest_xml: str, files: dict, private_key):
    """
    Decrypt and verify a submission.

    Args:
        manifest_xml: Manifest text
        files: Mapping of .enc file name to ciphertext
        private_key: RSA private key

    Returns:
        Tuple of (plaintexts, signature_valid)
        plaintexts: Mapping of original file name to plaintext, in manifest order
        signature_valid: True if the element signature matches
    """
    manifest = parse_manifest(manifest_xml)
    symmetric_key = private_key.decrypt(base64.b64decode(manifest['encrypted_key']), OAEP)
    ivs = iv_sequence(manifest['instance_id'], symmetric_key)

    plaintexts = {}
    elements = [manifest['form_id']]
    if manifest['version']:
        elements.append(manifest['version'])
    elements.extend([manifest['encrypted_key'], manifest['instance_id']])

    for enc_name in manifest['media'] + [manifest['xml_file']]:
        name = enc_name[:-4]
        plaintext = decrypt_file(files[enc_name], symmetric_key, next(ivs))
        plaintexts[name] = plaintext
        elements.append(f"{name}::{hashlib.md5(plaintext).hexdigest()}")

    expected = hashlib.md5(('\n'.join(elements) + '\n').encode('utf-8')).digest()
    signed = private_key.decrypt(base64.b64decode(manifest['signature']), OAEP)

    return plaintexts, signed == expected


def verify_directory(submission_dir: str, key_path: str) -> bool:
    """
    Verify an encrypted submission written by encrypt_submission.py.
    """
    print("\n" + "="*70)
    print("  ENCRYPTED SUBMISSION VERIFICATION")
    print("="*70)

    print(f"\n[1] Loading private key: {key_path}")
    private_key = load_private_key(key_path)

    print(f"\n[2] Loading submission: {submission_dir}")
    with open(os.path.join(submission_dir, 'submission.xml'), 'r', encoding='utf-8') as f:
        manifest_xml = f.read()
    manifest = parse_manifest(manifest_xml)
    print(f"    Form: {manifest['form_id']} version {manifest['version']}")
    print(f"    Instance: {manifest['instance_id']}")

    files = {}
    for enc_name in manifest['media'] + [manifest['xml_file']]:
        with open(os.path.join(submission_dir, enc_name), 'rb') as f:
            files[enc_name] = f.read()

    print(f"\n[3] Decrypting {len(files)} files...")
    plaintexts, signature_valid = decrypt_submission(manifest_xml, files, private_key)
    for name, content in plaintexts.items():
        print(f"    [✓] {name}: {len(content)} bytes")

    print(f"\n" + "="*70)
    if signature_valid:
        print("  VERIFICATION RESULT: ✓ SIGNATURE VALID")
    else:
        print("  VERIFICATION RESULT: ✗ SIGNATURE INVALID")
    print("="*70 + "\n")

    return signature_valid


def main():
    parser = argparse.ArgumentParser(
        description="Decrypt and verify an encrypted form submission"
    )
    parser.add_argument(
        "--submission",
        required=True,
        help="Directory holding submission.xml and the .enc files"
    )
    parser.add_argument(
        "--key",
        required=True,
        help="Path to the private key PEM"
    )

    args = parser.parse_args()

    try:
        valid = verify_directory(args.submission, args.key)
    except FileNotFoundError as e:
        print(f"\n[ERROR] File not found: {e}")
        raise SystemExit(1)
    except ValueError as e:
        print(f"\n[ERROR] Verification failed: {e}")
        raise SystemExit(1)

    raise SystemExit(0 if valid else 1)


if __name__ == "__main__":
    main()
