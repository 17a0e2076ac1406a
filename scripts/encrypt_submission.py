#!/usr/bin/env python3
"""
Encrypt a Form Submission

Reads a submission XML and its media files from disk, encrypts them for
the form's public key and writes the encrypted files plus the
'submission.xml' manifest into <output>/<instance>/.

Usage:
    python scripts/encrypt_submission.py --form-id household --key keys/public_key.b64 \
        --xml instance.xml photo.jpg audio.m4a
"""

import argparse
import os
import sys
import uuid

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from formcrypt.common.config import Settings
from formcrypt.common.exceptions import FormCryptException
from formcrypt.common.log import configure_logging
from formcrypt.common.models import FormKeyMaterial, Record, RecordFile
from formcrypt.encryptor import encrypt_record, ensure_supported


def read_record(instance_id: str, xml_path: str, media_paths) -> Record:
    """
    Load a submission into memory.
    
    Args:
        instance_id: Instance ID for the submission
        xml_path: Path to the submission XML
        media_paths: Paths to media files, in submission order
    
    Returns:
        Record with file contents resident
    """
    # Keep line endings as they are on disk
    with open(xml_path, 'r', encoding='utf-8', newline='') as f:
        xml = f.read()
    
    files = []
    for path in media_paths:
        with open(path, 'rb') as f:
            files.append(RecordFile(name=os.path.basename(path), content=f.read()))
    
    return Record(instance_id=instance_id, xml=xml, files=files)


def write_record(record: Record, output_dir: str) -> str:
    """
    Write an encrypted record to disk.
    
    Returns:
        Directory the submission was written to
    """
    safe_id = record.instance_id.replace(':', '_')
    target = os.path.join(output_dir, safe_id)
    os.makedirs(target, exist_ok=True)
    
    with open(os.path.join(target, 'submission.xml'), 'w', encoding='utf-8') as f:
        f.write(record.xml)
    for blob in record.files:
        with open(os.path.join(target, blob.name), 'wb') as f:
            f.write(blob.content)
    
    return target


def main():
    settings = Settings.from_env()
    
    parser = argparse.ArgumentParser(
        description="Encrypt a form submission for the form's public key"
    )
    parser.add_argument("--form-id", required=True, help="Form ID")
    parser.add_argument("--version", default=None, help="Form version")
    parser.add_argument(
        "--key",
        required=True,
        help="Public key file (PEM or bare base64 body)"
    )
    parser.add_argument("--xml", required=True, help="Submission XML file")
    parser.add_argument(
        "--instance-id",
        default=None,
        help="Instance ID (default: new uuid:...)"
    )
    parser.add_argument(
        "--output",
        default=settings.output_dir,
        help=f"Output directory (default: {settings.output_dir})"
    )
    parser.add_argument("media", nargs="*", help="Media files, in submission order")
    
    args = parser.parse_args()
    configure_logging(settings.log_level)
    
    try:
        ensure_supported()
        
        with open(args.key, 'r') as f:
            form = FormKeyMaterial(form_id=args.form_id, version=args.version, encryption_key=f.read())
        
        instance_id = args.instance_id or f"uuid:{uuid.uuid4()}"
        print(f"[*] Reading submission {instance_id}")
        record = read_record(instance_id, args.xml, args.media)
        
        print(f"[*] Encrypting {len(record.files)} media files and submission.xml...")
        encrypted = encrypt_record(form, record, client_tag=settings.client_tag)
        
        target = write_record(encrypted, args.output)
        print(f"\n[✓] Encrypted submission written to: {target}")
        for blob in encrypted.files:
            print(f"    {blob.name} ({len(blob.content)} bytes)")
    
    except FileNotFoundError as e:
        print(f"\n[ERROR] File not found: {e}")
        sys.exit(1)
    except FormCryptException as e:
        print(f"\n[ERROR] Encryption failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
