"""
Shared fixtures: a test RSA key pair, form/record factories and the
offline verification script as an independent reference decryptor.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from formcrypt.common.models import FormKeyMaterial, Record, RecordFile

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def load_script(name: str):
    """Import a module from scripts/ by file name."""
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture(scope="session")
def public_key_b64(public_pem) -> str:
    """Bare base64 body, as published in form definitions."""
    return "".join(line for line in public_pem.splitlines() if not line.startswith("-----"))


@pytest.fixture
def form(public_key_b64) -> FormKeyMaterial:
    return FormKeyMaterial(form_id="household", version="2024010101", encryption_key=public_key_b64)


@pytest.fixture
def record() -> Record:
    return Record(
        instance_id="uuid:abc123",
        xml="<data/>",
        files=[RecordFile(name="image.jpg", content=b"\xff\xd8\xff\xe0" + bytes(range(256)) * 4)],
    )


@pytest.fixture(scope="session")
def reference():
    """Independent decryptor/verifier from scripts/verify_submission.py."""
    return load_script("verify_submission")
