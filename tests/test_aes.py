"""Tests for AES-256-CFB content encryption with PKCS#7 padding."""

import warnings

import pytest
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.decrepit.ciphers.modes import CFB
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

import formcrypt.crypto.aes as aes
from formcrypt.common.exceptions import CipherFailure
from formcrypt.crypto.aes import encrypt_content, pkcs7_pad

# NIST SP 800-38A, F.3.13 CFB128-AES256.Encrypt
NIST_KEY = bytes.fromhex("603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4")
NIST_IV = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
NIST_PLAINTEXT = bytes.fromhex(
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)
NIST_CIPHERTEXT = bytes.fromhex(
    "dc7e84bfda79164b7ecd8486985d3860"
    "39ffed143b28b1c832113c6331e5407b"
    "df10132415e54b92a13ed0a8267ae2f9"
    "75a385741ab9cef82031623d55b1e471"
)


def _reference_decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    decryptor = Cipher(algorithms.AES(key), CFB(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(128).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def test_matches_nist_cfb128_vector_before_padding_block() -> None:
    ciphertext = encrypt_content(NIST_PLAINTEXT, NIST_KEY, NIST_IV)

    assert ciphertext[:64] == NIST_CIPHERTEXT
    # A whole padding block follows block-aligned input
    assert len(ciphertext) == 80


@pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 1000])
def test_output_is_padded_to_block_multiple(length: int) -> None:
    ciphertext = encrypt_content(b"x" * length, NIST_KEY, NIST_IV)
    assert len(ciphertext) == (length // 16 + 1) * 16


def test_reference_decryptor_recovers_plaintext() -> None:
    plaintext = "<data><name>Zoë</name></data>".encode("utf-8")
    ciphertext = encrypt_content(plaintext, NIST_KEY, NIST_IV)
    assert _reference_decrypt(ciphertext, NIST_KEY, NIST_IV) == plaintext


def test_different_iv_changes_ciphertext() -> None:
    other_iv = bytes(16)
    assert encrypt_content(b"hello", NIST_KEY, NIST_IV) != encrypt_content(b"hello", NIST_KEY, other_iv)


def test_pkcs7_pad() -> None:
    assert pkcs7_pad(b"") == b"\x10" * 16
    assert pkcs7_pad(b"abc") == b"abc" + b"\x0d" * 13


def test_rejects_wrong_key_length() -> None:
    with pytest.raises(ValueError, match="32-byte key"):
        encrypt_content(b"data", bytes(16), NIST_IV)


def test_rejects_wrong_iv_length() -> None:
    with pytest.raises(ValueError, match="16-byte IV"):
        encrypt_content(b"data", NIST_KEY, bytes(8))


def test_cfb_mode_emits_no_deprecation_warning() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        ciphertext = encrypt_content(b"data", NIST_KEY, NIST_IV)
    assert len(ciphertext) == 16


@pytest.mark.parametrize("error", [UnsupportedAlgorithm("no AES-CFB"), ValueError("bad state")])
def test_primitive_failure_becomes_cipher_failure(monkeypatch, error) -> None:
    def broken(*args, **kwargs):
        raise error

    monkeypatch.setattr(aes, "Cipher", broken)

    with pytest.raises(CipherFailure, match="Encryption failed") as excinfo:
        encrypt_content(b"data", NIST_KEY, NIST_IV)

    assert excinfo.value.__cause__ is error
