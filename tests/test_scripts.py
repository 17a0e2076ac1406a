"""End-to-end tests for the key generation, encryption and verification scripts."""

from conftest import load_script


def test_encrypt_then_verify_directory(tmp_path, capsys) -> None:
    gen_keypair = load_script("gen_keypair")
    encrypt_submission = load_script("encrypt_submission")
    verify_submission = load_script("verify_submission")

    keys_dir = tmp_path / "keys"
    _, public_body = gen_keypair.generate_keypair(key_size=2048, output_dir=str(keys_dir))
    assert (keys_dir / "public_key.b64").read_text().strip() == public_body

    xml_path = tmp_path / "instance.xml"
    xml_path.write_text("<data><photo>photo.jpg</photo></data>", encoding="utf-8")
    photo = tmp_path / "photo.jpg"
    photo.write_bytes(b"\xff\xd8" + b"jpeg" * 100)

    record = encrypt_submission.read_record("uuid:cli-1", str(xml_path), [str(photo)])
    assert [f.name for f in record.files] == ["photo.jpg"]

    from formcrypt.common.models import FormKeyMaterial
    from formcrypt.encryptor import encrypt_record

    form = FormKeyMaterial(form_id="cli", encryption_key=(keys_dir / "public_key.pem").read_text())
    target = encrypt_submission.write_record(encrypt_record(form, record), str(tmp_path / "out"))

    assert sorted(p.name for p in (tmp_path / "out" / "uuid_cli-1").iterdir()) == [
        "photo.jpg.enc",
        "submission.xml",
        "submission.xml.enc",
    ]
    assert verify_submission.verify_directory(target, str(keys_dir / "private_key.pem"))
    assert "SIGNATURE VALID" in capsys.readouterr().out


def test_verify_detects_tampered_file(tmp_path, form, record, private_key, reference) -> None:
    from formcrypt.encryptor import encrypt_record

    result = encrypt_record(form, record)
    files = {blob.name: blob.content for blob in result.files}
    # Flip a byte in the first block; CFB keeps the padding intact
    tampered = bytearray(files["image.jpg.enc"])
    tampered[0] ^= 0x01
    files["image.jpg.enc"] = bytes(tampered)

    plaintexts, signature_valid = reference.decrypt_submission(result.xml, files, private_key)

    assert not signature_valid
    assert plaintexts["image.jpg"] != record.files[0].content


def test_read_record_keeps_crlf_line_endings(tmp_path) -> None:
    encrypt_submission = load_script("encrypt_submission")
    xml_path = tmp_path / "instance.xml"
    xml_path.write_bytes(b"<data>\r\n<a>1</a>\r\n</data>")

    record = encrypt_submission.read_record("uuid:crlf", str(xml_path), [])

    assert record.xml == "<data>\r\n<a>1</a>\r\n</data>"
    assert record.xml.encode("utf-8") == xml_path.read_bytes()
