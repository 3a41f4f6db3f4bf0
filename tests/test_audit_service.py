import hashlib

import orjson

from hybridcrypt.audit_service import hash_hex


def _lines(log):
    return [orjson.loads(ln) for ln in log.path.read_bytes().splitlines()]


def test_hash_hex():
    assert hash_hex(b"abc") == hashlib.sha256(b"abc").hexdigest()


def test_json_lines(audit_log):
    audit_log.info("program_started")
    audit_log.write("debug", "odd_level", {"n": 1})
    audit_log.error("failed", kind="MalformedPadding")

    lines = _lines(audit_log)
    assert [ln["action"] for ln in lines] == ["program_started", "odd_level", "failed"]
    assert [ln["level"] for ln in lines] == ["INFO", "INFO", "ERROR"]
    assert lines[2]["details"] == {"kind": "MalformedPadding"}
    assert "ts" in lines[0]


def test_key_material_redacted(audit_log, tmp_path):
    key = bytes(range(16))
    audit_log.info("keys_loaded", aes_key=key, private_exponent=2753, path=tmp_path / "k.pem")

    (line,) = _lines(audit_log)
    details = line["details"]
    assert details["aes_key"] == "sha256:" + hash_hex(key)
    assert details["private_exponent"] == "sha256:" + hash_hex(b"2753")
    assert details["path"] == str(tmp_path / "k.pem")


def test_reset(audit_log):
    audit_log.info("one")
    audit_log.reset()
    assert not audit_log.path.exists()
    audit_log.reset()
    audit_log.info("two")
    assert [ln["action"] for ln in _lines(audit_log)] == ["two"]
