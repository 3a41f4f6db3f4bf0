import pytest

from hybridcrypt import main as main_module
from hybridcrypt.config import Paths
from hybridcrypt.crypto_ctx import init_crypto
from hybridcrypt.errors import KeyFileNotFound, KeyFormatError, PayloadTooLarge
from hybridcrypt.hybrid_service import decrypt_phase, encrypt_phase, run
from hybridcrypt.key_store import save_keypair, write_key
from hybridcrypt.rsa_block import PrivateKey, PublicKey, read_ciphertext


@pytest.fixture
def paths(tmp_path, word_keys):
    p = Paths.under(tmp_path)
    save_keypair(*word_keys, p.pubkey, p.privkey)
    return p


@pytest.fixture
def message_file(tmp_path):
    path = tmp_path / "message.txt"
    path.write_text("The quick brown fox jumps over the lazy dog.\n" * 20)
    return path


def test_run_end_to_end(paths, message_file, audit_log):
    assert run(message_file, paths, audit_log) is True

    assert paths.decrypted.read_bytes() == message_file.read_bytes()
    assert len(read_ciphertext(paths.rsa_ciphertext)) == 6
    assert paths.aes_ciphertext.exists()

    log_text = audit_log.path.read_text()
    assert "plaintext_match" in log_text
    assert "sha256:" in log_text


def test_phases_recover_aes_key(paths, audit_log):
    ctx = init_crypto(paths.pubkey, paths.privkey)
    aes_key = encrypt_phase(ctx, b"secret body", paths, audit_log)
    assert aes_key.hex() not in audit_log.path.read_text()
    assert decrypt_phase(ctx, paths, audit_log) == b"secret body"


def test_missing_input(paths, tmp_path, audit_log):
    with pytest.raises(FileNotFoundError):
        run(tmp_path / "missing.txt", paths, audit_log)
    assert not paths.aes_ciphertext.exists()


def test_missing_keys(tmp_path, message_file, audit_log):
    with pytest.raises(KeyFileNotFound):
        run(message_file, Paths.under(tmp_path / "empty"), audit_log)


def test_mismatched_key_files(paths, other_word_keys, message_file, audit_log):
    _, other_priv = other_word_keys
    write_key(paths.privkey, other_priv.n, other_priv.d, private=True)
    with pytest.raises(KeyFormatError):
        run(message_file, paths, audit_log)


def test_modulus_too_small_leaves_no_files(tmp_path, message_file, audit_log):
    p = Paths.under(tmp_path)
    save_keypair(PublicKey(n=1000, e=3), PrivateKey(n=1000, d=3), p.pubkey, p.privkey)
    with pytest.raises(PayloadTooLarge):
        run(message_file, p, audit_log)
    assert not p.aes_ciphertext.exists()
    assert not p.rsa_ciphertext.exists()


def test_main_prompts_and_reports(tmp_path, paths, message_file, monkeypatch, capsys):
    monkeypatch.setattr(main_module, "Paths", lambda: paths)
    monkeypatch.setattr(main_module.config, "LOG_FILE", tmp_path / "logs" / "run.log")
    monkeypatch.setattr("builtins.input", lambda prompt: str(message_file))

    assert main_module.main() == 0
    assert "matches" in capsys.readouterr().out


def test_main_reports_failure(tmp_path, paths, monkeypatch, capsys):
    monkeypatch.setattr(main_module, "Paths", lambda: paths)
    monkeypatch.setattr(main_module.config, "LOG_FILE", tmp_path / "logs" / "run.log")
    monkeypatch.setattr("builtins.input", lambda prompt: str(tmp_path / "missing.txt"))

    assert main_module.main() == 1
    assert "FileNotFoundError" in capsys.readouterr().err
    assert "program_failed" in (tmp_path / "logs" / "run.log").read_text()
