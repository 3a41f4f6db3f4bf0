from __future__ import annotations

from hybridcrypt import config, rsa_block
from hybridcrypt.aes_service import gen_key, read_ciphertext_iv, sym_decrypt, sym_encrypt, write_ciphertext_iv
from hybridcrypt.audit_service import AuditLog
from hybridcrypt.config import Paths
from hybridcrypt.crypto_ctx import CryptoCtx, init_crypto
from hybridcrypt.file_service import PathLike, file_exists, read_bytes, write_bytes


def encrypt_phase(
    ctx: CryptoCtx,
    plaintext: bytes,
    paths: Paths,
    log: AuditLog,
    key_bytes: int = config.AES_KEY_BYTES,
) -> bytes:
    """
    AES-encrypt `plaintext` under a fresh key and RSA-encrypt that key.

    Both ciphertexts are computed before either file is written, so a failure
    leaves no half-finished output behind. Returns the AES key.
    """
    log.info("encryption_phase_started")

    aes_key = gen_key(key_bytes)
    ciphertext, iv = sym_encrypt(aes_key, plaintext)
    blocks = rsa_block.encrypt(ctx.pub, aes_key)

    write_ciphertext_iv(paths.aes_ciphertext, iv, ciphertext)
    log.info("aes_ciphertext_written", path=paths.aes_ciphertext, size=len(ciphertext))

    rsa_block.write_ciphertext(paths.rsa_ciphertext, blocks)
    log.info("rsa_ciphertext_written", path=paths.rsa_ciphertext, blocks=len(blocks), aes_key=aes_key)
    return aes_key


def decrypt_phase(ctx: CryptoCtx, paths: Paths, log: AuditLog) -> bytes:
    log.info("decryption_phase_started")

    aes_key = rsa_block.decrypt_file(ctx.priv, paths.rsa_ciphertext)
    log.info("aes_key_recovered", path=paths.rsa_ciphertext, aes_key=aes_key)

    iv, ciphertext = read_ciphertext_iv(paths.aes_ciphertext)
    plaintext = sym_decrypt(aes_key, iv, ciphertext)

    write_bytes(paths.decrypted, plaintext)
    log.info("decrypted_message_written", path=paths.decrypted, size=len(plaintext))
    return plaintext


def run(input_path: PathLike, paths: Paths, log: AuditLog, key_bytes: int = config.AES_KEY_BYTES) -> bool:
    """Full round: encrypt the input file, decrypt it back, compare."""
    if not file_exists(input_path):
        log.error("input_missing", path=str(input_path))
        raise FileNotFoundError(f"File not found: {input_path}")

    message = read_bytes(input_path)
    log.info("plaintext_read", path=str(input_path), size=len(message))

    ctx = init_crypto(paths.pubkey, paths.privkey)
    log.info(
        "keys_loaded",
        modulus_bits=ctx.pub.n.bit_length(),
        public_exponent=ctx.pub.e,
        private_exponent=ctx.priv.d,
        pubkey_path=paths.pubkey,
        privkey_path=paths.privkey,
    )

    encrypt_phase(ctx, message, paths, log, key_bytes=key_bytes)
    decrypted = decrypt_phase(ctx, paths, log)

    match = decrypted == message
    if match:
        log.info("plaintext_match")
    else:
        log.error("plaintext_mismatch")
    return match
