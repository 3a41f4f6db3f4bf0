from __future__ import annotations

from typing import Tuple

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes
from Crypto.Util.Padding import pad, unpad

from hybridcrypt.file_service import PathLike, read_bytes, write_bytes

IV_BYTES = AES.block_size


def gen_key(size: int = 16) -> bytes:
    if size not in AES.key_size:
        raise ValueError(f"bad AES key size: {size}")
    return get_random_bytes(size)


def sym_encrypt(key: bytes, plaintext: bytes) -> Tuple[bytes, bytes]:
    """AES-CBC with PKCS#7 padding under a fresh IV. Returns (ciphertext, iv)."""
    iv = get_random_bytes(IV_BYTES)
    cipher = AES.new(key, AES.MODE_CBC, iv)
    return cipher.encrypt(pad(plaintext, AES.block_size)), iv


def sym_decrypt(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    # wrong key or damaged data surfaces as ValueError from unpad()
    cipher = AES.new(key, AES.MODE_CBC, iv)
    return unpad(cipher.decrypt(ciphertext), AES.block_size)


# ===== File: [iv:16][ciphertext...] =====

def write_ciphertext_iv(path: PathLike, iv: bytes, ciphertext: bytes) -> None:
    if len(iv) != IV_BYTES:
        raise ValueError("bad IV length")
    write_bytes(path, iv + ciphertext)


def read_ciphertext_iv(path: PathLike) -> Tuple[bytes, bytes]:
    blob = read_bytes(path)
    if len(blob) < IV_BYTES or (len(blob) - IV_BYTES) % AES.block_size:
        raise ValueError("bad AES ciphertext file")
    return blob[:IV_BYTES], blob[IV_BYTES:]
