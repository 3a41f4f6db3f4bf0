from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Optional

from hybridcrypt.errors import CiphertextFormatError, MalformedPadding, PayloadTooLarge
from hybridcrypt.file_service import PathLike, read_bytes, write_bytes
from hybridcrypt.modmath import WORD_BYTES, WORD_MAX, check_modulus, powmod
from hybridcrypt.padding import block_bits_for, chunk_capacity, decode, encode

# ===== RSA keys =====

@dataclass(frozen=True)
class PublicKey:
    n: int
    e: int

@dataclass(frozen=True)
class PrivateKey:
    n: int
    d: int

def encrypt_int(m: int, pub: PublicKey) -> int:
    check_modulus(pub.n)
    if m < 0 or m >= pub.n:
        raise PayloadTooLarge("m out of range")
    return powmod(m, pub.e, pub.n)

def decrypt_int(c: int, priv: PrivateKey) -> int:
    check_modulus(priv.n)
    if c < 0 or c >= priv.n:
        raise MalformedPadding("ciphertext block out of range")
    return powmod(c, priv.d, priv.n)

# ===== Block engine =====
# The payload is cut into chunks that fit one padded block each; every block
# is exponentiated on its own and the results keep payload order.

def encrypt(pub: PublicKey, payload: bytes, dest: Optional[PathLike] = None) -> List[int]:
    bits = block_bits_for(pub.n)
    cap = chunk_capacity(bits)
    if cap == 0:
        raise PayloadTooLarge(f"modulus of {pub.n.bit_length()} bits cannot carry a padded byte")

    blocks = [encode(payload[i:i + cap], bits) for i in range(0, len(payload), cap)]
    cipher = [encrypt_int(m, pub) for m in blocks]

    if dest is not None:
        write_ciphertext(dest, cipher)
    return cipher

def decrypt(priv: PrivateKey, ciphertext: List[int]) -> bytes:
    bits = block_bits_for(priv.n)

    out = bytearray()
    for c in ciphertext:
        m = decrypt_int(c, priv)
        out += decode(m, bits)
    return bytes(out)

# ===== Ciphertext file =====

def pack_ciphertext(blocks: List[int]) -> bytes:
    """
    Framing:
      [count:4]
      repeat count times:
        [block:8]   (big-endian, fixed width)
    """
    out = bytearray(struct.pack(">I", len(blocks)))
    for c in blocks:
        if c < 0 or c > WORD_MAX:
            raise CiphertextFormatError("ciphertext block does not fit a word")
        out += c.to_bytes(WORD_BYTES, "big")
    return bytes(out)

def unpack_ciphertext(blob: bytes) -> List[int]:
    if len(blob) < 4:
        raise CiphertextFormatError("bad ciphertext blob")
    (count,) = struct.unpack(">I", blob[:4])
    if len(blob) != 4 + count * WORD_BYTES:
        raise CiphertextFormatError("ciphertext length does not match block count")
    return [
        int.from_bytes(blob[off:off + WORD_BYTES], "big")
        for off in range(4, len(blob), WORD_BYTES)
    ]

def write_ciphertext(path: PathLike, blocks: List[int]) -> None:
    write_bytes(path, pack_ciphertext(blocks))

def read_ciphertext(path: PathLike) -> List[int]:
    return unpack_ciphertext(read_bytes(path))

def decrypt_file(priv: PrivateKey, path: PathLike) -> bytes:
    return decrypt(priv, read_ciphertext(path))
