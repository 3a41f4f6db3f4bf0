from __future__ import annotations

import base64
import binascii
import re
import struct
import textwrap
from typing import List, Tuple

from hybridcrypt.errors import KeyFileNotFound, KeyFormatError
from hybridcrypt.file_service import PathLike, read_text, write_text
from hybridcrypt.rsa_block import PrivateKey, PublicKey

PUBLIC_LABEL = "RSA PUBLIC KEY"
PRIVATE_LABEL = "RSA PRIVATE KEY"

_BEGIN_RE = re.compile(r"^-----BEGIN (RSA (?:PUBLIC|PRIVATE) KEY)-----$")
_END_RE = re.compile(r"^-----END (RSA (?:PUBLIC|PRIVATE) KEY)-----$")


def _pack_ints(*values: int) -> bytes:
    """
    Key body:
      repeat for modulus, exponent:
        [len:2][big-endian magnitude...]
    """
    out = bytearray()
    for v in values:
        if v < 0:
            raise KeyFormatError("key values must be non-negative")
        raw = v.to_bytes((v.bit_length() + 7) // 8, "big")
        if len(raw) > 0xFFFF:
            raise KeyFormatError("key value too large")
        out += struct.pack(">H", len(raw)) + raw
    return bytes(out)


def _unpack_ints(blob: bytes, count: int) -> List[int]:
    off = 0
    out: List[int] = []
    for _ in range(count):
        if off + 2 > len(blob):
            raise KeyFormatError("truncated key body")
        (n,) = struct.unpack(">H", blob[off:off + 2])
        off += 2
        if off + n > len(blob):
            raise KeyFormatError("truncated key body")
        out.append(int.from_bytes(blob[off:off + n], "big"))
        off += n
    if off != len(blob):
        raise KeyFormatError("trailing bytes in key body")
    return out


def _read_envelope(path: PathLike) -> Tuple[str, int, int]:
    try:
        text = read_text(path)
    except FileNotFoundError as e:
        raise KeyFileNotFound(f"key file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise KeyFormatError(f"key file is not text: {path}") from e

    lines = [ln.strip() for ln in text.strip().splitlines()]
    if len(lines) < 2:
        raise KeyFormatError("missing key envelope")

    begin = _BEGIN_RE.match(lines[0])
    end = _END_RE.match(lines[-1])
    if not begin or not end or begin.group(1) != end.group(1):
        raise KeyFormatError("bad key envelope")

    try:
        body = base64.b64decode("".join(lines[1:-1]), validate=True)
    except binascii.Error as e:
        raise KeyFormatError("bad base64 in key body") from e

    modulus, exponent = _unpack_ints(body, 2)
    return begin.group(1), modulus, exponent


def write_key(path: PathLike, modulus: int, exponent: int, private: bool = False) -> None:
    label = PRIVATE_LABEL if private else PUBLIC_LABEL
    b64 = base64.b64encode(_pack_ints(modulus, exponent)).decode("ascii")
    lines = [f"-----BEGIN {label}-----"]
    lines += textwrap.wrap(b64, 64)
    lines.append(f"-----END {label}-----")
    write_text(path, "\n".join(lines) + "\n")


def read_key(path: PathLike) -> Tuple[int, int]:
    _, modulus, exponent = _read_envelope(path)
    return modulus, exponent


def load_public_key(path: PathLike) -> PublicKey:
    label, n, e = _read_envelope(path)
    if label != PUBLIC_LABEL:
        raise KeyFormatError(f"expected a public key in {path}")
    return PublicKey(n=n, e=e)


def load_private_key(path: PathLike) -> PrivateKey:
    label, n, d = _read_envelope(path)
    if label != PRIVATE_LABEL:
        raise KeyFormatError(f"expected a private key in {path}")
    return PrivateKey(n=n, d=d)


def save_keypair(pub: PublicKey, priv: PrivateKey, pub_path: PathLike, priv_path: PathLike) -> None:
    write_key(pub_path, pub.n, pub.e)
    write_key(priv_path, priv.n, priv.d, private=True)
