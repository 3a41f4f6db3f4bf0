from __future__ import annotations

from dataclasses import dataclass

from hybridcrypt.errors import KeyFormatError
from hybridcrypt.file_service import PathLike
from hybridcrypt.key_store import load_private_key, load_public_key
from hybridcrypt.rsa_block import PrivateKey, PublicKey

@dataclass(frozen=True)
class CryptoCtx:
    pub: PublicKey
    priv: PrivateKey

def init_crypto(pub_path: PathLike, priv_path: PathLike) -> CryptoCtx:
    """Load the stored key pair once per run."""
    pub = load_public_key(pub_path)
    priv = load_private_key(priv_path)
    if pub.n != priv.n:
        raise KeyFormatError("public and private key moduli differ")
    return CryptoCtx(pub=pub, priv=priv)
