from __future__ import annotations

import secrets
from typing import Tuple

from hybridcrypt import config
from hybridcrypt.audit_service import AuditLog
from hybridcrypt.errors import DomainError
from hybridcrypt.key_store import save_keypair
from hybridcrypt.modmath import WORD_BITS, modinv, mulmod, powmod
from hybridcrypt.rsa_block import PrivateKey, PublicKey


def is_probable_prime(n: int, k: int = 20) -> bool:
    """Miller-Rabin with k random bases."""
    if n < 2:
        return False
    small_primes = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37]
    for p in small_primes:
        if n == p:
            return True
        if n % p == 0:
            return False

    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    def check(a: int) -> bool:
        x = powmod(a, d, n)
        if x == 1 or x == n - 1:
            return True
        for _ in range(s - 1):
            x = mulmod(x, x, n)
            if x == n - 1:
                return True
        return False

    for _ in range(k):
        a = secrets.randbelow(n - 3) + 2
        if not check(a):
            return False
    return True


def gen_prime(bits: int) -> int:
    if bits < 16:
        raise DomainError("bits too small")
    while True:
        x = secrets.randbits(bits) | (1 << (bits - 1)) | 1
        if is_probable_prime(x):
            return x


def generate_keypair(bits: int = WORD_BITS, e: int = 65537) -> Tuple[PublicKey, PrivateKey]:
    # p and q each take at most half the bits, so n stays inside the word
    if bits > WORD_BITS:
        raise DomainError(f"modulus wider than {WORD_BITS} bits is not supported")
    half = bits // 2
    while True:
        p = gen_prime(half)
        q = gen_prime(bits - half)
        if p == q:
            continue
        n = p * q
        phi = (p - 1) * (q - 1)
        if phi % e == 0:
            continue
        d = modinv(e, phi)
        return PublicKey(n=n, e=e), PrivateKey(n=n, d=d)


def main() -> None:
    log = AuditLog(config.LOG_FILE)
    pub, priv = generate_keypair(bits=config.RSA_BITS)
    save_keypair(pub, priv, config.PUBKEY_PATH, config.PRIVKEY_PATH)
    log.info(
        "keygen",
        modulus_bits=pub.n.bit_length(),
        public_exponent=pub.e,
        private_exponent=priv.d,
        pubkey_path=config.PUBKEY_PATH,
        privkey_path=config.PRIVKEY_PATH,
    )
    print(f"Public key written to: {config.PUBKEY_PATH}")
    print(f"Private key written to: {config.PRIVKEY_PATH}")


if __name__ == "__main__":
    main()
