from __future__ import annotations

from typing import Tuple

from hybridcrypt.errors import DomainError

# Moduli live in a 64-bit word; ciphertext records are stored at this width.
WORD_BITS = 64
WORD_BYTES = WORD_BITS // 8
WORD_MAX = (1 << WORD_BITS) - 1


def check_modulus(n: int) -> None:
    if n <= 0:
        raise DomainError("modulus must be positive")
    if n > WORD_MAX:
        raise DomainError(f"modulus exceeds {WORD_BITS} bits")


def mulmod(a: int, b: int, n: int) -> int:
    """
    (a * b) mod n for a, b < n.

    The product is held in an int at least twice the word width before
    reduction, so it never wraps. Inputs >= n are not rejected; callers
    reduce them first.
    """
    check_modulus(n)
    return (a * b) % n


def powmod(base: int, exponent: int, n: int) -> int:
    """Square-and-multiply: base^exponent mod n in O(log exponent) mulmods."""
    check_modulus(n)
    if exponent < 0:
        raise DomainError("negative exponent")

    result = 1 % n
    base %= n
    while exponent > 0:
        if exponent & 1:
            result = mulmod(result, base, n)
        base = mulmod(base, base, n)
        exponent >>= 1
    return result


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    if b == 0:
        return a, 1, 0
    g, x, y = egcd(b, a % b)
    return g, y, x - (a // b) * y


def modinv(a: int, m: int) -> int:
    g, x, _ = egcd(a, m)
    if g != 1:
        raise DomainError("No modular inverse")
    return x % m
