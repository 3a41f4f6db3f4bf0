from __future__ import annotations


class CryptoError(ValueError):
    """Base class for failures raised by the RSA core."""


class DomainError(CryptoError):
    """Invalid modulus or out-of-range arithmetic input."""


class PayloadTooLarge(CryptoError):
    """Payload does not fit the modulus after padding."""


class MalformedPadding(CryptoError):
    """Decrypted block lacks the padding structure (wrong key or corrupted ciphertext)."""


class KeyFormatError(CryptoError):
    pass


class CiphertextFormatError(CryptoError):
    pass


class KeyFileNotFound(FileNotFoundError):
    pass
