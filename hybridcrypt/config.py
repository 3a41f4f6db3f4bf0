import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

KEYS_DIR = Path(os.getenv("KEYS_DIR", "keys"))
PUBKEY_PATH = Path(os.getenv("PUBKEY_PATH", str(KEYS_DIR / "pubKey.pem")))
PRIVKEY_PATH = Path(os.getenv("PRIVKEY_PATH", str(KEYS_DIR / "privKey.pem")))
AES_CIPHERTEXT_PATH = Path(os.getenv("AES_CIPHERTEXT_PATH", "ciphertext/msg_enc.aes"))
RSA_CIPHERTEXT_PATH = Path(os.getenv("RSA_CIPHERTEXT_PATH", "ciphertext/key_enc.bin"))
DECRYPTED_PATH = Path(os.getenv("DECRYPTED_PATH", "test/decrypted.txt"))
LOG_FILE = Path(os.getenv("LOG_FILE", "logs/hybridcrypt.log"))
RSA_BITS = int(os.getenv("RSA_BITS", "64"))
AES_KEY_BYTES = int(os.getenv("AES_KEY_BYTES", "16"))


@dataclass(frozen=True)
class Paths:
    pubkey: Path = PUBKEY_PATH
    privkey: Path = PRIVKEY_PATH
    aes_ciphertext: Path = AES_CIPHERTEXT_PATH
    rsa_ciphertext: Path = RSA_CIPHERTEXT_PATH
    decrypted: Path = DECRYPTED_PATH

    @classmethod
    def under(cls, root: Path) -> "Paths":
        """Same file names, rooted at `root`."""
        root = Path(root)
        return cls(
            pubkey=root / PUBKEY_PATH,
            privkey=root / PRIVKEY_PATH,
            aes_ciphertext=root / AES_CIPHERTEXT_PATH,
            rsa_ciphertext=root / RSA_CIPHERTEXT_PATH,
            decrypted=root / DECRYPTED_PATH,
        )
