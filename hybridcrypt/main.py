from __future__ import annotations

import sys

from hybridcrypt import config
from hybridcrypt.audit_service import AuditLog
from hybridcrypt.config import Paths
from hybridcrypt.hybrid_service import run


def main() -> int:
    log = AuditLog(config.LOG_FILE)
    log.reset()
    log.info("program_started")

    file_to_encrypt = input("Enter the path to your textfile: ").strip()

    try:
        ok = run(file_to_encrypt, Paths(), log)
    except (ValueError, FileNotFoundError) as e:
        # CryptoError subclasses ValueError; AES unpad failures are plain ValueError
        log.error("program_failed", kind=type(e).__name__, message=str(e))
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    log.info("program_finished", match=ok)
    print("Decrypted message matches the original plaintext." if ok else "Decrypted message differs!")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
