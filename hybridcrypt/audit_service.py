from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import orjson

# Detail keys holding key material; values are logged as a SHA-256 digest only.
SENSITIVE_KEYS = {"aes_key", "key", "public_exponent", "private_exponent", "e", "d"}


def hash_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _fingerprint(v: Any) -> str:
    raw = v if isinstance(v, (bytes, bytearray)) else str(v).encode("utf-8")
    return "sha256:" + hash_hex(bytes(raw))


def _redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if str(k).lower() in SENSITIVE_KEYS:
                out[k] = _fingerprint(v)
            else:
                out[k] = _redact(v)
        return out
    if isinstance(obj, list):
        return [_redact(x) for x in obj]
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return f"<{len(obj)} bytes>"
    return obj


@dataclass
class AuditLog:
    path: Path

    def reset(self) -> None:
        self.path.unlink(missing_ok=True)

    def write(self, level: str, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        level = (level or "INFO").upper()
        if level not in ("INFO", "WARNING", "ERROR"):
            level = "INFO"

        line = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "action": action,
            "details": _redact(details or {}),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("ab") as f:
            f.write(orjson.dumps(line) + b"\n")

    def info(self, action: str, **details: Any) -> None:
        self.write("INFO", action, details)

    def error(self, action: str, **details: Any) -> None:
        self.write("ERROR", action, details)
