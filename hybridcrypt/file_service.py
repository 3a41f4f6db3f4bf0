from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def file_exists(path: PathLike) -> bool:
    return Path(path).is_file()


def read_bytes(path: PathLike) -> bytes:
    # FileNotFoundError propagates to the caller
    with Path(path).open("rb") as f:
        return f.read()


def write_bytes(path: PathLike, data: bytes) -> None:
    """
    Replace `path` with `data`.

    Writes to a temp file in the same directory, then renames it over the
    target, so readers see either the old file or the complete new one.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def read_text(path: PathLike) -> str:
    return read_bytes(path).decode("utf-8")


def write_text(path: PathLike, text: str) -> None:
    write_bytes(path, text.encode("utf-8"))
