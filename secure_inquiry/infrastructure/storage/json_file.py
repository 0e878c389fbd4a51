# secure_inquiry/infrastructure/storage/json_file.py

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

TEMP_PREFIX = ".secure-inquiry"


def read_json(path: Path) -> Any | None:
    """Return parsed JSON, or None if the file is missing or blank. Raises ValueError on bad JSON."""
    if not path.exists():
        return None
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return None
    return json.loads(raw)


def write_json_atomic(path: Path, data: Any) -> None:
    """Write JSON to a temp file in the same directory, fsync, then os.replace over path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            prefix=f"{TEMP_PREFIX}-{path.name}-",
            suffix=".tmp",
            dir=path.parent,
            delete=False,
        ) as handle:
            tmp_path = Path(handle.name)
            json.dump(data, handle, indent=2, ensure_ascii=False)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink(missing_ok=True)
