"""A JSON document on disk with locked read-modify-write and atomic saves."""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any


class JsonFile:

    def __init__(self, file_path: Path, default: Any) -> None:
        self._file_path = file_path
        self._default = default
        self._lock_path = file_path.with_name(f".{file_path.name}.lock")
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> Any:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, data: Any) -> None:
        """Replace the file contents atomically (temp file + rename)."""
        fd, temp_path = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.stem}_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(temp_path, self._file_path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Exclusive lock for a read-modify-write sequence."""
        with open(self._lock_path, "w") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.persist(self._default)
