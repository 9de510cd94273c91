"""Append-only shell log with size-based rotation."""

from __future__ import annotations

import inspect
import time
from pathlib import Path
from typing import IO, Optional

DEFAULT_DIRECTORY = "logs"
DEFAULT_FILE_NAME = "latest.txt"
MAX_LOG_FILE_SIZE = 10 * 1024
HEADER_WIDTH = 100
BACKUP_PREFIX = "until_"
BACKUP_SUFFIX = ".log"
ARCHIVE_SUFFIX = ".zip"


class ShellLogger:
    """Writes timestamped log lines and rotates the file once it grows too large."""

    def __init__(
        self,
        directory: str | Path = DEFAULT_DIRECTORY,
        file_name: str = DEFAULT_FILE_NAME,
        max_size: int = MAX_LOG_FILE_SIZE,
    ) -> None:
        self.directory = Path(directory)
        self.file_name = file_name
        self.max_size = max_size
        self._handle: Optional[IO[str]] = None
        self._handle_path: Optional[Path] = None

    @property
    def path(self) -> Path:
        return self.directory / self.file_name

    def _stream(self) -> IO[str]:
        target = self.path.resolve()
        if self._handle is None or self._handle_path != target:
            self.close()
            self.directory.mkdir(parents=True, exist_ok=True)
            self._handle = open(target, "a", encoding="utf-8")
            self._handle_path = target
        return self._handle

    def _compress_oldest_if_needed(self) -> None:
        backups = [
            entry
            for entry in self.directory.iterdir()
            if entry.suffix == BACKUP_SUFFIX and entry.name.startswith(BACKUP_PREFIX)
        ]
        if len(backups) >= 2:
            oldest = min(backups, key=lambda entry: entry.stat().st_mtime)
            oldest.replace(oldest.with_suffix(ARCHIVE_SUFFIX))

    def _rotate_if_needed(self) -> None:
        current = self.path
        if not current.exists() or current.stat().st_size < self.max_size:
            return
        self.close()
        stamp = time.strftime("%y%m%d_%H%M%S", time.localtime())
        current.replace(self.directory / f"{BACKUP_PREFIX}{stamp}{BACKUP_SUFFIX}")
        self._compress_oldest_if_needed()
        current.write_text("", encoding="utf-8")

    def log(self, function_name: str, message: str) -> None:
        """Append one line: a fixed-width header naming the caller, then the message."""
        self.directory.mkdir(parents=True, exist_ok=True)
        self._rotate_if_needed()
        stamp = time.strftime("%y.%m.%d %H:%M", time.localtime())
        header = f"[{stamp}] {function_name}"
        header = header[:HEADER_WIDTH].ljust(HEADER_WIDTH)
        stream = self._stream()
        stream.write(f"{header}: {message}\n")
        stream.flush()

    def close(self) -> None:
        """Release the open log file, if any."""
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._handle_path = None

    def __enter__(self) -> "ShellLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_default_logger: Optional[ShellLogger] = None


def get_logger() -> ShellLogger:
    """Return the shared logger, creating it on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = ShellLogger()
    return _default_logger


def log_message(message: str) -> None:
    """Log a message through the shared logger, tagged with the caller's name."""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    name = caller.f_code.co_name if caller is not None else "<unknown>"
    del frame, caller
    get_logger().log(name, message)