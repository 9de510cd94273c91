"""Thin front end that runs the SSD program for each storage operation."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Sequence, Union

from .logger import log_message

DEFAULT_EXECUTABLE = "ssd.exe"
DEFAULT_OUTPUT = "ssd_output.txt"
MAX_ERASE_CHUNK = 10


class SSDDriver:
    """Issues read, write, erase and flush requests to the SSD program."""

    def __init__(
        self,
        executable: Union[str, Sequence[str]] = DEFAULT_EXECUTABLE,
        output_path: Union[str, Path] = DEFAULT_OUTPUT,
    ) -> None:
        if isinstance(executable, str):
            self.command = [executable]
        else:
            self.command = list(executable)
        self.output_path = Path(output_path)

    def _report(self, message: str) -> None:
        print(message, file=sys.stderr)
        log_message(message)

    def _run(self, *args: object) -> bool:
        command = [*self.command, *(str(arg) for arg in args)]
        try:
            completed = subprocess.run(command, check=False)
        except OSError as exc:
            self._report(f"Failed to run {self.command[0]}: {exc}")
            return False
        if completed.returncode != 0:
            self._report(
                f"{self.command[0]} failed. Exit code: {completed.returncode}"
            )
            return False
        return True

    def read(self, address: int) -> bool:
        """Ask the SSD to read one LBA into its output file."""
        return self._run("r", address)

    def write(self, address: int, data: str) -> bool:
        """Write one value to one LBA."""
        return self._run("w", address, data)

    def erase(self, lba: int, size: int) -> bool:
        """Erase ``size`` LBAs from ``lba``, in chunks the SSD accepts."""
        ok = True
        while size > 0:
            chunk = min(size, MAX_ERASE_CHUNK)
            ok = self._run("e", lba, chunk) and ok
            lba += chunk
            size -= chunk
        return ok

    def flush(self) -> bool:
        """Flush the SSD's command buffer."""
        return self._run("F")

    def read_output(self) -> str:
        """Return the raw contents of the SSD output file."""
        return self.output_path.read_text(encoding="utf-8")