"""Built-in test scenarios run against the SSD."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Optional

from .driver import SSDDriver
from .logger import log_message

LBA_COUNT = 100
FORMAT_CHUNK = 10
ERASED = "0x00000000"


class ScriptCommand(ABC):
    """A scripted scenario that drives the SSD and checks what it reads back."""

    def __init__(self, driver: Optional[SSDDriver] = None) -> None:
        self.driver = driver if driver is not None else SSDDriver()

    @abstractmethod
    def run(self) -> bool:
        """Run the scenario, returning whether every comparison passed."""

    def _format(self) -> None:
        for lba in range(0, LBA_COUNT, FORMAT_CHUNK):
            self.driver.erase(lba, FORMAT_CHUNK)

    def read_compare(self, lba: int, expected: str) -> bool:
        """Read ``lba`` and check that it holds ``expected``."""
        self.driver.read(lba)
        try:
            actual = self.driver.read_output()
        except OSError:
            message = f"Error opening file for reading: {self.driver.output_path}"
            print(message, file=sys.stderr)
            log_message(message)
            return False
        actual = actual.replace("\n", "")
        if actual != expected:
            log_message(
                f"Fail : [Read Compare] LBA {lba}  actual : {actual}, "
                f"expected : {expected}"
            )
            return False
        return True


class FullWriteAndReadCompare(ScriptCommand):
    """Write the whole device five LBAs at a time, alternating patterns."""

    PATTERNS = ("0x11111111", "0xFFFFFFFF")
    BLOCK = 5

    def run(self) -> bool:
        self._format()
        for block, start in enumerate(range(0, LBA_COUNT, self.BLOCK)):
            data = self.PATTERNS[block % len(self.PATTERNS)]
            lbas = range(start, start + self.BLOCK)
            for lba in lbas:
                self.driver.write(lba, data)
                log_message(f"Write LBA {lba} with data: {data}")
            if not all(self.read_compare(lba, data) for lba in lbas):
                return False
            log_message(" Write and Read Compare Success")
        return True


class PartialLBAWrite(ScriptCommand):
    """Repeatedly write LBAs 0 to 4 out of order and read them back."""

    PATTERN = "0xABCDABCD"
    ORDER = (4, 0, 3, 1, 2)
    LOOPS = 30

    def run(self) -> bool:
        self._format()
        for _ in range(self.LOOPS):
            for lba in self.ORDER:
                self.driver.write(lba, self.PATTERN)
                log_message(f"Write LBA {lba} with data: {self.PATTERN}")
            # The last-written LBA is checked once for every write in the pass.
            last = self.ORDER[-1]
            if not all(self.read_compare(last, self.PATTERN) for _ in self.ORDER):
                return False
            log_message("Write and Read Compare Success")
        return True


class WriteReadAging(ScriptCommand):
    """Hammer the first and last LBA with writes, then verify both."""

    PATTERNS = ("0xABCDABCD", "0x12340987")
    LOOPS = 200

    def run(self) -> bool:
        self._format()
        first, last = 0, LBA_COUNT - 1
        for _ in range(self.LOOPS):
            self.driver.write(first, self.PATTERNS[0])
            log_message(f"Write LBA {first} with data: {self.PATTERNS[0]}")
        for _ in range(self.LOOPS):
            self.driver.write(last, self.PATTERNS[1])
        log_message(f"Write LBA {last} with data: {self.PATTERNS[1]}")

        if not self.read_compare(first, self.PATTERNS[0]):
            return False
        if not self.read_compare(last, self.PATTERNS[1]):
            return False
        log_message("Write and Read Compare Success")
        return True


class EraseAndWriteAging(ScriptCommand):
    """Overwrite groups of three LBAs, erase them and check they read as erased."""

    PATTERN = "0xFFFFFFFF"
    LOOPS = 30
    GROUP = 3
    STEP = 4
    WRITES = 2

    def run(self) -> bool:
        self._format()
        for _ in range(self.LOOPS):
            for lba in range(0, LBA_COUNT - self.GROUP + 1, self.STEP):
                group = range(lba, lba + self.GROUP)
                for _ in range(self.WRITES):
                    for target in group:
                        self.driver.write(target, self.PATTERN)
                self.driver.erase(lba, self.GROUP)
                if not all(self.read_compare(target, ERASED) for target in group):
                    return False
        return True