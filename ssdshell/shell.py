"""Interactive shell that drives the SSD program, and its command-line entry point."""

from __future__ import annotations

import sys
from typing import Iterable, Optional, Sequence

from .driver import SSDDriver
from .executor import ScriptExecutor
from .logger import log_message
from .parser import Command, CommandError, ParsingResult, parse_command

MIN_LBA = 0
MAX_LBA = 99
PROMPT = "Shell>"
USAGE_ERROR = (
    "Invalid Usage: Argc should be 1 or 2, Example: shell.exe, shell.exe [Filename]"
)

HELP_TEXT = """\
>>>> SSD Shell Help <<<<
 * command list : read, write, fullread, fullwrite, erase, erase_range, exit, help, flush

  ---- usage ----
    read <lba 0~99>
    write <lba 0~99> <data>
        - data : 0~9, A-F, 4byte size
    fullread : read from 0 to 99
    fullwrite <data> : write from 0 to 99 with same data
        - data : 0~9, A-F, 4byte size
    erase : erase <lba 0~99> <size>
        - size : min int - max int 
    erase_range : erase_range <start lba 0~99> <end lba 0~99>
    exit
    help
    flush
  ----------------
>>>> Test Shell Script Help <<<<
    <#>_<TC full name> : run script
    <#>_ : run script start with #
  ----------------"""


class SSDShell:
    """Reads shell commands and carries them out on the SSD."""

    def __init__(self, driver: Optional[SSDDriver] = None) -> None:
        self.driver = driver if driver is not None else SSDDriver()

    def run(self, lines: Optional[Iterable[str]] = None) -> None:
        """Process command lines until ``exit`` or the input runs out."""
        source = sys.stdin if lines is None else lines
        for line in source:
            print(PROMPT, end="", flush=True)
            try:
                result = parse_command(line)
            except CommandError as error:
                print(error)
                continue
            if self.execute_command(result):
                break

    def execute_command(self, result: ParsingResult) -> bool:
        """Carry out one parsed command; return True when the shell should exit."""
        command = result.command
        if command is Command.WRITE:
            self.write(result.start_lba, result.data)
        elif command is Command.READ:
            self.read(result.start_lba)
        elif command is Command.FULL_WRITE:
            self.full_write(result.data)
        elif command is Command.FULL_READ:
            self.full_read()
        elif command is Command.HELP:
            self.print_help()
        elif command is Command.EXIT:
            print("Exit")
            return True
        elif command is Command.SCRIPT_EXECUTE:
            print("Script Execute")
            ScriptExecutor(self.driver).execute(result.script_name)
        elif command is Command.ERASE:
            print(f"ERASE {result.start_lba} {result.size}")
            self.erase(result.start_lba, result.size)
        elif command is Command.ERASE_RANGE:
            print(f"ERASE RANGE{result.start_lba} {result.end_lba}")
            self.erase_range(result.start_lba, result.end_lba)
        elif command is Command.FLUSH:
            print("FLUSH")
            self.flush()
        return False

    def read(self, address: int) -> str:
        """Read one LBA and return its value, or an empty string if it cannot be read."""
        self.driver.read(address)
        try:
            data = self.driver.read_output()
        except OSError:
            message = f"Error opening file for reading: {self.driver.output_path}"
            print(message, file=sys.stderr)
            log_message(message)
            return ""
        data = data.rstrip()
        print(f"[Read] LBA {address} : {data}")
        return data

    def write(self, address: int, data: str) -> bool:
        """Write one value to one LBA."""
        self.driver.write(address, data)
        print("[Write] LBA Done")
        return True

    def erase(self, lba: int, size: int) -> bool:
        """Erase ``size`` LBAs starting at ``lba``."""
        self.driver.erase(lba, size)
        return True

    def erase_range(self, start_lba: int, end_lba: int) -> bool:
        """Erase every LBA from ``start_lba`` to ``end_lba`` inclusive."""
        self.driver.erase(start_lba, end_lba - start_lba + 1)
        return True

    def flush(self) -> bool:
        """Flush the SSD's command buffer."""
        self.driver.flush()
        return True

    def full_read(self) -> bool:
        """Read and print every LBA; False if the output cannot be read."""
        for address in range(MIN_LBA, MAX_LBA + 1):
            self.driver.read(address)
            try:
                data = self.driver.read_output()
            except OSError:
                print(f"Error opening file for reading: {self.driver.output_path}")
                return False
            print(f"[Read] LBA {address} : {data}")
        return True

    def full_write(self, data: str) -> bool:
        """Write the same value to every LBA."""
        for address in range(MIN_LBA, MAX_LBA + 1):
            self.driver.write(address, data)
        return True

    def print_help(self) -> None:
        """Print the list of commands and how to use them."""
        print(HELP_TEXT)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the interactive shell, or run the scenarios listed in a file."""
    args = list(sys.argv[1:] if argv is None else argv)
    log_message("Shell start")
    if not args:
        SSDShell().run()
    elif len(args) == 1:
        log_message(f"Test script name -> {args[0]}")
        ScriptExecutor().execute_all(args[0])
    else:
        print(USAGE_ERROR, file=sys.stderr)
        log_message(USAGE_ERROR)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())