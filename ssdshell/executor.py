"""Dispatch of script names to the built-in test scenarios."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Optional, Union

from .driver import SSDDriver
from .logger import log_message
from .scripts import (
    EraseAndWriteAging,
    FullWriteAndReadCompare,
    PartialLBAWrite,
    ScriptCommand,
    WriteReadAging,
)

_BOM = "\ufeff"


class ScriptExecutor:
    """Runs scenarios chosen by the numeric prefix of their name."""

    def __init__(self, driver: Optional[SSDDriver] = None) -> None:
        driver = driver if driver is not None else SSDDriver()
        self.commands: Dict[str, ScriptCommand] = {}
        self.register("1_", FullWriteAndReadCompare(driver))
        self.register("2_", PartialLBAWrite(driver))
        self.register("3_", WriteReadAging(driver))
        self.register("4_", EraseAndWriteAging(driver))

    def register(self, prefix: str, command: ScriptCommand) -> None:
        """Bind a scenario to a name prefix, replacing any earlier one."""
        self.commands[prefix] = command

    def execute(self, user_input: str) -> bool:
        """Run the scenario whose prefix starts ``user_input``."""
        for prefix, command in self.commands.items():
            if user_input.startswith(prefix):
                return command.run()
        print(f"Unknown command: {user_input}")
        return False

    def execute_all(self, filename: Union[str, Path]) -> bool:
        """Run every scenario listed in a file, stopping at the first failure."""
        try:
            with open(filename, encoding="utf-8") as handle:
                lines = handle.readlines()
        except OSError:
            print("Unable to open file", file=sys.stderr)
            log_message("Unable to open file")
            return False

        for line in lines:
            if line.startswith(_BOM):
                line = line[len(_BOM):]
            name = "".join(line.split())
            print(f"{name}___ Run... ", end="")
            if not self.execute(name):
                print("FAIL!!")
                return False
            print("Pass")
        return True