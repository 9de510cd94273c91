"""Parsing and validation of interactive shell commands."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from .logger import log_message

MIN_LBA = 0
LBA_COUNT = 100
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_INTEGER = re.compile(r"-?[0-9]+")
_DATA = re.compile(r"0x[0-9A-Fa-f]{8}")
_SCRIPT = re.compile(r"[0-9]+_[a-z]*")


class Command(IntEnum):
    WRITE = 1
    READ = 2
    EXIT = 3
    HELP = 4
    FULL_WRITE = 5
    FULL_READ = 6
    SCRIPT_EXECUTE = 7
    ERASE = 8
    ERASE_RANGE = 9
    FLUSH = 10


class InvalidType(IntEnum):
    NO_ERROR = 0
    INVALID_COMMAND = 1
    INVALID_DATA = 2
    INVALID_ADDRESS = 3
    NO_INPUT_COMMAND = 4
    NUMBER_OF_PARAMETERS_INCORRECT = 5


_MESSAGES = {
    InvalidType.NO_INPUT_COMMAND: "Invalid Command: No Input command",
    InvalidType.INVALID_COMMAND: "Invalid Command: Command is not defined",
    InvalidType.INVALID_ADDRESS: "Invalid Command: Invalid LBA Range (Vaild range : 0~99)",
    InvalidType.INVALID_DATA: "Invalid Command: Invalid Data",
    InvalidType.NUMBER_OF_PARAMETERS_INCORRECT: (
        "Invalid Command: The number of parameters are not correct"
    ),
}

_KEYWORDS = {
    "write": Command.WRITE,
    "read": Command.READ,
    "fullwrite": Command.FULL_WRITE,
    "fullread": Command.FULL_READ,
    "exit": Command.EXIT,
    "help": Command.HELP,
    "erase": Command.ERASE,
    "erase_range": Command.ERASE_RANGE,
    "flush": Command.FLUSH,
}


class CommandError(ValueError):
    """Raised when a command line cannot be accepted."""

    def __init__(self, invalid_type: InvalidType) -> None:
        super().__init__(_MESSAGES[invalid_type])
        self.invalid_type = invalid_type


@dataclass
class ParsingResult:
    """A validated command with its arguments."""

    command: Command
    start_lba: int = 0
    end_lba_or_size: int = 0
    data: str = ""
    script_name: str = ""

    @property
    def end_lba(self) -> int:
        return self.end_lba_or_size

    @property
    def size(self) -> int:
        return self.end_lba_or_size


def _fail(invalid_type: InvalidType) -> CommandError:
    error = CommandError(invalid_type)
    log_message(str(error))
    return error


def _is_invalid_address(lba: int) -> bool:
    return lba < MIN_LBA or lba >= LBA_COUNT


def _to_int(token: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise _fail(InvalidType.INVALID_DATA)
    value = int(token)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise _fail(InvalidType.INVALID_DATA)
    return value


def _expect_count(tokens: list[str], count: int) -> None:
    if len(tokens) != count:
        raise _fail(InvalidType.NUMBER_OF_PARAMETERS_INCORRECT)


def tokenize(line: str) -> list[str]:
    """Split a command line on whitespace, ignoring line-break characters."""
    return line.replace("\r", "").replace("\n", "").split()


def _identify(token: str) -> Command:
    word = token.lower()
    if _SCRIPT.fullmatch(word):
        return Command.SCRIPT_EXECUTE
    try:
        return _KEYWORDS[word]
    except KeyError:
        raise _fail(InvalidType.INVALID_COMMAND) from None


def _parse_write(tokens: list[str]) -> ParsingResult:
    _expect_count(tokens, 3)
    lba = _to_int(tokens[1])
    if _is_invalid_address(lba):
        raise _fail(InvalidType.INVALID_ADDRESS)
    if not _DATA.fullmatch(tokens[2]):
        raise _fail(InvalidType.INVALID_DATA)
    return ParsingResult(Command.WRITE, start_lba=lba, data=tokens[2])


def _parse_read(tokens: list[str]) -> ParsingResult:
    _expect_count(tokens, 2)
    lba = _to_int(tokens[1])
    if _is_invalid_address(lba):
        raise _fail(InvalidType.INVALID_ADDRESS)
    return ParsingResult(Command.READ, start_lba=lba)


def _parse_erase(command: Command, tokens: list[str]) -> ParsingResult:
    _expect_count(tokens, 3)
    lba = _to_int(tokens[1])
    value = _to_int(tokens[2])
    if command is Command.ERASE:
        if value < 0:
            lba = lba + value + 1
            value = -value
        if _is_invalid_address(lba):
            raise _fail(InvalidType.INVALID_ADDRESS)
        value = min(value, LBA_COUNT - lba)
        return ParsingResult(command, start_lba=lba, end_lba_or_size=value)
    if _is_invalid_address(lba) or _is_invalid_address(value):
        raise _fail(InvalidType.INVALID_ADDRESS)
    start, end = sorted((lba, value))
    return ParsingResult(command, start_lba=start, end_lba_or_size=end)


def parse_command(line: str) -> ParsingResult:
    """Parse one shell line, raising CommandError when it is not acceptable."""
    log_message(line)
    tokens = tokenize(line)
    if not tokens:
        raise _fail(InvalidType.NO_INPUT_COMMAND)
    command = _identify(tokens[0])

    if command is Command.WRITE:
        return _parse_write(tokens)
    if command is Command.READ:
        return _parse_read(tokens)
    if command is Command.FULL_WRITE:
        _expect_count(tokens, 2)
        return ParsingResult(command, data=tokens[1])
    if command in (Command.ERASE, Command.ERASE_RANGE):
        return _parse_erase(command, tokens)
    if len(tokens) > 1:
        raise _fail(InvalidType.NUMBER_OF_PARAMETERS_INCORRECT)
    if command is Command.SCRIPT_EXECUTE:
        return ParsingResult(command, script_name=tokens[0])
    return ParsingResult(command)