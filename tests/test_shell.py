import json
import sys
import textwrap
from pathlib import Path

import pytest

from ssdshell.driver import SSDDriver
from ssdshell.parser import Command, ParsingResult
from ssdshell.shell import SSDShell, main

PATTERN = "0xABCDABCD"
ERASED = "0x00000000"


class FakeSSD:
    """In-memory SSD that records every request it receives."""

    def __init__(self, output_path, produce_output=True):
        self.output_path = Path(output_path)
        self.produce_output = produce_output
        self.nand = {}
        self.buffer = []
        self.calls = []

    def read(self, address):
        self.calls.append(("r", address))
        if self.produce_output:
            self.output_path.write_text(self.nand.get(address, ERASED) + "\n")
        return True

    def write(self, address, data):
        self.calls.append(("w", address, data))
        self.nand[address] = data
        self.buffer.append(("w", address))
        return True

    def erase(self, lba, size):
        self.calls.append(("e", lba, size))
        for address in range(lba, lba + size):
            self.nand[address] = ERASED
        self.buffer.append(("e", lba))
        return True

    def flush(self):
        self.calls.append(("F",))
        self.buffer.clear()
        return True

    def read_output(self):
        return self.output_path.read_text()


@pytest.fixture(autouse=True)
def _workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake(tmp_path):
    return FakeSSD(tmp_path / "ssd_output.txt")


@pytest.fixture
def shell(fake):
    return SSDShell(fake)


def test_print_help_lists_commands(shell, capsys):
    shell.print_help()
    out = capsys.readouterr().out
    assert "command list : read, write, fullread, fullwrite, erase, erase_range" in out
    assert "<#>_<TC full name> : run script" in out


def test_read_returns_stripped_value(shell, capsys):
    assert shell.read(0) == ERASED
    assert "[Read] LBA 0 : 0x00000000" in capsys.readouterr().out


def test_read_without_output_returns_empty(tmp_path, capsys):
    driver = FakeSSD(tmp_path / "missing.txt", produce_output=False)
    assert SSDShell(driver).read(5) == ""
    assert "Error opening file for reading" in capsys.readouterr().err


def test_flush_after_mixed_writes_and_erases(shell, fake):
    for lba in range(100):
        if lba % 2 == 0:
            shell.write(lba, PATTERN)
        else:
            shell.erase(lba, 1)
    assert len(fake.buffer) == 100
    assert shell.flush() is True
    assert fake.buffer == []
    assert fake.calls[-1] == ("F",)


def test_full_write_then_full_read(shell, fake, capsys):
    assert shell.full_write(PATTERN) is True
    assert [call for call in fake.calls if call[0] == "w"] == [
        ("w", lba, PATTERN) for lba in range(100)
    ]
    assert shell.full_read() is True
    out = capsys.readouterr().out
    assert sum(line.startswith("[Read] LBA") for line in out.splitlines()) == 100
    assert shell.read(99) == PATTERN


def test_full_read_fails_without_output(tmp_path):
    driver = FakeSSD(tmp_path / "missing.txt", produce_output=False)
    assert SSDShell(driver).full_read() is False
    assert driver.calls == [("r", 0)]


def test_erase_single(shell):
    assert shell.write(10, PATTERN) is True
    assert shell.read(10) == PATTERN
    shell.erase(10, 1)
    assert shell.read(10) == ERASED


def test_erase_range_pair(shell, fake):
    shell.write(10, PATTERN)
    assert shell.read(10) == PATTERN
    shell.erase_range(10, 11)
    assert ("e", 10, 2) in fake.calls
    assert shell.read(10) == ERASED


def test_erase_range_whole_device(shell, fake):
    shell.write(10, PATTERN)
    assert shell.read(10) == PATTERN
    shell.erase_range(0, 99)
    assert ("e", 0, 100) in fake.calls
    assert shell.read(10) == ERASED


def test_full_write_then_erase_everything(shell):
    shell.full_write(PATTERN)
    shell.erase_range(0, 99)
    assert [shell.read(lba) for lba in range(11)] == [ERASED] * 11


def test_exit_command_returns_true(shell, capsys):
    result = ParsingResult(Command.EXIT, 0, 0, " ", " ")
    assert shell.execute_command(result) is True
    assert "Exit" in capsys.readouterr().out


def test_execute_write_and_read(shell, fake):
    assert shell.execute_command(ParsingResult(Command.WRITE, 3, data=PATTERN)) is False
    assert fake.nand[3] == PATTERN
    assert shell.execute_command(ParsingResult(Command.READ, 3)) is False
    assert fake.calls[-1] == ("r", 3)


def test_execute_erase_prints_and_erases(shell, fake, capsys):
    shell.execute_command(ParsingResult(Command.ERASE, 4, 3))
    assert "ERASE 4 3" in capsys.readouterr().out
    assert fake.calls == [("e", 4, 3)]


def test_execute_erase_range(shell, fake, capsys):
    shell.execute_command(ParsingResult(Command.ERASE_RANGE, 2, 5))
    assert "ERASE RANGE2 5" in capsys.readouterr().out
    assert fake.calls == [("e", 2, 4)]


def test_execute_flush(shell, fake, capsys):
    shell.execute_command(ParsingResult(Command.FLUSH))
    assert "FLUSH" in capsys.readouterr().out
    assert fake.calls == [("F",)]


def test_execute_unknown_script(shell, capsys):
    result = ParsingResult(Command.SCRIPT_EXECUTE, script_name="9_none")
    assert shell.execute_command(result) is False
    out = capsys.readouterr().out
    assert "Script Execute" in out
    assert "Unknown command: 9_none" in out


def test_execute_script_runs_scenario(shell, fake):
    result = ParsingResult(Command.SCRIPT_EXECUTE, script_name="3_WriteReadAging")
    assert shell.execute_command(result) is False
    assert shell.read(0) == "0xABCDABCD"
    assert shell.read(99) == "0x12340987"


def test_run_processes_until_exit(shell, fake, capsys):
    shell.run(["write 3 0xAAAABBBB", "bogus", "read 3", "exit", "write 4 0xAAAABBBB"])
    out = capsys.readouterr().out
    assert "Invalid Command: Command is not defined" in out
    assert "[Read] LBA 3 : 0xAAAABBBB" in out
    assert 4 not in fake.nand
    assert out.count("Shell>") == 4


def test_run_stops_when_input_ends(shell, fake):
    shell.run(["fullwrite 0x12345678"])
    assert shell.read(99) == "0x12345678"
    assert shell.read(0) == "0x12345678"


def test_read_through_real_driver(tmp_path):
    program = tmp_path / "fake_ssd.py"
    program.write_text(
        textwrap.dedent(
            """
            import json, pathlib, sys
            store = pathlib.Path("nand.json")
            nand = json.loads(store.read_text()) if store.exists() else {}
            op, lba = sys.argv[1], sys.argv[2]
            if op == "w":
                nand[lba] = sys.argv[3]
                store.write_text(json.dumps(nand))
            elif op == "r":
                pathlib.Path("ssd_output.txt").write_text(nand.get(lba, "0x00000000") + "\\n")
            """
        )
    )
    driver = SSDDriver([sys.executable, str(program)], tmp_path / "ssd_output.txt")
    shell = SSDShell(driver)
    shell.write(7, PATTERN)
    assert json.loads((tmp_path / "nand.json").read_text()) == {"7": PATTERN}
    assert shell.read(7) == PATTERN


def test_main_rejects_too_many_arguments(capsys):
    assert main(["one", "two"]) == 1
    assert "Invalid Usage" in capsys.readouterr().err


def test_main_with_missing_script_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.txt")]) == 0
    assert "Unable to open file" in capsys.readouterr().err