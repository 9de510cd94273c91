# ssdshell

ssdshell is a test shell for a command-line SSD emulator. It takes read, write,
erase and flush commands, checks their arguments and passes each one to the
emulator program as a separate process. By default that program is `ssd.exe`,
found through the normal program search path. After every read, the emulator
writes the value it read to `ssd_output.txt`, and the shell reads the value from
that file.

The shell also includes test scripts. Each one writes patterns to the device,
reads them back and compares the result.

## Installation

```
pip install .
```

To develop with the test suite:

```
pip install ".[test]"
pytest
```

## Interactive use

```
ssdshell
```

The shell reads one command per line from standard input. It prints a `Shell>`
prompt for each line, and it stops at `exit` or at the end of input.

| Command                     | Meaning                                                        |
|-----------------------------|----------------------------------------------------------------|
| `read <lba>`                | read one LBA (0–99) and print its value                        |
| `write <lba> <data>`        | write one LBA; data is `0x` followed by exactly 8 hex digits   |
| `fullread`                  | read and print LBA 0 to 99                                     |
| `fullwrite <data>`          | write the same data to every LBA (the data is not checked)     |
| `erase <lba> <size>`        | erase `size` LBAs from `lba`                                   |
| `erase_range <start> <end>` | erase an inclusive range; the two ends can be given in either order |
| `flush`                     | flush the emulator's command buffer                            |
| `help`                      | show usage                                                     |
| `exit`                      | leave the shell                                                |
| `<#>_...`                   | run a test script by number, e.g. `1_` or `1_FullWriteAndReadCompare` |

Command names are case-insensitive. A negative size for `erase` erases
backwards and ends at `lba`: `erase 4 -2` erases LBAs 3 and 4. A size that
would go past LBA 99 is cut short at 99. The driver splits each erase into
chunks of at most 10 LBAs. If a command is invalid, the shell prints a message
such as `Invalid Command: Invalid Data` and reads the next line.

## Running a script file

```
ssdshell shell_script.txt
```

The file holds one script name per line. A name only has to start with the
script's number and underscore. Whitespace, carriage returns and a leading
byte-order mark are removed. The scripts run in order, and each line prints
`<name>___ Run... ` followed by `Pass` or `FAIL!!`. The run stops at the first
failure. A name with no matching script counts as a failure, and so does a blank
line.

If you give more than one argument, the command prints a usage error and exits
with status 1.

Built-in scripts, all of which first erase the whole device:

1. `1_` (`FullWriteAndReadCompare`): writes blocks of five LBAs, alternating
   between `0x11111111` and `0xFFFFFFFF`, and compares each block.
2. `2_` (`PartialLBAWrite`): writes LBAs 4, 0, 3, 1, 2 with `0xABCDABCD`
   30 times, and compares after each pass.
3. `3_` (`WriteReadAging`): writes LBA 0 and LBA 99 200 times each, then
   compares both.
4. `4_` (`EraseAndWriteAging`): writes groups of three LBAs twice over, erases
   them, and checks that they read `0x00000000`. This runs 30 times.

## Library use

```python
from ssdshell.driver import SSDDriver
from ssdshell.parser import CommandError, parse_command
from ssdshell.shell import SSDShell

shell = SSDShell(SSDDriver("ssd.exe", "ssd_output.txt"))
try:
    result = parse_command("write 3 0xAAAABBBB")
except CommandError as err:
    print(err, err.invalid_type)
else:
    shell.execute_command(result)   # returns True only for "exit"

print(shell.read(3))
shell.run(["erase_range 0 9", "exit"])
```

- `ssdshell.parser`: `parse_command()` returns a `ParsingResult`, which has the
  fields `command`, `start_lba`, `end_lba_or_size`, `data` and `script_name`. It
  raises `CommandError` for bad input; the error's `invalid_type` is an
  `InvalidType`. `tokenize()` splits a line into words.
- `ssdshell.driver.SSDDriver` runs the emulator for `read`, `write`, `erase` and
  `flush`. Each method returns whether every call exited with status 0. The
  executable can be a single string or a sequence of arguments.
  `read_output()` returns the raw contents of the output file.
- `ssdshell.executor.ScriptExecutor` maps prefixes to scripts. It has
  `register()`, `execute()` and `execute_all()`.
- `ssdshell.scripts.ScriptCommand` is the base class for scripts. It provides
  `read_compare()`, and a subclass implements `run()`.
- `ssdshell.registry` holds a registry of `ScriptTC` classes by name. Use the
  `@register_class` decorator to add a class, and
  `default_registry().run_all()` to create and run every registered class in
  name order.

## Logging

Activity is appended to `logs/latest.txt`. Each line starts with a timestamp and
the calling function's name, padded to a fixed width. When the file reaches
10 KB it is renamed to `until_YYMMDD_HHMMSS.log`. Once two or more such files
exist, the oldest one gets a `.zip` extension. It is only renamed, not
compressed.

## What it does not do

- It does not include the SSD emulator. Every operation needs an external
  program that accepts `r <lba>`, `w <lba> <data>`, `e <lba> <size>` and `F`,
  and that writes read results to the output file.
- It does not load test cases from external libraries or plugin files. The
  registry only holds classes registered in Python code, and neither the shell
  nor the script-file mode runs the registry's entries.