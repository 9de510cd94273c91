"""Test shell, built-in test scripts and script runner for a command-line SSD emulator."""

__version__ = "0.1.0"