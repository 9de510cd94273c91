[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "ssdshell"
version = "0.1.0"
description = "Interactive test shell and scripted test runner for a command-line SSD emulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["ssd", "shell", "testing", "lba", "test-scripts"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ssdshell = "ssdshell.shell:main"

[tool.setuptools.packages.find]
include = ["ssdshell*"]

[tool.pytest.ini_options]
addopts = "-ra"
