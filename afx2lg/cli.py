"""Command line handling: arguments, preset ranges and interactive prompts."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

_USAGE = (
    "Usage:\n\n"
    "  afx2lg -s=f1.syx [-r=<range>] -t=t.txt\n"
    "\n"
    "    -s     A .syx SysEx patch or bank file for AxeFx II.\n"
    "           You can specify multiple such files in one go.\n"
    "\n"
    "    -r     Preset ID range and/or a comma separated list of IDs.\n"
    "           Example: -r=0-12,30,45,20-25,100\n"
    "           If omitted, all presets are included\n"
    "\n"
    "    -t     Specify the template file that will be used to\n"
    "           generate a setup file that can be imported into\n"
    "           LG Control Center.  You create this file by exporting\n"
    "           your setup file from LG Control Center as a via the\n"
    "           'File->Export to...->Text...' command.\n"
    "\n"
    "The generated output will be written to stdout, so just pipe it\n"
    "to a file of your choosing.\n\n"
    "Example:\n\n"
    "  afx2lg -s=BankA.syx -s=lead.syx -s=BankB.syx -t=input.txt > out.txt\n"
    "\n"
    "Then you import the output file [out.txt] in Control Center by using\n"
    "the 'File->Import from...->Text...' command.\n\n"
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_ESC = "\x1b"


class UsageError(Exception):
    """The command line could not be understood; the usage should be shown."""


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class IDRange:
    """A single preset id or an inclusive range such as ``20-25``."""

    def __init__(self, text: str) -> None:
        first, sep, last = text.partition("-")
        self.first = _atoi(first)
        self.last: int | None = _atoi(last) if sep else None
        if self.last is not None and self.first > self.last:
            self.first, self.last = self.last, self.first

    def matches(self, preset_id: int) -> bool:
        if self.last is None:
            return preset_id == self.first
        return self.first <= preset_id <= self.last

    def __repr__(self) -> str:
        return f"IDRange(first={self.first}, last={self.last})"


@dataclass
class SysExFileParam:
    """A SysEx file to read, with the preset ids to take from it."""

    path: str
    ranges: list[IDRange] = field(default_factory=list)

    def set_range(self, text: str) -> None:
        """Add the comma separated ids and ranges in ``text``."""
        self.ranges.extend(IDRange(part) for part in text.split(","))

    def should_include_preset(self, preset_id: int) -> bool:
        if not self.ranges:
            return True
        return any(r.matches(preset_id) for r in self.ranges)


@dataclass
class Arguments:
    """The outcome of reading the command line."""

    syx_files: list[SysExFileParam]
    template: str
    did_prompt: bool = False


def prompt_user(
    prompt: str, stdin: TextIO | None = None, stdout: TextIO | None = None
) -> str | None:
    """Show ``prompt`` and read one line; None if Esc is typed or input ended."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stdout.write(prompt)
    stdout.flush()
    chars: list[str] = []
    while True:
        ch = stdin.read(1)
        if not ch:
            return "".join(chars) if chars else None
        if ch == _ESC:
            return None
        if ch == "\n":
            return "".join(chars)
        chars.append(ch)


def _prompt_for_file(prompt: str) -> str | None:
    """Ask until the answer names an existing file; None if the user gives up."""
    while True:
        path = prompt_user(prompt)
        if path is None:
            return None
        if os.path.exists(path):
            return path
        if path and not path.startswith('"'):
            path = f'"{path}"'
            if os.path.exists(path):
                return path
        sys.stdout.write(f"Unable to open {path}\n")


def parse_args(argv: Sequence[str] | None = None) -> Arguments:
    """Read ``-s=``, ``-r=`` and ``-t=`` options, prompting for what is missing."""
    if argv is None:
        argv = sys.argv[1:]
    syx_files: list[SysExFileParam] = []
    template = ""
    did_prompt = False

    for arg in argv:
        if not arg.startswith("-") or len(arg) < 4 or arg[2] != "=":
            raise UsageError(f"Unknown/malformed argument: '{arg}'")
        option, value = arg[1], arg[3:]
        if option == "?":
            raise UsageError("")
        if option == "s":
            syx_files.append(SysExFileParam(value))
        elif option == "r":
            if not syx_files:
                raise UsageError("Range parameter doesn't match a sysex file")
            syx_files[-1].set_range(value)
        elif option == "t":
            if template:
                raise UsageError("The template file can only be specified once")
            template = value

    if not template:
        did_prompt = True
        template = (
            _prompt_for_file("I need a path to a LittleGiant exported text file: ")
            or ""
        )

    if not syx_files:
        did_prompt = True
        path = _prompt_for_file("I need a path to a preset file or bank (.syx): ")
        range_text = prompt_user("Enter a preset range or * for all: ") or ""
        entry = SysExFileParam(path or "")
        if range_text and range_text != "*":
            entry.set_range(range_text)
        if entry.path:
            syx_files.append(entry)

    if not syx_files or not template:
        raise UsageError("")
    return Arguments(syx_files, template, did_prompt)


def usage() -> str:
    """Return the usage text."""
    return _USAGE