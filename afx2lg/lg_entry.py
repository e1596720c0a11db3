"""Entries of an LG setup file: plain blocks, bank lists, banks and patches."""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .lg_utils import (
    PATCH_START,
    WHITESPACE,
    check_name_size_limit,
    extract_substring,
    is_comment,
    is_default_preset,
    parse_cc,
    parse_entry_name,
    parse_program_change,
    replace_entry_name,
    replace_if_match,
)

Writer = Callable[[str], Any]

_SWITCH_PATTERN = r"switch \d+\s+\:\s+PA\s+([\w ]+)\n"
_BANK_LIST_SEPARATOR = ";-----------------------------------------\n"
_BANK_SEPARATOR = ";---------------------------------------------------------------\n"


@dataclass(eq=False)
class LgEntry:
    """A block of lines in a setup file, kept verbatim."""

    lines: list[str] = field(default_factory=list)

    def append_line(self, line: str) -> None:
        """Append a newline-terminated line, trimming trailing white space."""
        if len(line) > 2:
            body, end = line[:-1], line[-1]
            line = body[:1] + body[1:].rstrip(WHITESPACE) + end
        self.lines.append(line)

    def write_lines(self, write: Writer) -> None:
        for line in self.lines:
            write(line)

    def clone(self):
        """Return a copy with its own list of lines; references are shared."""
        other = copy.copy(self)
        other.lines = list(self.lines)
        return other


@dataclass(eq=False)
class NamedEntry(LgEntry):
    """An entry whose first line carries a name."""

    name: str = ""

    def append_line(self, line: str) -> None:
        super().append_line(line)
        if len(self.lines) == 1:
            parsed = parse_entry_name(self.lines[-1])
            if parsed is not None:
                self.name = parsed

    def rename(self, name: str) -> None:
        if self.lines:
            replaced = replace_entry_name(self.lines[0], name)
            if replaced is not None:
                self.lines[0] = replaced
        self.name = name


@dataclass(eq=False)
class BankList(NamedEntry):
    """A list of bank names; comments and blank lines are dropped."""

    def append_line(self, line: str) -> None:
        super().append_line(line)
        if len(self.lines) > 1:
            stripped = self.lines[-1][:-1]
            if not stripped or is_comment(stripped):
                self.lines.pop()
            else:
                self.lines[-1] = stripped

    def write_lines(self, write: Writer) -> None:
        if not self.lines:
            return
        write(self.lines[0])
        for bank_name in self.lines[1:]:
            write(bank_name + "\n")
        write(_BANK_LIST_SEPARATOR)

    def append_bank(self, bank_name: str) -> None:
        self.lines.append(bank_name)


@dataclass(eq=False)
class Bank(NamedEntry):
    """A bank of switches, each selecting a patch by name."""

    bank_list: BankList | None = None
    inherited_from_name: str = ""
    default_preset: str = ""

    def append_line(self, line: str) -> None:
        super().append_line(line)
        if len(self.lines) > 1 and not self.default_preset:
            preset = is_default_preset(self.lines[-1])
            if preset is not None:
                self.default_preset = preset
                self.lines.pop()

    def write_lines(self, write: Writer) -> None:
        if not self.lines:
            return
        write(self.lines[0])
        if self.inherited_from_name:
            write(f"DERIVED FROM {self.inherited_from_name}\n")
        if self.default_preset:
            write(f"DEFAULTPRESET {self.default_preset}\n")
        for line in self.lines[1:]:
            write(line)
        if not is_comment(self.lines[-1]):
            write(_BANK_SEPARATOR)

    def attach_bank_list(self, bank_list: BankList) -> None:
        if self.bank_list is not None and self.bank_list is not bank_list:
            raise ValueError(f"bank {self.name!r} already belongs to a bank list")
        self.bank_list = bank_list

    def on_patch_name_change(self, old_name: str, new_name: str) -> None:
        if not self.lines:
            return
        if old_name == self.default_preset:
            self.default_preset = new_name
        self.lines[1:] = [
            replace_if_match(line, _SWITCH_PATTERN, old_name, new_name) or line
            for line in self.lines[1:]
        ]

    def patch_names(self) -> list[str]:
        names = (extract_substring(line, _SWITCH_PATTERN) for line in self.lines[1:])
        return [name for name in names if name is not None]

    def set_inherited_from(self, bank_name: str) -> None:
        self.inherited_from_name = bank_name

    def remove_non_patch_entries(self) -> None:
        if not self.lines:
            return
        self.lines[1:] = [
            line
            for line in self.lines[1:]
            if extract_substring(line, _SWITCH_PATTERN) is not None
        ]


@dataclass(eq=False)
class Patch(NamedEntry):
    """A patch: a named set of MIDI messages selecting a preset."""

    channel: int = 1
    program: int = 0
    bank_id: int = 0
    cc_index: int = -1
    pc_index: int = -1
    bank: Bank | None = None

    @property
    def preset(self) -> int:
        """The preset number: program plus bank select times 128."""
        return self.program | (self.bank_id << 7)

    def append_line(self, line: str) -> None:
        super().append_line(line)
        if len(self.lines) < 2:
            return
        last = self.lines[-1]
        index = len(self.lines) - 1
        cc = parse_cc(last)
        if cc is not None:
            self.channel = cc[0]
            if cc[1] == 0:
                self.bank_id = cc[2]
                self.cc_index = index
                return
        pc = parse_program_change(last)
        if pc is not None:
            self.channel, self.program = pc
            self.pc_index = index

    def _start(self, name: str) -> None:
        self.lines.append(f"{PATCH_START}: {name}\n")
        self.name = name

    def rename(self, name: str) -> None:
        if self.bank is not None:
            self.bank.on_patch_name_change(self.name, name)
        if not self.lines:
            self._start(name)
        else:
            super().rename(name)

    def update(self, preset) -> None:
        """Take name and number from a preset with ``name`` and ``id``."""
        name = check_name_size_limit(preset.name)
        if self.bank is not None:
            self.bank.on_patch_name_change(self.name, name)
        if not self.lines:
            self._start(name)
            self.set_preset(preset.id)
        else:
            NamedEntry.rename(self, name)
            if preset.id != self.preset:
                self.set_preset(preset.id)

    def set_preset(self, preset_number: int) -> None:
        if not self.lines:
            raise ValueError("cannot set the preset of a patch with no lines")
        self.program = preset_number & 0x7F
        self.bank_id = preset_number >> 7

        cc_line = f"+ {self.channel:02d} CC    000 {self.bank_id:03d}\n"
        if self.cc_index == -1:
            if self.pc_index == -1:
                self.cc_index = len(self.lines)
                self.lines.append(cc_line)
            else:
                self.lines.insert(self.pc_index, cc_line)
                self.cc_index = self.pc_index
                self.pc_index += 1
        else:
            self.lines[self.cc_index] = cc_line

        pc_line = f"+ {self.channel:02d} PC    {self.program:03d}\n"
        if self.pc_index == -1:
            self.pc_index = len(self.lines)
            self.lines.append(pc_line)
        else:
            self.lines[self.pc_index] = pc_line