"""Line classification and small text helpers for LG setup files."""

from __future__ import annotations

import itertools
import re
from collections.abc import Container

MAX_NAME_LENGTH = 16
PATCH_START = "* PATCH "

_SECTION_START = ";="
_ENTRY_START = "* "
_COMMENT_START = ";"
_BANK_START = "* BANK "
_BANK_LIST_START = "* BANKLIST "

# The characters the C locale treats as white space.
WHITESPACE = " \t\n\v\f\r"

_CC_RE = re.compile(r"\+\s+(\d+)\s+CC\s+(\d+)\s+(\d+).*\n", re.ASCII)
_PC_RE = re.compile(r"\+\s+(\d+)\s+PC\s+(\d+).*\n", re.ASCII)
_ENTRY_NAME_RE = re.compile(r"\*\s+(\w+)\s+:\s+([\w ]+)\n", re.ASCII)
_DEFAULT_PRESET_PATTERN = r"DEFAULTPRESET\s+([\w ]+)\n"


def generate_unique_name(taken_names: Container[str], original_name: str) -> str:
    """Return a variant of ``original_name`` with a numeric suffix not in use.

    The name is shortened so that the result never grows beyond the length
    of the original name once that exceeds the maximum name length.
    """
    if original_name not in taken_names:
        raise ValueError(f"name {original_name!r} is not taken")
    for counter in itertools.count(1):
        suffix = str(counter)
        candidate = original_name + suffix
        if len(candidate) > MAX_NAME_LENGTH:
            keep = max(len(original_name) - len(suffix), 0)
            candidate = original_name[:keep] + suffix
        if candidate not in taken_names:
            return candidate
    raise AssertionError("unreachable")


def check_name_size_limit(name: str) -> str:
    """Squeeze an over-long name into CamelCaps by removing white space."""
    if len(name) <= MAX_NAME_LENGTH:
        return name
    parts: list[str] = []
    capitalise = False
    for ch in name:
        if ch in WHITESPACE:
            capitalise = True
            continue
        parts.append(ch.upper() if capitalise and ch.isascii() else ch)
        capitalise = False
    return "".join(parts)


def is_section_separator(line: str) -> bool:
    return line.startswith(_SECTION_START)


def is_comment(line: str) -> bool:
    return line.startswith(_COMMENT_START)


def is_entry_start(line: str) -> bool:
    return line.startswith(_ENTRY_START)


def is_patch_start(line: str) -> bool:
    return line.startswith(PATCH_START)


def is_bank_start(line: str) -> bool:
    return line.startswith(_BANK_START)


def is_bank_list_start(line: str) -> bool:
    return line.startswith(_BANK_LIST_START)


def parse_cc(line: str) -> tuple[int, int, int] | None:
    """Parse a control change line into ``(channel, cc, value)``."""
    if not line.startswith("+"):
        return None
    match = _CC_RE.fullmatch(line)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def parse_program_change(line: str) -> tuple[int, int] | None:
    """Parse a program change line into ``(channel, program)``."""
    if not line.startswith("+"):
        return None
    match = _PC_RE.fullmatch(line)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def parse_entry_name(line: str) -> str | None:
    """Return the name from an entry header line, or None."""
    match = _ENTRY_NAME_RE.fullmatch(line)
    return match.group(2) if match else None


def replace_entry_name(line: str, name: str) -> str | None:
    """Return the header line with its name replaced, or None if not a header."""
    match = _ENTRY_NAME_RE.fullmatch(line)
    if match is None:
        return None
    return line[: match.start(2)] + name + line[match.end(2) :]


def replace_if_match(line: str, pattern: str, find: str, replace: str) -> str | None:
    """Replace group 1 of ``pattern`` with ``replace`` when it equals ``find``.

    Returns the new line, or None when the line does not match or the group
    holds something else.
    """
    match = re.fullmatch(pattern, line, re.ASCII)
    if match is None or match.group(1) != find:
        return None
    return line[: match.start(1)] + replace + line[match.end(1) :]


def extract_substring(line: str, pattern: str) -> str | None:
    """Return group 1 of ``pattern`` when the whole line matches it."""
    match = re.fullmatch(pattern, line, re.ASCII)
    return match.group(1) if match else None


def is_default_preset(line: str) -> str | None:
    """Return the preset named by a DEFAULTPRESET line, or None."""
    return extract_substring(line, _DEFAULT_PRESET_PATTERN)