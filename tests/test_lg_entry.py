from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st

from afx2lg.lg_entry import Bank, BankList, LgEntry, NamedEntry, Patch
from afx2lg.lg_utils import (
    check_name_size_limit,
    is_patch_start,
    parse_cc,
    parse_entry_name,
    parse_program_change,
)

BANK_SEP = ";---------------------------------------------------------------\n"
BANK_LIST_SEP = ";-----------------------------------------\n"


@dataclass
class _Preset:
    name: str
    id: int


def _written(entry):
    out = []
    entry.write_lines(out.append)
    return out


def _fill(entry, lines):
    for line in lines:
        entry.append_line(line)
    return entry


def test_entry_round_trip():
    lines = [";= section\n", "some text\n", "x\n"]
    entry = LgEntry()
    for line in lines:
        entry.append_line(line)
    assert _written(entry) == lines


def test_entry_trims_trailing_whitespace():
    entry = LgEntry()
    entry.append_line("foo   \n")
    assert entry.lines == ["foo\n"]


def test_entry_short_lines_untouched():
    entry = LgEntry()
    entry.append_line(" \n")
    entry.append_line("\n")
    assert entry.lines == [" \n", "\n"]


def test_named_entry_parses_name():
    entry = NamedEntry()
    entry.append_line("* PATCH : Lead Tone  \n")
    assert entry.name == "Lead Tone"


def test_named_entry_rename_round_trip():
    entry = _fill(NamedEntry(), ["* PATCH : Lead\n", "other\n"])
    entry.rename("Clean")
    assert entry.name == "Clean"
    assert parse_entry_name(entry.lines[0]) == "Clean"
    assert entry.lines[1] == "other\n"


def test_bank_list_drops_comments_and_blanks():
    bank_list = BankList()
    for line in ["* BANKLIST : Main\n", "Bank A\n", ";comment\n", "\n", "Bank B\n"]:
        bank_list.append_line(line)
    out = []
    bank_list.write_lines(out.append)
    assert out == [
        "* BANKLIST : Main\n",
        "Bank A\n",
        "Bank B\n",
        BANK_LIST_SEP,
    ]


def test_bank_list_append_bank_and_repeat_write():
    bank_list = BankList()
    bank_list.append_line("* BANKLIST : Main\n")
    bank_list.append_bank("Bank:5")
    first = []
    bank_list.write_lines(first.append)
    assert "Bank:5\n" in first
    second = []
    bank_list.write_lines(second.append)
    assert second == first


def test_bank_write_with_default_and_derived():
    bank = Bank()
    for line in ["* BANK : Rock\n", "DEFAULTPRESET Clean\n", "switch 1 : PA Clean\n"]:
        bank.append_line(line)
    assert bank.default_preset == "Clean"
    bank.set_inherited_from("Base")
    out = []
    bank.write_lines(out.append)
    assert out == [
        "* BANK : Rock\n",
        "DERIVED FROM Base\n",
        "DEFAULTPRESET Clean\n",
        "switch 1 : PA Clean\n",
        BANK_SEP,
    ]


def test_bank_no_separator_after_comment():
    bank = Bank()
    for line in ["* BANK : Rock\n", "switch 1 : PA Clean\n", ";end\n"]:
        bank.append_line(line)
    out = []
    bank.write_lines(out.append)
    assert out[-1] == ";end\n"


def test_bank_patch_names_and_rename():
    bank = _fill(
        Bank(),
        [
            "* BANK : Rock\n",
            "DEFAULTPRESET Clean\n",
            "switch 1 : PA Lead\n",
            "other stuff\n",
            "switch 2 : PA Clean\n",
        ],
    )
    assert bank.patch_names() == ["Lead", "Clean"]
    bank.on_patch_name_change("Clean", "Crunch")
    assert bank.patch_names() == ["Lead", "Crunch"]
    assert "DEFAULTPRESET Crunch\n" in _written(bank)


def test_bank_remove_non_patch_entries():
    bank = _fill(
        Bank(),
        ["* BANK : Rock\n", "other\n", "switch 1 : PA Lead\n", "more\n"],
    )
    bank.remove_non_patch_entries()
    assert bank.lines == ["* BANK : Rock\n", "switch 1 : PA Lead\n"]


def test_bank_attach_bank_list():
    bank = _fill(Bank(), ["* BANK : Rock\n"])
    first = BankList()
    bank.attach_bank_list(first)
    bank.attach_bank_list(first)
    assert bank.bank_list is first
    with pytest.raises(ValueError):
        bank.attach_bank_list(BankList())


def test_bank_clone_is_independent_but_shares_list():
    bank = _fill(Bank(), ["* BANK : Rock\n", "switch 1 : PA Lead\n"])
    bank_list = BankList()
    bank.attach_bank_list(bank_list)
    other = bank.clone()
    other.rename("Copy")
    other.remove_non_patch_entries()
    other.lines.append("switch 2 : PA Extra\n")
    assert bank.name == "Rock"
    assert bank.patch_names() == ["Lead"]
    assert other.bank_list is bank_list


def test_patch_parses_cc_and_pc():
    patch = _fill(
        Patch(),
        ["* PATCH : Lead\n", "+ 02 CC    000 000\n", "+ 02 PC    005\n"],
    )
    assert patch.channel == 2
    assert patch.preset == 5
    assert (patch.cc_index, patch.pc_index) == (1, 2)


@given(st.integers(min_value=0, max_value=0x3FFF))
def test_patch_set_preset_round_trip(number):
    patch = _fill(Patch(), ["* PATCH : Lead\n"])
    patch.set_preset(number)
    assert patch.preset == number
    reparsed = _fill(Patch(), patch.lines)
    assert reparsed.preset == number
    patch.set_preset(number)
    assert len(patch.lines) == 3


def test_patch_set_preset_line_format():
    patch = _fill(Patch(), ["* PATCH : Lead\n"])
    patch.set_preset(130)
    assert patch.lines[1] == "+ 01 CC    000 001\n"
    assert parse_program_change(patch.lines[2]) == (1, 2)


def test_patch_set_preset_inserts_cc_before_pc():
    patch = _fill(Patch(), ["* PATCH : Lead\n", "+ 01 PC    005\n"])
    patch.set_preset(200)
    assert parse_cc(patch.lines[1]) is not None
    assert parse_program_change(patch.lines[2]) is not None
    assert _fill(Patch(), patch.lines).preset == 200


def test_patch_set_preset_without_lines():
    with pytest.raises(ValueError):
        Patch().set_preset(3)


def test_patch_rename_empty_creates_header():
    patch = Patch()
    patch.rename("Fresh")
    assert patch.name == "Fresh"
    assert is_patch_start(patch.lines[0])
    assert parse_entry_name(patch.lines[0]) == "Fresh"


def test_patch_rename_updates_bank():
    bank = _fill(Bank(), ["* BANK : Rock\n", "switch 1 : PA Clean\n"])
    patch = _fill(Patch(), ["* PATCH : Clean\n"])
    patch.bank = bank
    patch.rename("Lead")
    assert bank.patch_names() == ["Lead"]
    assert parse_entry_name(patch.lines[0]) == "Lead"


def test_patch_update_from_preset():
    long_name = "a very long preset name"
    patch = Patch()
    patch.update(_Preset(long_name, 300))
    assert patch.name == check_name_size_limit(long_name)
    assert patch.preset == 300
    patch.update(_Preset("Short", 300))
    assert patch.name == "Short"
    assert len(patch.lines) == 3
    patch.update(_Preset("Short", 7))
    assert _fill(Patch(), patch.lines).preset == 7