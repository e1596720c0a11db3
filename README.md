# afx2lg

Building blocks for LittleGiant MIDI foot controller setup files and for
the MIDI messages used with an Axe-Fx II.

A setup file exported as text from LG Control Center is made of entries:
bank lists, banks and patches. This package reads those entries line by
line, renames patches and banks, points patches at presets by writing their
bank-select CC and program change lines, and writes the entries back out.

## What is in the package

- `afx2lg.lg_utils`: helpers for the lines of a setup file.
  `is_entry_start`, `is_patch_start`, `is_bank_start`, `is_bank_list_start`,
  `is_comment` and `is_section_separator` classify lines. `parse_cc` and
  `parse_program_change` read `+ 01 CC ...` and `+ 01 PC ...` lines into
  tuples. `parse_entry_name`, `replace_entry_name`, `replace_if_match`,
  `extract_substring` and `is_default_preset` read and rewrite names.
  `generate_unique_name` and `check_name_size_limit` keep names within the
  16-character limit (`MAX_NAME_LENGTH`).
- `afx2lg.lg_entry`: the entries of a setup file.
  - `LgEntry` keeps a block of lines verbatim (`append_line`, `write_lines`,
    `clone`).
  - `NamedEntry` takes its `name` from the first line and can `rename` it.
  - `BankList` holds bank names (`append_bank`) and drops blank and comment
    lines.
  - `Bank` tracks its switches: `patch_names()`, `on_patch_name_change`,
    `remove_non_patch_entries`, `set_inherited_from`, `attach_bank_list`,
    and writes `DERIVED FROM` and `DEFAULTPRESET` lines.
  - `Patch` records its MIDI channel, bank select and program. Its `preset`
    property is `program | bank_id << 7`. `set_preset(number)` rewrites or
    adds its CC and PC lines. `update(preset)` takes the `name` and `id` of
    any object that has them.
  - `write_lines` takes any callable that accepts a string, such as
    `sys.stdout.write` or `list.append`.
- `afx2lg.cli`: command line pieces. `parse_args(argv)` reads
  `-s=<file.syx>`, `-r=<range>` and `-t=<template.txt>` into an `Arguments`
  object. It prompts on standard input for a missing template or SysEx file,
  and raises `UsageError` for malformed arguments. `IDRange` and
  `SysExFileParam` hold preset ranges such as `0-12,30,45,20-25,100`.
  `prompt_user` reads one answer and returns `None` on Esc. `usage()` returns
  the help text.
- `afx2lg.midi`: MIDI message helpers.
  - `Message` is a `bytearray` with `is_sysex()` and `find(value)`.
  - `program_change(channel, bank_id, program)` builds a bank-select CC
    followed by a program change. The channel is 0-based.
  - `SysExDataBuffer` joins chunks of incoming bytes, passed to `on_data`,
    into whole SysEx messages and hands each one to a callback.
  - `MessageBufferOwner` holds a message being sent and calls its completion
    callback once.
  - `MidiDeviceInfo` and `DeviceInfos` describe devices.
    `DeviceInfos.find_axe_fx()` finds the first device whose name contains
    `AXE`.
- `afx2lg.huffman`: a small Huffman coder with `compress(data)` and
  `uncompress(data, size)`.

## Examples

Generate unique patch names that stay within the name length limit:

```python
from afx2lg.lg_utils import generate_unique_name

taken = {"MyName"}
generate_unique_name(taken, "MyName")            # "MyName1"

taken.add("myreallylongname")
generate_unique_name(taken, "myreallylongname")  # "myreallylongnam1"
```

Build a patch and point it at preset 130:

```python
from afx2lg.lg_entry import Patch

patch = Patch()
patch.append_line("* PATCH : Lead\n")
patch.set_preset(130)
patch.lines  # ['* PATCH : Lead\n', '+ 01 CC    000 001\n', '+ 01 PC    002\n']
```

Build the messages that select preset 130 on MIDI channel 1:

```python
from afx2lg.midi import program_change

message = program_change(0, 1, 2)  # bytes B0 00 01 C0 02
```

Collect SysEx messages from a stream of bytes:

```python
from afx2lg.midi import SysExDataBuffer

received = []
buffer = SysExDataBuffer(received.append)
buffer.on_data(b"\xf0\x00\x01")
buffer.on_data(b"\x74\xf7")
received  # [Message(b'\xf0\x00\x01t\xf7')]
```

Compress a buffer and restore it:

```python
from afx2lg.huffman import compress, uncompress

data = b"abracadabra"
packed = compress(data)
assert uncompress(packed, len(data)) == data
```

## What the package does not do

- It has no command to run. `parse_args` reads the options, but nothing here
  reads a whole template, fills it with presets and writes the new setup
  file. The entry classes are the pieces such a step would use.
- It does not read `.syx` preset or bank files. Anything passed to
  `Patch.update` must already carry a `name` and an `id`.
- It does not open MIDI ports or list the devices on a system.
  `MidiDeviceInfo` and `DeviceInfos` only describe devices that the caller
  supplies.