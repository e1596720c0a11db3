"""MIDI messages, device lists and reassembly of SysEx messages from a byte stream."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

SYSEX_START = 0xF0
SYSEX_END = 0xF7

_CONTROL_CHANGE = 0xB0
_PROGRAM_CHANGE = 0xC0


@dataclass(frozen=True)
class MidiDeviceInfo:
    """A MIDI device as reported by the system: its index and its name."""

    id: int
    name: str


class DeviceInfos(list):
    """A list of MidiDeviceInfo objects."""

    def find_axe_fx(self) -> MidiDeviceInfo | None:
        """Return the first device whose name contains ``AXE``, or None."""
        return next((device for device in self if "AXE" in device.name), None)


class Message(bytearray):
    """The bytes of one MIDI message."""

    def is_sysex(self) -> bool:
        """True when the message starts with a SysEx start byte."""
        return bool(self) and self[0] == SYSEX_START

    def find(self, value: int) -> int:  # type: ignore[override]
        """Return the index of the first byte equal to ``value``, or -1."""
        return super().find(bytes([value]))


def program_change(channel: int, bank_id: int, program: int) -> Message:
    """Build a bank-select CC followed by a program change.

    ``channel`` is zero based, so 0 means MIDI channel 1.
    """
    if not 0 <= channel < 16:
        raise ValueError(f"channel {channel} is out of range 0-15")
    if not 0 <= bank_id < 0x80:
        raise ValueError(f"bank id {bank_id} is out of range 0-127")
    if not 0 <= program < 0x80:
        raise ValueError(f"program {program} is out of range 0-127")
    return Message(
        [_CONTROL_CHANGE | channel, 0, bank_id, _PROGRAM_CHANGE | channel, program]
    )


class SysExDataBuffer:
    """Collects incoming bytes and hands whole SysEx messages to a callback.

    Data that ends a message without having started one is dropped, keeping
    only what follows a later SysEx start byte in the same message.
    """

    def __init__(self, on_sysex: Callable[[Message], Any]) -> None:
        self._on_sysex = on_sysex
        self._buffer = Message()

    def on_data(self, data: Iterable[int]) -> None:
        """Feed a chunk of received bytes."""
        data = bytes(data)
        begin = 0
        for index, byte in enumerate(data):
            if byte != SYSEX_END:
                continue
            self._buffer.extend(data[begin : index + 1])
            if self._buffer[0] != SYSEX_START:
                start = self._buffer.find(SYSEX_START)
                if start == -1:
                    self._buffer.clear()
                else:
                    del self._buffer[:start]
            if self._buffer:
                message, self._buffer = self._buffer, Message()
                self._on_sysex(message)
            else:
                self._buffer = Message()
            begin = index + 1
        if begin < len(data):
            self._buffer.extend(data[begin:])


class MessageBufferOwner:
    """Holds a message while it is being sent and reports when it is done."""

    def __init__(
        self, message: Message, on_complete: Callable[[], Any] | None = None
    ) -> None:
        self.message = message
        self._on_complete = on_complete

    def cancel_callback(self) -> None:
        """Make sure the completion callback is never called."""
        self._on_complete = None

    def complete(self) -> None:
        """Release the message and call the completion callback once."""
        callback, self._on_complete = self._on_complete, None
        self.message = Message()
        if callback is not None:
            callback()