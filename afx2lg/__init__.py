"""Setup file entries for LittleGiant controllers, MIDI message helpers and a Huffman coder."""

__version__ = "0.1.0"

__all__ = ["cli", "huffman", "lg_entry", "lg_utils", "midi"]