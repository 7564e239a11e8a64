"""
uCPU memory image and hex dump writer.

The image is 256 words of 12 bits, all zero until written. The hex dump is
16 rows of 16 fields; each field is a space and three hex digits.
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterator, List, Union

__all__ = ['MEMORY_SIZE', 'WORD_MASK', 'ADDRESS_MASK', 'MemoryImage']

MEMORY_SIZE = 256
WORD_MASK = 0xFFF
ADDRESS_MASK = 0xFF
ROW_WIDTH = 16


class MemoryImage:

    def __init__(self):
        self.words: List[int] = [0] * MEMORY_SIZE

    def clear(self):
        self.words = [0] * MEMORY_SIZE

    def store(self, address: int, word: int):
        if not 0 <= address < MEMORY_SIZE:
            raise ValueError(f"address out of range: {address}")
        self.words[address] = word & WORD_MASK

    def __getitem__(self, address: int) -> int:
        return self.words[address]

    def __len__(self) -> int:
        return MEMORY_SIZE

    def __iter__(self) -> Iterator[int]:
        return iter(self.words)

    def rows(self) -> Iterator[List[int]]:
        for base in range(0, MEMORY_SIZE, ROW_WIDTH):
            yield self.words[base:base + ROW_WIDTH]

    def to_hex(self) -> str:
        """Render the 16x16 hex dump."""
        return "".join(
            "".join(f" {w:03X}" for w in row) + "\n" for row in self.rows()
        )

    def write(self, path: Union[str, Path]):
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_hex())
