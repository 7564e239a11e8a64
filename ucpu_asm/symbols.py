"""
Label symbol table.

Dense table of label ids 0-9999. An entry is None until a declaration is
seen. The table is built during pass 1 (last declaration wins) and only
read during pass 2, where a declaration whose address differs from the
stored one is a superseded duplicate.
"""

from __future__ import annotations
from typing import List, Optional

__all__ = ['LABEL_COUNT', 'SymbolTable']

LABEL_COUNT = 10000


class SymbolTable:
    """Label id -> address, or None when undefined."""

    def __init__(self):
        self._addresses: List[Optional[int]] = [None] * LABEL_COUNT

    def declare(self, label_id: int, address: int):
        """Record a declaration, overwriting any earlier one."""
        self._check_id(label_id)
        self._addresses[label_id] = address

    def lookup(self, label_id: int) -> Optional[int]:
        self._check_id(label_id)
        return self._addresses[label_id]

    def is_superseded(self, label_id: int, address: int) -> bool:
        """True if a declaration at ``address`` is not the one stored.

        Only meaningful after pass 1 has recorded every declaration.
        """
        return self.lookup(label_id) != address

    def __len__(self) -> int:
        return sum(1 for a in self._addresses if a is not None)

    @staticmethod
    def _check_id(label_id: int):
        if not 0 <= label_id < LABEL_COUNT:
            raise ValueError(f"label id out of range: {label_id}")
