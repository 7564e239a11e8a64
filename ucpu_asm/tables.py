"""
Instruction and addressing tables for the uCPU assembler.

uCPU words are 12 bits wide: a 4-bit opcode in the high nibble and an
8-bit operand in the low byte. Every instruction takes exactly one operand,
and the operand class fixed by the mnemonic decides which spellings are
accepted:

  REG  — Register        e.g. LDA %1F, STA @IX+
  IMM  — Immediate       e.g. LDI 05, ORG 10
  LAB  — Label reference e.g. JMP $12

Register operands may also use one of the eight indexed-addressing
spellings, which encode to the reserved bytes $F8-$FF.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Dict, Optional

__all__ = [
    'OperandClass', 'InstructionDef', 'INSTRUCTIONS', 'INDEXED_MODES',
    'ORG', 'lookup_mnemonic', 'lookup_indexed',
]


class OperandClass(enum.Enum):
    REGISTER = "REG"
    IMMEDIATE = "IMM"
    LABEL = "LAB"


REG = OperandClass.REGISTER
IMM = OperandClass.IMMEDIATE
LAB = OperandClass.LABEL


@dataclass(frozen=True)
class InstructionDef:
    """One catalog entry. ``opcode`` is None for the origin directive."""
    mnemonic: str
    opcode: Optional[int]
    operand_class: OperandClass

    @property
    def is_directive(self) -> bool:
        return self.opcode is None


# ──────────────────────────────────────────────
# uCPU Opcode Table
# ──────────────────────────────────────────────

INSTRUCTIONS: Dict[str, InstructionDef] = {}

def _op(mnemonic: str, opcode: Optional[int], operand_class: OperandClass):
    """Register a catalog entry."""
    if mnemonic in INSTRUCTIONS:
        raise ValueError(f"duplicate mnemonic {mnemonic}")
    INSTRUCTIONS[mnemonic] = InstructionDef(mnemonic, opcode, operand_class)

# ── Logic / arithmetic: register form and immediate form ──
_op('ANA', 0x0, REG)
_op('ANI', 0x1, IMM)
_op('XRA', 0x2, REG)
_op('XRI', 0x3, IMM)
_op('ADA', 0x4, REG)
_op('ADI', 0x5, IMM)
_op('SBA', 0x6, REG)
_op('SBI', 0x7, IMM)

# ── Control transfer ──
_op('BNC', 0x8, LAB)
_op('BNZ', 0x9, LAB)
_op('JPR', 0xA, REG)
_op('JMP', 0xB, LAB)

# ── Data movement ──
_op('LDA', 0xC, REG)
_op('LDI', 0xD, IMM)
_op('STA', 0xE, REG)
_op('STX', 0xF, REG)

# ── Directives ──
_op('ORG', None, IMM)

ORG = INSTRUCTIONS['ORG']


# ──────────────────────────────────────────────
# Indexed addressing spellings
# ──────────────────────────────────────────────
# Bare index register, indirect, post-increment and pre-decrement,
# for each of the two index registers IX and IY.

INDEXED_MODES: Dict[str, int] = {
    '%IX':  0xF8,
    '%IY':  0xF9,
    '@IX':  0xFA,
    '@IY':  0xFB,
    '@IX+': 0xFC,
    '@IY+': 0xFD,
    '@-IX': 0xFE,
    '@-IY': 0xFF,
}


def lookup_mnemonic(token: str) -> Optional[InstructionDef]:
    """Return the catalog entry named by the first three characters of
    ``token`` (any case), or None. Trailing characters are ignored."""
    return INSTRUCTIONS.get(token[:3].upper())


def lookup_indexed(token: str) -> Optional[int]:
    """Return the encoded byte of an indexed-addressing spelling, or None."""
    return INDEXED_MODES.get(token.upper())
