"""
Operand classification and resolution.

classify_operand() checks an operand token against the operand class the
mnemonic requires and turns it into an Operand. It is purely syntactic and
raises LineSyntaxError on any mismatch.

resolve_operand() turns an Operand into its 8-bit value. Only label
references can fail to resolve (forward or undefined label); those return
None and the caller decides whether that is an error for the current pass.
"""

from __future__ import annotations
import enum
import re
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .diagnostics import LineSyntaxError, SyntaxErrorKind
from .tables import InstructionDef, OperandClass, lookup_indexed

if TYPE_CHECKING:
    from .symbols import SymbolTable

__all__ = [
    'LABEL_MARKER', 'REGISTER_MARKER', 'OperandKind', 'Operand',
    'parse_label_id', 'parse_hex_byte', 'classify_operand', 'resolve_operand',
]

LABEL_MARKER = '$'
REGISTER_MARKER = '%'

_LABEL_ID_RE = re.compile(r'[0-9]{1,4}')
_HEX_BYTE_RE = re.compile(r'[0-9A-F]{1,2}', re.IGNORECASE)


class OperandKind(enum.Enum):
    LABEL_REF = "label"
    REGISTER = "register"
    INDEXED = "indexed"
    IMMEDIATE = "immediate"


@dataclass(frozen=True)
class Operand:
    """A classified operand. ``value`` is the label id for LABEL_REF,
    otherwise the encoded byte."""
    kind: OperandKind
    value: int
    text: str


def parse_label_id(text: str) -> Optional[int]:
    """Parse the digits after '$': 1-4 decimal digits, 0-9999."""
    if _LABEL_ID_RE.fullmatch(text):
        return int(text, 10)
    return None


def parse_hex_byte(text: str) -> Optional[int]:
    """Parse a bare hex literal of one or two digits, 00-FF."""
    if _HEX_BYTE_RE.fullmatch(text):
        return int(text, 16)
    return None


def classify_operand(token: str, instr: InstructionDef) -> Operand:
    """Classify ``token`` for ``instr``. Raises LineSyntaxError."""
    required = instr.operand_class

    # Label reference: $nnnn
    if token.startswith(LABEL_MARKER):
        if required is not OperandClass.LABEL:
            raise LineSyntaxError(SyntaxErrorKind.LABEL_NOT_ALLOWED, token)
        label_id = parse_label_id(token[1:])
        if label_id is None:
            raise LineSyntaxError(SyntaxErrorKind.INCORRECT_LABEL_OPERAND, token)
        return Operand(OperandKind.LABEL_REF, label_id, token)

    if required is OperandClass.LABEL:
        raise LineSyntaxError(SyntaxErrorKind.LABEL_REQUIRED, token)

    # Indexed spellings are matched exactly, before the '%' prefix rule
    indexed = lookup_indexed(token)
    if indexed is not None:
        if required is not OperandClass.REGISTER:
            raise LineSyntaxError(SyntaxErrorKind.INDEXED_NOT_ALLOWED, token)
        return Operand(OperandKind.INDEXED, indexed, token)

    if token.startswith(REGISTER_MARKER):
        if required is not OperandClass.REGISTER:
            raise LineSyntaxError(SyntaxErrorKind.REGISTER_NOT_ALLOWED, token)
        value = parse_hex_byte(token[1:])
        kind = OperandKind.REGISTER
    else:
        if required is OperandClass.REGISTER:
            raise LineSyntaxError(SyntaxErrorKind.REGISTER_REQUIRED, token)
        value = parse_hex_byte(token)
        kind = OperandKind.IMMEDIATE

    if value is None:
        raise LineSyntaxError(SyntaxErrorKind.INCORRECT_OPERAND, token)
    return Operand(kind, value, token)


def resolve_operand(operand: Operand, symbols: SymbolTable) -> Optional[int]:
    """Return the 8-bit operand value, or None for an unresolved label."""
    if operand.kind is OperandKind.LABEL_REF:
        return symbols.lookup(operand.value)
    return operand.value
