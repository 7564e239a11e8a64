"""
Listing formatter.

One listing line per source line, with fields at fixed columns:

    col  0  line number and PC      "  12:   0A"
    col 12  instruction word        "D05"
    col 24  declared label          "$1"
    col 32  mnemonic                "LDI"
    col 40  operand                 "$1", "%1F" or " 05"
    col 48  comment                 "; verbatim text"

Lines whose parse failed are replaced by a single syntax-error line.
Warnings and semantic errors are written as separate lines just before
the listing line of the source line that caused them.
"""

from __future__ import annotations
from typing import List, Optional

from .diagnostics import LineSyntaxError
from .operands import LABEL_MARKER, REGISTER_MARKER, Operand, OperandKind
from .tables import OperandClass

__all__ = [
    'COLUMNS', 'PASS_NAMES', 'ListingLine', 'Listing', 'listing_header',
    'format_syntax_error', 'format_duplicate_label', 'format_undefined_label',
]

COLUMNS = {
    'address': 0,
    'word': 12,
    'label': 24,
    'mnemonic': 32,
    'operand': 40,
    'comment': 48,
}

PASS_NAMES = {1: "First", 2: "Second"}


class ListingLine:
    """Builder for one listing line. Use a fresh instance per source line."""

    def __init__(self):
        self._text = ""

    def _put(self, column: str, text: str) -> 'ListingLine':
        col = COLUMNS[column]
        head = self._text[:col].ljust(col)
        self._text = head + text + self._text[col + len(text):]
        return self

    def address(self, line_num: int, pc: int) -> 'ListingLine':
        return self._put('address', f"{line_num:4d}:   {pc:02X}")

    def word(self, word: int) -> 'ListingLine':
        return self._put('word', f"{word:03X}")

    def label(self, label_id: int) -> 'ListingLine':
        return self._put('label', f"{LABEL_MARKER}{label_id}")

    def mnemonic(self, name: str) -> 'ListingLine':
        return self._put('mnemonic', name)

    def operand(self, operand: Optional[Operand], value: int,
                operand_class: OperandClass) -> 'ListingLine':
        if operand is not None and operand.kind is OperandKind.LABEL_REF:
            text = f"{LABEL_MARKER}{operand.value}"
        elif operand_class is OperandClass.REGISTER:
            text = f"{REGISTER_MARKER}{value:02X}"
        else:
            text = f"{value:02X}".rjust(3)
        return self._put('operand', text)

    def comment(self, text: str) -> 'ListingLine':
        return self._put('comment', text)

    def render(self) -> str:
        return self._text + "\n"


def listing_header(source_name: str, pass_num: int) -> str:
    return (f" ---- Source file: {source_name}. {PASS_NAMES[pass_num]} pass "
            f"assembler listing. ----\n\n")


def format_syntax_error(err: LineSyntaxError) -> str:
    return (f'{err.line_num:4d}: Syntax error: {err.kind.value} "{err.token}". '
            f'The source line is ignored: {err.line_text}\n')


def format_duplicate_label(label_id: int) -> str:
    return (f'Warning: multiple definitions of label "{LABEL_MARKER}{label_id}", '
            f'the last definition wins.\n')


def format_undefined_label(label_id: int) -> str:
    return (f'Error: label "{LABEL_MARKER}{label_id}" is not defined. '
            f'Operand set to 00.\n')


class Listing:
    """The listing of one pass: header plus rendered lines."""

    def __init__(self, source_name: str, pass_num: int):
        self.source_name = source_name
        self.pass_num = pass_num
        self.lines: List[str] = []

    def add(self, text: str):
        self.lines.append(text)

    def text(self) -> str:
        return listing_header(self.source_name, self.pass_num) + "".join(self.lines)
