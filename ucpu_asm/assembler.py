"""
uCPU Two-Pass Assembler.

Assembles uCPU source text into a 256-word memory image and a listing.

How the two passes work:
  Pass 1: Scan every line, check syntax and record each label at the
          current PC. A later declaration of the same label overwrites an
          earlier one. Forward references are legal and encode as 0 for now.
  Pass 2: Runs only if pass 1 found no syntax errors. Rescan from the top
          with the PC back at 0 and the symbol table untouched. Every label
          reference now resolves to its final address; a declaration whose
          PC differs from the stored address was superseded and gets a
          warning, and a reference to a label never declared is an error
          that encodes as 0.

Only pass 2's image and listing are kept. All run state (symbol table,
image, PC, counters) lives in one AssemblySession passed to each pass.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .diagnostics import AssemblerError, Diagnostics
from .image import ADDRESS_MASK, MemoryImage
from .listing import (
    Listing, ListingLine, format_duplicate_label, format_syntax_error,
    format_undefined_label,
)
from .operands import resolve_operand
from .parser import LineKind, ParsedLine, parse_line
from .symbols import SymbolTable

__all__ = ['Pass', 'AssemblySession', 'AssemblyResult', 'Assembler',
           'split_source', 'run_pass', 'assemble']

log = logging.getLogger(__name__)


class Pass(enum.IntEnum):
    FIRST = 1
    SECOND = 2


@dataclass
class AssemblySession:
    """Mutable state of one assembly run, shared by both passes."""
    symbols: SymbolTable = field(default_factory=SymbolTable)
    image: MemoryImage = field(default_factory=MemoryImage)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    pc: int = 0


@dataclass
class AssemblyResult:
    listing: str
    image: Optional[MemoryImage]
    diagnostics: Diagnostics
    symbols: SymbolTable
    passes: int

    @property
    def ok(self) -> bool:
        """True when an image was produced (no syntax errors)."""
        return self.image is not None


def split_source(source: str) -> List[str]:
    """Split source text into lines; a final line terminator adds no line."""
    lines = source.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


def run_pass(session: AssemblySession, lines: Sequence[str], pass_num: Pass,
             source_name: str = "<source>") -> Listing:
    """Scan all ``lines`` once and return this pass's listing."""
    session.pc = 0
    session.image.clear()
    listing = Listing(source_name, int(pass_num))

    for line_num, raw in enumerate(lines, 1):
        _assemble_line(session, parse_line(raw, line_num), pass_num, listing)

    return listing


def _assemble_line(session: AssemblySession, parsed: ParsedLine,
                   pass_num: Pass, listing: Listing):
    """Apply one parsed line to the session and append its listing output."""
    diags = session.diagnostics

    if parsed.kind is LineKind.SYNTAX_ERROR:
        err = parsed.error
        diags.syntax_error(parsed.line_num, err.message)
        listing.add(format_syntax_error(err))
        log.debug("pass %d: %s", pass_num, err)
        return

    # ── Label declaration ──
    if parsed.label is not None:
        if pass_num is Pass.FIRST:
            session.symbols.declare(parsed.label, session.pc)
        elif session.symbols.is_superseded(parsed.label, session.pc):
            diags.warning(parsed.line_num,
                          f"multiple definitions of label ${parsed.label}")
            listing.add(format_duplicate_label(parsed.label))

    # ── Operand ──
    instr = parsed.instruction
    value = 0
    if parsed.operand is not None:
        resolved = resolve_operand(parsed.operand, session.symbols)
        if resolved is None:
            # Forward references are expected in pass 1
            if pass_num is Pass.SECOND:
                diags.semantic_error(parsed.line_num,
                                     f"label ${parsed.operand.value} is not defined")
                listing.add(format_undefined_label(parsed.operand.value))
            resolved = 0
        value = resolved

    # ── Encode ──
    word = None
    if parsed.kind is LineKind.DIRECTIVE:
        if parsed.operand is not None:
            session.pc = value & ADDRESS_MASK
    elif parsed.kind is LineKind.INSTRUCTION:
        word = (instr.opcode << 8) | value
        session.image.store(session.pc, word)

    out = ListingLine().address(parsed.line_num, session.pc)
    if word is not None:
        out.word(word)
    if parsed.label is not None:
        out.label(parsed.label)
    if instr is not None:
        out.mnemonic(instr.mnemonic)
        out.operand(parsed.operand, value, instr.operand_class)
    if parsed.comment is not None:
        out.comment(parsed.comment)
    listing.add(out.render())

    if word is not None:
        session.pc = (session.pc + 1) & ADDRESS_MASK


def assemble(source: str, source_name: str = "<source>") -> AssemblyResult:
    """Assemble source text. Pass 2 runs only if pass 1 is free of syntax errors."""
    lines = split_source(source)
    session = AssemblySession()

    log.debug("pass 1: %d line(s) from %s", len(lines), source_name)
    listing = run_pass(session, lines, Pass.FIRST, source_name)
    diags = session.diagnostics

    if diags.blocks_output:
        log.info("pass 1 found %d syntax error(s), pass 2 skipped",
                 diags.syntax_errors)
        return AssemblyResult(listing.text(), None, diags, session.symbols, 1)

    log.debug("pass 2: %d label(s) defined", len(session.symbols))
    listing = run_pass(session, lines, Pass.SECOND, source_name)
    log.info("assembled %s: %d warning(s), %d error(s)",
             source_name, diags.warnings, diags.semantic_errors)
    return AssemblyResult(listing.text(), session.image, diags, session.symbols, 2)


class Assembler:
    """Two-pass uCPU assembler.

    Usage:
        asm = Assembler("prog.uca")
        result = asm.assemble(source_text)
        hex_text = asm.to_hex()
    """

    def __init__(self, source_name: str = "<source>"):
        self.source_name = source_name
        self.result: Optional[AssemblyResult] = None

    def assemble(self, source: str) -> AssemblyResult:
        self.result = assemble(source, self.source_name)
        return self.result

    @property
    def diagnostics(self) -> Diagnostics:
        return self._require_result().diagnostics

    def get_listing(self) -> str:
        return self._require_result().listing

    def to_hex(self) -> str:
        """Return the hex dump. Raises AssemblerError after syntax errors."""
        result = self._require_result()
        if result.image is None:
            raise AssemblerError(result.diagnostics.summary())
        return result.image.to_hex()

    def _require_result(self) -> AssemblyResult:
        if self.result is None:
            raise AssemblerError("nothing assembled yet")
        return self.result
