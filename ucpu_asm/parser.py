"""
Line parser for uCPU assembly.

Each source line is classified by a small state machine:

    LABEL ──> MNEMONIC ──> OPERAND ──> COMMENT

  LABEL:    a '$nnnn' token declares a label; any other token is handed
            to MNEMONIC unconsumed.
  MNEMONIC: the token must name a catalog entry.
  OPERAND:  the token is classified for the mnemonic's operand class.
  COMMENT:  nothing may follow the operand except the comment.

Lines are independent: no state is carried from one line to the next.
The parser is purely syntactic. Label addresses, the PC and the memory
image belong to the driver (assembler.py).
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Optional

from .diagnostics import LineSyntaxError, SyntaxErrorKind
from .lexer import strip_eol, tokenize_line
from .operands import LABEL_MARKER, Operand, classify_operand, parse_label_id
from .tables import InstructionDef, lookup_mnemonic

__all__ = ['ParserState', 'LineKind', 'ParsedLine', 'parse_line']


class ParserState(enum.Enum):
    LABEL = "label"
    MNEMONIC = "mnemonic"
    OPERAND = "operand"
    COMMENT = "comment"


class LineKind(enum.Enum):
    EMPTY = "empty"                 # blank, label-only or comment-only
    INSTRUCTION = "instruction"     # writes one word
    DIRECTIVE = "directive"         # moves the PC, writes nothing
    SYNTAX_ERROR = "syntax_error"


@dataclass
class ParsedLine:
    """Tagged result of parsing one source line."""
    line_num: int
    text: str
    kind: LineKind = LineKind.EMPTY
    label: Optional[int] = None
    instruction: Optional[InstructionDef] = None
    operand: Optional[Operand] = None
    comment: Optional[str] = None
    error: Optional[LineSyntaxError] = None


def _step(state: ParserState, token: str, result: ParsedLine) -> ParserState:
    """Consume one token and return the next state."""
    if state is ParserState.LABEL:
        if token.startswith(LABEL_MARKER):
            label_id = parse_label_id(token[1:])
            if label_id is None:
                raise LineSyntaxError(SyntaxErrorKind.INCORRECT_LABEL, token)
            result.label = label_id
            return ParserState.MNEMONIC
        # No label on this line: the same token is the mnemonic.
        state = ParserState.MNEMONIC

    if state is ParserState.MNEMONIC:
        instr = lookup_mnemonic(token)
        if instr is None:
            raise LineSyntaxError(SyntaxErrorKind.UNKNOWN_MNEMONIC, token)
        result.instruction = instr
        return ParserState.OPERAND

    if state is ParserState.OPERAND:
        result.operand = classify_operand(token, result.instruction)
        return ParserState.COMMENT

    raise LineSyntaxError(SyntaxErrorKind.TRAILING_GARBAGE, token)


def parse_line(line: str, line_num: int) -> ParsedLine:
    """Parse one raw source line (1-based ``line_num``)."""
    lexed = tokenize_line(line)
    result = ParsedLine(line_num=line_num, text=strip_eol(line), comment=lexed.comment)

    state = ParserState.LABEL
    try:
        for token in lexed.tokens:
            state = _step(state, token, result)
    except LineSyntaxError as e:
        result.kind = LineKind.SYNTAX_ERROR
        result.error = LineSyntaxError(e.kind, e.token, line_num, result.text)
        return result

    if result.instruction is not None:
        if result.instruction.is_directive:
            result.kind = LineKind.DIRECTIVE
        else:
            result.kind = LineKind.INSTRUCTION
    return result
