"""
uCPU Assembler
==============
A two-pass assembler for uCPU, a minimal 8-bit-addressed CPU with sixteen
instructions and 12-bit instruction words.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌───────────┐
    │ Source   │───>│  Lexer   │───>│  Parser  │───>│ Operands │───>│ Assembler │
    │ (.uca)   │    │ (tokens) │    │ (line)   │    │ (value)  │    │ (2 pass)  │
    └──────────┘    └──────────┘    └──────────┘    └──────────┘    └───────────┘
                                                                     │        │
                                                             listing.py   image.py
                                                               (.lst)      (.hex)

    - tables.py:      Mnemonic / opcode / operand-class catalog, indexed modes
    - lexer.py:       Upper-cases and splits one line, keeps the comment
    - parser.py:      LABEL -> MNEMONIC -> OPERAND -> COMMENT state machine
    - operands.py:    Operand class checks and label/hex resolution
    - symbols.py:     Label id -> address table shared by both passes
    - assembler.py:   Two-pass driver owning the session state
    - listing.py:     Fixed-column listing lines and diagnostic lines
    - image.py:       256-word memory image and 16x16 hex dump
    - diagnostics.py: Error types and the error/warning counters
"""

__version__ = "0.1.0"

from .tables import INSTRUCTIONS, INDEXED_MODES, InstructionDef, OperandClass
from .lexer import LexedLine, tokenize_line
from .parser import LineKind, ParsedLine, parse_line
from .symbols import SymbolTable
from .image import MemoryImage
from .listing import Listing, ListingLine
from .diagnostics import AssemblerError, Diagnostics, LineSyntaxError, SyntaxErrorKind
from .assembler import Assembler, AssemblyResult, AssemblySession, Pass, assemble, run_pass
