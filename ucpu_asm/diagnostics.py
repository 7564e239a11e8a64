"""
Error types and the diagnostics accumulator.

Three independent counters are kept for a run:
  - syntax errors   (pass 1 only) — any nonzero count stops assembly
  - semantic errors (pass 2 only) — undefined label references
  - warnings        (pass 2 only) — labels declared more than once

Only syntax errors travel as exceptions, and only within a single line.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import List

__all__ = [
    'AssemblerError', 'LineSyntaxError', 'SyntaxErrorKind',
    'Severity', 'Diagnostic', 'Diagnostics',
]


class AssemblerError(Exception):
    """Raised on assembly errors."""
    def __init__(self, message: str, line_num: int = 0, line_text: str = ""):
        self.message = message
        self.line_num = line_num
        self.line_text = line_text
        super().__init__(f"Line {line_num}: {message}" if line_num else message)


class SyntaxErrorKind(enum.Enum):
    INCORRECT_LABEL = "incorrect label"
    UNKNOWN_MNEMONIC = "unknown mnemonic"
    LABEL_NOT_ALLOWED = "label operand not allowed for"
    INCORRECT_LABEL_OPERAND = "incorrect label operand"
    LABEL_REQUIRED = "label operand required, got"
    INDEXED_NOT_ALLOWED = "not allowed indexed mode operand"
    REGISTER_NOT_ALLOWED = "not allowed reg operand"
    REGISTER_REQUIRED = 'reg operand required, possibly add "%" prefix to'
    INCORRECT_OPERAND = "incorrect operand"
    TRAILING_GARBAGE = "unexpected trailing token"


class LineSyntaxError(AssemblerError):
    """A syntax error confined to one source line."""
    def __init__(self, kind: SyntaxErrorKind, token: str,
                 line_num: int = 0, line_text: str = ""):
        self.kind = kind
        self.token = token
        super().__init__(f'{kind.value} "{token}"', line_num, line_text)


class Severity(enum.Enum):
    SYNTAX = "syntax error"
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    severity: Severity
    line_num: int
    message: str

    def __str__(self):
        return f"Line {self.line_num}: {self.severity.value}: {self.message}"


@dataclass
class Diagnostics:
    """Run-wide counters. Never reset while a run is in progress."""
    syntax_errors: int = 0
    semantic_errors: int = 0
    warnings: int = 0
    records: List[Diagnostic] = field(default_factory=list)

    def syntax_error(self, line_num: int, message: str):
        self.syntax_errors += 1
        self.records.append(Diagnostic(Severity.SYNTAX, line_num, message))

    def semantic_error(self, line_num: int, message: str):
        self.semantic_errors += 1
        self.records.append(Diagnostic(Severity.ERROR, line_num, message))

    def warning(self, line_num: int, message: str):
        self.warnings += 1
        self.records.append(Diagnostic(Severity.WARNING, line_num, message))

    @property
    def blocks_output(self) -> bool:
        """True when pass 2 must not run and no image may be written."""
        return self.syntax_errors > 0

    @property
    def has_findings(self) -> bool:
        """True when non-fatal errors or warnings were reported."""
        return self.semantic_errors > 0 or self.warnings > 0

    def summary(self) -> str:
        if self.blocks_output:
            return (f"There were {self.syntax_errors} syntax error(s), object file "
                    f"was not generated. Check listing file.")
        return (f"There were {self.warnings} warning(s) and "
                f"{self.semantic_errors} error(s). Check listing file.")
