"""
Line lexer for uCPU assembly source.

Splits one source line into upper-cased, whitespace-separated tokens.
The first token starting with ';' ends tokenization; the rest of the line
from that ';' onward is kept verbatim (original case) as the comment.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import List, Optional

COMMENT_MARKER = ';'

_TOKEN_RE = re.compile(r'\S+')


@dataclass
class LexedLine:
    tokens: List[str] = field(default_factory=list)
    comment: Optional[str] = None


def strip_eol(line: str) -> str:
    """Drop the trailing line terminator, if any."""
    return line.rstrip('\r\n')


def tokenize_line(line: str) -> LexedLine:
    """Tokenize one raw source line."""
    text = strip_eol(line)
    result = LexedLine()
    for m in _TOKEN_RE.finditer(text):
        tok = m.group()
        if tok.startswith(COMMENT_MARKER):
            result.comment = text[m.start():]
            break
        # Upper-case per token: m.start() must index the original text.
        result.tokens.append(tok.upper())
    return result
