from __future__ import annotations
from typing import List, Tuple

COMMENT = "//"

def strip_comment(line: str) -> str:
    """Remove a '//' comment and surrounding whitespace"""
    idx = line.find(COMMENT)
    if idx >= 0:
        line = line[:idx]
    return line.strip()

def sanitize(text: str) -> List[Tuple[int, str]]:
    """Return (lineno, line) for every non-empty line once comments are gone.

    Line numbers are 1-based and refer to the original text, so diagnostics
    can point back at the source file.
    """
    out = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        core = strip_comment(raw)
        if core:
            out.append((lineno, core))
    return out

def tokenize(line: str) -> List[str]:
    """Whitespace split; no other lexical structure exists in VM code."""
    return line.split()
