'''
diagnósticos por línea VM (comando mal formado, segmento desconocido)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

Severity = Literal["error", "advertencia"]

@dataclass(frozen=True)
class Diagnostic:
    """Problema detectado al traducir una línea VM.

    Guarda la ubicación (archivo y línea), el texto del comando que lo provocó
    y una pista opcional. Un diagnóstico nunca detiene la traducción: la línea
    se descarta y se sigue con la siguiente.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    source: Optional[str] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def location(self) -> str:
        parts = [str(p) for p in (self.file, self.line) if p is not None]
        return ":".join(parts)

    def __str__(self) -> str:
        out = f"{self.severity.upper()}: {self.message}"
        if self.source:
            out += f" en '{self.source}'"
        if self.hint:
            out += f"  (pista: {self.hint})"
        loc = self.location()
        return f"{loc}: {out}" if loc else out

def error(message: str, *, line: int | None = None, source: str | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, source, hint, file)

def has_errors(diags: Iterable[Diagnostic]) -> bool:
    return any(d.is_error for d in diags)
