'''
dataclases de comandos VM (Arithmetic, Push, Pop, Label, ..., Return)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

UNARY_OPS = frozenset({"neg", "not"})
BINARY_OPS = frozenset({"add", "sub", "and", "or"})
COMPARE_OPS = frozenset({"eq", "gt", "lt"})
ARITHMETIC_OPS = UNARY_OPS | BINARY_OPS | COMPARE_OPS

# ---- Comandos aritméticos / lógicos ----

@dataclass(frozen=True)
class Arithmetic:
    """Operación sobre la cima de la pila (unaria, binaria o comparación)."""
    op: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return self.op

# ---- Acceso a memoria ----

@dataclass(frozen=True)
class Push:
    segment: str
    index: int
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"push {self.segment} {self.index}"

@dataclass(frozen=True)
class Pop:
    segment: str
    index: int
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"pop {self.segment} {self.index}"

# ---- Control de flujo ----

@dataclass(frozen=True)
class Label:
    name: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"label {self.name}"

@dataclass(frozen=True)
class Goto:
    name: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"goto {self.name}"

@dataclass(frozen=True)
class IfGoto:
    """Saca la cima y salta si es distinta de cero."""
    name: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"if-goto {self.name}"

# ---- Funciones ----

@dataclass(frozen=True)
class Call:
    name: str
    n_args: int
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"call {self.name} {self.n_args}"

@dataclass(frozen=True)
class Function:
    name: str
    n_locals: int
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"function {self.name} {self.n_locals}"

@dataclass(frozen=True)
class Return:
    line: Optional[int] = None

    def __str__(self) -> str:
        return "return"

Command = Union[Arithmetic, Push, Pop, Label, Goto, IfGoto, Call, Function, Return]
