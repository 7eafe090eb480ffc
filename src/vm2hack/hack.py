'''
mnemónicos Hack válidos (comp/dest/jump) y registros de instrucción
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Union

# Formas canónicas del campo 'comp'
COMP = frozenset({
    "0", "1", "-1", "D", "A", "!D", "!A", "-D", "-A",
    "D+1", "A+1", "D-1", "A-1", "D+A", "D-A", "A-D", "D&A", "D|A",
    "M", "!M", "-M", "M+1", "M-1", "D+M", "D-M", "M-D", "D&M", "D|M",
})

DEST = frozenset({"M", "D", "MD", "A", "AM", "AD", "AMD"})

JUMP = frozenset({"JGT", "JEQ", "JGE", "JLT", "JNE", "JLE", "JMP"})

# Registros de uso general que reserva el traductor
SCRATCH = "R13"   # destino de pop en segmentos indirectos
FRAME = "R13"     # base del marco durante return
RET = "R14"

STACK_BASE = 256

# ---- Registros de instrucción ----

@dataclass(frozen=True)
class AInstr:
    """'@valor': carga un entero o un símbolo en A."""
    value: Union[int, str]

@dataclass(frozen=True)
class CInstr:
    """'dest=comp;jump'. Solo acepta los mnemónicos canónicos de las tablas."""
    comp: str
    dest: Optional[str] = None
    jump: Optional[str] = None

    def __post_init__(self):
        if self.comp not in COMP:
            raise ValueError(f"comp inválido: {self.comp}")
        if self.dest is not None and self.dest not in DEST:
            raise ValueError(f"dest inválido: {self.dest}")
        if self.jump is not None and self.jump not in JUMP:
            raise ValueError(f"jump inválido: {self.jump}")

@dataclass(frozen=True)
class LabelDef:
    """Marcador '(nombre)'; no ocupa posición en ROM."""
    name: str

@dataclass(frozen=True)
class Comment:
    text: str

HackInstr = Union[AInstr, CInstr, LabelDef, Comment]
Fragment = List[HackInstr]

def render(instr: HackInstr) -> str:
    """Texto ensamblador de un registro de instrucción."""
    if isinstance(instr, AInstr):
        return f"@{instr.value}"
    if isinstance(instr, CInstr):
        s = instr.comp
        if instr.dest:
            s = f"{instr.dest}={s}"
        if instr.jump:
            s = f"{s};{instr.jump}"
        return s
    if isinstance(instr, LabelDef):
        return f"({instr.name})"
    if isinstance(instr, Comment):
        return f"// {instr.text}"
    raise TypeError(f"Instrucción Hack desconocida: {instr!r}")
