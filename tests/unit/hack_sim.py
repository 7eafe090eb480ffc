'''
simulador mínimo de la CPU Hack para ejecutar el código generado en los tests
'''

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from src.vm2hack.hack import COMP, DEST, JUMP
from src.vm2hack.lexer import strip_comment

# Símbolos predefinidos del ensamblador Hack
PREDEFINED: Dict[str, int] = {
    "SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
    **{f"R{i}": i for i in range(16)},
    "SCREEN": 0x4000, "KBD": 0x6000,
}

def u16(x: int) -> int:
    return x & 0xFFFF

def sign_extend(x: int) -> int:
    x &= 0xFFFF
    return (x ^ 0x8000) - 0x8000

Instr = Tuple[str, object]   # ("A", valor) | ("C", (dest, comp, jump))

def assemble(text: str) -> List[Instr]:
    """Dos pasadas: etiquetas -> ROM, luego símbolos -> RAM desde 16."""
    lines = [strip_comment(l) for l in text.splitlines()]
    lines = [l for l in lines if l]
    symbols: Dict[str, int] = dict(PREDEFINED)
    pc = 0
    for l in lines:
        if l.startswith("("):
            name = l[1:-1]
            assert name not in symbols, f"etiqueta duplicada: {name}"
            symbols[name] = pc
        else:
            pc += 1
    rom: List[Instr] = []
    next_var = 16
    for l in lines:
        if l.startswith("("):
            continue
        if l.startswith("@"):
            v = l[1:]
            if v.isdigit():
                rom.append(("A", int(v)))
            else:
                if v not in symbols:
                    symbols[v] = next_var
                    next_var += 1
                rom.append(("A", symbols[v]))
            continue
        dest, rest = l.split("=", 1) if "=" in l else (None, l)
        comp, jump = rest.split(";", 1) if ";" in rest else (rest, None)
        assert comp in COMP and (dest is None or dest in DEST) and (jump is None or jump in JUMP), l
        rom.append(("C", (dest, comp, jump)))
    return rom

def _eval(comp: str, a: int, d: int, m: int) -> int:
    regs = {"A": a, "D": d, "M": m}
    if comp in ("0", "1", "-1"):
        return int(comp)
    if comp[0] == "!":
        return ~regs[comp[1]]
    if comp[0] == "-":
        return -regs[comp[1]]
    if len(comp) == 1:
        return regs[comp]
    x, op, y = comp[0], comp[1], comp[2]
    xv = regs[x]
    yv = 1 if y == "1" else regs[y]
    return {"+": xv + yv, "-": xv - yv, "&": xv & yv, "|": xv | yv}[op]

_JUMPS = {
    "JGT": lambda v: v > 0, "JEQ": lambda v: v == 0, "JGE": lambda v: v >= 0,
    "JLT": lambda v: v < 0, "JNE": lambda v: v != 0, "JLE": lambda v: v <= 0,
    "JMP": lambda v: True,
}

class HackCPU:
    def __init__(self, text: str, ram: Optional[Dict[int, int]] = None):
        self.rom = assemble(text)
        self.ram = [0] * 0x6001
        self.a = self.d = self.pc = 0
        for addr, val in (ram or {}).items():
            self.ram[addr] = u16(val)

    def step(self) -> None:
        kind, arg = self.rom[self.pc]
        if kind == "A":
            self.a = arg
            self.pc += 1
            return
        dest, comp, jump = arg
        out = u16(_eval(comp, self.a, self.d, self.ram[self.a]))
        addr = self.a
        if dest:
            if "M" in dest:
                self.ram[addr] = out
            if "D" in dest:
                self.d = out
            if "A" in dest:
                self.a = out
        if jump and _JUMPS[jump](sign_extend(out)):
            self.pc = self.a
        else:
            self.pc += 1

    def run(self, max_steps: int = 100_000) -> "HackCPU":
        """Ejecuta hasta salir del final de la ROM."""
        steps = 0
        while self.pc < len(self.rom):
            self.step()
            steps += 1
            assert steps < max_steps, "el programa no terminó"
        return self

    def signed(self, addr: int) -> int:
        return sign_extend(self.ram[addr])

    @property
    def sp(self) -> int:
        return self.ram[0]

    def stack(self, base: int = 256) -> List[int]:
        return [self.signed(i) for i in range(base, self.sp)]

def initial_ram(**regs) -> Dict[int, int]:
    """RAM con SP=256 y punteros de segmento en zonas separadas."""
    ram = {0: 256, 1: 300, 2: 400, 3: 3000, 4: 3010}
    for name, val in regs.items():
        ram[PREDEFINED[name]] = val
    return ram
