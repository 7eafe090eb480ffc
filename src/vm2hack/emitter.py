# src/vm2hack/emitter.py
from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional

from .ast import (
    UNARY_OPS, BINARY_OPS, COMPARE_OPS,
    Arithmetic, Push, Pop, Label, Goto, IfGoto, Call, Function, Return, Command,
)
from .hack import AInstr, CInstr, LabelDef, Comment, Fragment, SCRATCH, FRAME, RET, STACK_BASE
from .labels import LabelAllocator
from .segments import SAVED, SAVED_REGISTERS, SegmentSpec, lookup, fixed_address, static_symbol

LOG = logging.getLogger("vm2hack.emitter")

# ---------------- Helpers de construcción ----------------

def _a(value) -> AInstr: return AInstr(value)
def _c(comp: str, dest: Optional[str] = None, jump: Optional[str] = None) -> CInstr:
    return CInstr(comp, dest, jump)

# Operación en sitio sobre la cima: x op y -> M
_BINARY_COMP = {"add": "D+M", "sub": "M-D", "and": "D&M", "or": "D|M"}
_UNARY_COMP  = {"neg": "-M", "not": "!M"}
_COMPARE_JUMP = {"eq": "JEQ", "gt": "JGT", "lt": "JLT"}

# Las etiquetas generadas llevan '$', que el parser no admite en nombres del fuente

# Número de palabras guardadas por 'call' (dirección de retorno + 4 registros)
FRAME_SIZE = 1 + len(SAVED_REGISTERS)

def push_d() -> Fragment:
    """*SP = D; SP++"""
    return [_a("SP"), _c("M", "A"), _c("D", "M"), _a("SP"), _c("M+1", "M")]

def pop_d() -> Fragment:
    """SP--; D = *SP"""
    return [_a("SP"), _c("M-1", "AM"), _c("M", "D")]

def load_segment(spec: SegmentSpec, index, unit: str) -> Fragment:
    """Deja en D el valor direccionado por (segmento, índice)."""
    if spec.kind == "immediate":
        return [_a(index), _c("A", "D")]
    if spec.kind == "indirect":
        return [_a(index), _c("A", "D"), _a(spec.base), _c("D+M", "A"), _c("M", "D")]
    if spec.kind == "fixed":
        return [_a(fixed_address(spec, index)), _c("M", "D")]
    if spec.kind == "static":
        return [_a(static_symbol(unit, index)), _c("M", "D")]
    if spec.kind == "saved":
        return [_a(index), _c("M", "D")]
    raise ValueError(f"Segmento no direccionable: {spec.name}")

class Emitter:
    """Traduce comandos VM a fragmentos de instrucciones Hack.

    Un Emitter corresponde a una unidad de traducción: 'unit' da nombre a las
    variables estáticas y, junto con la función en curso, a las etiquetas de
    retorno. El LabelAllocator puede compartirse entre varias unidades que
    acaban en el mismo programa .asm.
    """

    def __init__(self, unit: str, allocator: Optional[LabelAllocator] = None, *,
                 annotate: bool = True, scope_labels: bool = False):
        self.unit = unit
        self.allocator = allocator if allocator is not None else LabelAllocator()
        self.annotate = annotate
        self.scope_labels = scope_labels
        self.current_function: Optional[str] = None
        self._dispatch: Dict[type, Callable[..., Fragment]] = {
            Arithmetic: self.arithmetic,
            Push: lambda c: self.push(c.segment, c.index),
            Pop: lambda c: self.pop(c.segment, c.index),
            Label: lambda c: self.label(c.name),
            Goto: lambda c: self.goto(c.name),
            IfGoto: lambda c: self.if_goto(c.name),
            Call: lambda c: self.call(c.name, c.n_args),
            Function: lambda c: self.function(c.name, c.n_locals),
            Return: lambda c: self.return_(),
        }

    def emit(self, command: Command) -> Fragment:
        try:
            handler = self._dispatch[type(command)]
        except KeyError:
            raise TypeError(f"Comando VM desconocido: {command!r}") from None
        out: Fragment = [Comment(str(command))] if self.annotate else []
        out.extend(handler(command))
        return out

    # ---- aritmética / lógica ----

    def arithmetic(self, cmd: Arithmetic) -> Fragment:
        op = cmd.op
        if op in BINARY_OPS:
            return pop_d() + [_c("A-1", "A"), _c(_BINARY_COMP[op], "M")]
        if op in UNARY_OPS:
            return [_a("SP"), _c("M-1", "A"), _c(_UNARY_COMP[op], "M")]
        if op in COMPARE_OPS:
            return self.compare(op)
        raise ValueError(f"Operación aritmética desconocida: {op}")

    def compare(self, op: str) -> Fragment:
        true_label = self.allocator.allocate(f"${op.upper()}_TRUE")
        end_label = self.allocator.allocate(f"${op.upper()}_END")
        return pop_d() + [
            _c("A-1", "A"), _c("M-D", "D"),
            _a(true_label), _c("D", jump=_COMPARE_JUMP[op]),
            _a("SP"), _c("M-1", "A"), _c("0", "M"),
            _a(end_label), _c("0", jump="JMP"),
            LabelDef(true_label),
            _a("SP"), _c("M-1", "A"), _c("-1", "M"),
            LabelDef(end_label),
        ]

    # ---- memoria ----

    def push(self, segment: str, index) -> Fragment:
        spec = SAVED if segment == SAVED.name else lookup(segment)
        return load_segment(spec, index, self.unit) + push_d()

    def pop(self, segment: str, index: int) -> Fragment:
        spec = lookup(segment)
        if spec.kind == "indirect":
            # la dirección destino se calcula antes de mover SP
            return [
                _a(index), _c("A", "D"), _a(spec.base), _c("D+M", "D"),
                _a(SCRATCH), _c("D", "M"),
            ] + pop_d() + [_a(SCRATCH), _c("M", "A"), _c("D", "M")]
        if spec.kind == "fixed":
            return pop_d() + [_a(fixed_address(spec, index)), _c("D", "M")]
        if spec.kind == "static":
            return pop_d() + [_a(static_symbol(self.unit, index)), _c("D", "M")]
        raise ValueError(f"No se puede hacer pop sobre '{segment}'")

    # ---- control de flujo ----

    def _user_label(self, name: str) -> str:
        if self.scope_labels and self.current_function:
            return f"{self.current_function}${name}"
        return name

    def label(self, name: str) -> Fragment:
        return [LabelDef(self._user_label(name))]

    def goto(self, name: str) -> Fragment:
        return [_a(self._user_label(name)), _c("0", jump="JMP")]

    def if_goto(self, name: str) -> Fragment:
        return pop_d() + [_a(self._user_label(name)), _c("D", jump="JNE")]

    # ---- funciones ----

    def function(self, name: str, n_locals: int) -> Fragment:
        self.current_function = name
        out: Fragment = [LabelDef(name)]
        for _ in range(n_locals):
            out.extend(self.push("constant", 0))
        return out

    def call(self, name: str, n_args: int) -> Fragment:
        caller = self.current_function or self.unit
        ret_label = self.allocator.allocate(f"{caller}$ret$")
        out: Fragment = [_a(ret_label), _c("A", "D")] + push_d()
        for reg in SAVED_REGISTERS:
            out.extend(self.push(SAVED.name, reg))
        # ARG = SP - 5 - n_args
        out += [_a("SP"), _c("M", "D"), _a(FRAME_SIZE), _c("D-A", "D"),
                _a(n_args), _c("D-A", "D"), _a("ARG"), _c("D", "M")]
        # LCL = SP
        out += [_a("SP"), _c("M", "D"), _a("LCL"), _c("D", "M")]
        out += [_a(name), _c("0", jump="JMP"), LabelDef(ret_label)]
        return out

    def return_(self) -> Fragment:
        out: Fragment = [_a("LCL"), _c("M", "D"), _a(FRAME), _c("D", "M")]
        # RET = *(FRAME - 5), antes de que *ARG pise la dirección de retorno
        out += [_a(FRAME_SIZE), _c("D-A", "A"), _c("M", "D"), _a(RET), _c("D", "M")]
        # *ARG = pop()
        out += pop_d() + [_a("ARG"), _c("M", "A"), _c("D", "M")]
        # SP = ARG + 1
        out += [_a("ARG"), _c("M+1", "D"), _a("SP"), _c("D", "M")]
        # THAT, THIS, ARG, LCL = *(--FRAME)
        for reg in reversed(SAVED_REGISTERS):
            out += [_a(FRAME), _c("M-1", "AM"), _c("M", "D"), _a(reg), _c("D", "M")]
        out += [_a(RET), _c("M", "A"), _c("0", jump="JMP")]
        return out

    def bootstrap(self) -> Fragment:
        """SP = 256; call Sys.init 0"""
        out: Fragment = [Comment("bootstrap")] if self.annotate else []
        out += [_a(STACK_BASE), _c("A", "D"), _a("SP"), _c("D", "M")]
        out += self.call("Sys.init", 0)
        return out

def emit_all(commands: List[Command], emitter: Emitter) -> List[Fragment]:
    fragments = [emitter.emit(c) for c in commands]
    LOG.debug("%s: %d comandos, %d etiquetas asignadas", emitter.unit, len(commands), emitter.allocator.counter)
    return fragments
