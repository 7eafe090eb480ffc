# src/vm2hack/parser.py
from __future__ import annotations
import re
from typing import Iterable, List, Optional, Tuple, Union

from .lexer import tokenize
from .ast import (
    ARITHMETIC_OPS, Arithmetic, Push, Pop, Label, Goto, IfGoto,
    Call, Function, Return, Command,
)
from .segments import lookup, check_index
from .utils import fits_a_instruction, MAX_A_VALUE
from .diagnostics import error, Diagnostic

COUNT_RE  = re.compile(r"^\d+$")
# '$' queda reservado para las etiquetas que genera el traductor
SYMBOL_RE = re.compile(r"^[A-Za-z_.:][A-Za-z0-9_.:]*$")

class ParseError(ValueError):
    """Comando VM mal formado. 'hint' orienta la corrección."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint

# Número de operandos por mnemónico
ARITY = {
    **{op: 0 for op in ARITHMETIC_OPS},
    "push": 2, "pop": 2,
    "label": 1, "goto": 1, "if-goto": 1,
    "call": 2, "function": 2,
    "return": 0,
}

def _parse_count(token: str, what: str) -> int:
    if not COUNT_RE.match(token):
        raise ParseError(f"{what} inválido: '{token}'", hint="se espera un entero no negativo")
    return int(token)

def _check_a_value(value: int, what: str) -> int:
    """El valor acaba en '@valor', así que debe caber en 15 bits."""
    if not fits_a_instruction(value):
        raise ParseError(f"{what} fuera de rango: {value}", hint=f"máximo {MAX_A_VALUE}")
    return value

def _parse_symbol(token: str, what: str) -> str:
    if not SYMBOL_RE.match(token):
        raise ParseError(f"{what} inválido: '{token}'",
                         hint="letras, dígitos, '_', '.' o ':', sin empezar por dígito")
    return token

def _parse_access(mnemonic: str, seg_tok: str, idx_tok: str, line: Optional[int]) -> Union[Push, Pop]:
    try:
        spec = lookup(seg_tok)
    except ValueError as ex:
        raise ParseError(str(ex), hint="constant, local, argument, this, that, temp, pointer o static") from None
    index = _parse_count(idx_tok, "Índice")
    try:
        check_index(spec, index)
    except ValueError as ex:
        raise ParseError(str(ex)) from None
    if spec.kind == "immediate":
        if mnemonic == "pop":
            raise ParseError("No se puede hacer pop sobre 'constant'")
        _check_a_value(index, "Constante")
    elif spec.kind == "indirect":
        _check_a_value(index, "Índice")
    if mnemonic == "pop":
        return Pop(seg_tok, index, line)
    return Push(seg_tok, index, line)

def parse_command(words: List[str], *, line: Optional[int] = None) -> Command:
    """Valida la forma de un comando ya tokenizado y construye su variante.

    Lanza ParseError si el comando está vacío, el mnemónico no existe, falta o
    sobra un operando, o un operando no tiene el tipo esperado.
    """
    if not words:
        raise ParseError("Comando vacío")
    mnemonic, ops = words[0], words[1:]
    if mnemonic not in ARITY:
        raise ParseError(f"Comando desconocido: '{mnemonic}'")
    expected = ARITY[mnemonic]
    if len(ops) != expected:
        raise ParseError(f"'{mnemonic}' espera {expected} operando(s), recibió {len(ops)}")

    if mnemonic in ARITHMETIC_OPS:
        return Arithmetic(mnemonic, line)
    if mnemonic in ("push", "pop"):
        return _parse_access(mnemonic, ops[0], ops[1], line)
    if mnemonic == "label":
        return Label(_parse_symbol(ops[0], "Etiqueta"), line)
    if mnemonic == "goto":
        return Goto(_parse_symbol(ops[0], "Etiqueta"), line)
    if mnemonic == "if-goto":
        return IfGoto(_parse_symbol(ops[0], "Etiqueta"), line)
    if mnemonic == "call":
        n_args = _check_a_value(_parse_count(ops[1], "Número de argumentos"), "Número de argumentos")
        return Call(_parse_symbol(ops[0], "Nombre de función"), n_args, line)
    if mnemonic == "function":
        return Function(_parse_symbol(ops[0], "Nombre de función"), _parse_count(ops[1], "Número de locales"), line)
    return Return(line)

def parse_line(text: str, *, line: Optional[int] = None) -> Command:
    return parse_command(tokenize(text), line=line)

def parse(lines: Iterable[Union[str, Tuple[int, str]]], *,
          filename: Optional[str] = None) -> Tuple[List[Command], List[Diagnostic]]:
    """
    Devuelve (commands, diagnostics).

    'lines' son líneas ya saneadas: cadenas sueltas (se numeran desde 1) o
    pares (lineno, texto) como los produce lexer.sanitize. Una línea mal
    formada genera un diagnóstico de error y se descarta; el resto se sigue
    procesando en orden.
    """
    commands: List[Command] = []
    diags: List[Diagnostic] = []
    for pos, item in enumerate(lines, start=1):
        lineno, text = item if isinstance(item, tuple) else (pos, item)
        try:
            commands.append(parse_line(text, line=lineno))
        except ParseError as ex:
            diags.append(error(str(ex), line=lineno, source=text.strip(), file=filename, hint=ex.hint))
    return commands, diags
