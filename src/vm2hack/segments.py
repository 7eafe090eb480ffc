'''
tabla de segmentos VM -> modo de direccionamiento Hack
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Literal, Optional

Kind = Literal["immediate", "indirect", "fixed", "static", "saved"]

@dataclass(frozen=True)
class SegmentSpec:
    """Cómo se calcula la dirección efectiva de un segmento.

    - immediate: el índice es el valor (constant)
    - indirect:  registro base (LCL/ARG/THIS/THAT) + índice
    - fixed:     base numérica fija + índice, con 'limit' posiciones
    - static:    símbolo '<unidad>.<índice>'
    - saved:     pseudo-segmento interno; el "índice" es el nombre del registro
    """
    name: str
    kind: Kind
    base: Optional[str | int] = None
    limit: Optional[int] = None

SEGMENTS: Dict[str, SegmentSpec] = {
    "constant": SegmentSpec("constant", "immediate"),
    "local":    SegmentSpec("local", "indirect", "LCL"),
    "argument": SegmentSpec("argument", "indirect", "ARG"),
    "this":     SegmentSpec("this", "indirect", "THIS"),
    "that":     SegmentSpec("that", "indirect", "THAT"),
    "temp":     SegmentSpec("temp", "fixed", 5, 8),
    "pointer":  SegmentSpec("pointer", "fixed", 3, 2),
    "static":   SegmentSpec("static", "static"),
}

# Solo lo usa 'call' para guardar el contexto del llamador; no es accesible desde el fuente.
SAVED = SegmentSpec("saved", "saved")
SAVED_REGISTERS = ("LCL", "ARG", "THIS", "THAT")

def is_segment(name: str) -> bool:
    """Indica si el nombre corresponde a un segmento del lenguaje VM."""
    return name in SEGMENTS

def lookup(name: str) -> SegmentSpec:
    """Devuelve la especificación del segmento o lanza ValueError."""
    try:
        return SEGMENTS[name]
    except KeyError:
        raise ValueError(f"Segmento desconocido: {name}") from None

def check_index(spec: SegmentSpec, index: int) -> None:
    """Valida el índice contra la ventana de los segmentos de base fija."""
    if spec.limit is not None and not 0 <= index < spec.limit:
        raise ValueError(f"Índice {index} fuera de rango para '{spec.name}' (0..{spec.limit - 1})")

def fixed_address(spec: SegmentSpec, index: int) -> int:
    assert spec.kind == "fixed", spec
    return spec.base + index

def static_symbol(unit: str, index: int) -> str:
    """Símbolo único de la variable estática 'index' dentro de la unidad 'unit'."""
    return f"{unit}.{index}"
