'''
límites de operandos Hack
'''

from __future__ import annotations

# Mayor valor cargable con una instrucción A (15 bits)
MAX_A_VALUE = 0x7FFF

def is_unsigned_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [0, 2^n) (sin signo de n bits)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0 <= x < (1 << n)

def fits_a_instruction(x: int) -> bool:
    """Indica si x puede cargarse directamente con '@x'."""
    return is_unsigned_nbit(x, 15)
