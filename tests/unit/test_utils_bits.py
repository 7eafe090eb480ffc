import pytest
from src.vm2hack.utils import is_unsigned_nbit, fits_a_instruction, MAX_A_VALUE

def test_a_instruction_range():
    assert fits_a_instruction(0)
    assert fits_a_instruction(MAX_A_VALUE)
    assert not fits_a_instruction(MAX_A_VALUE + 1)
    assert not fits_a_instruction(-1)

def test_nbit_checks():
    assert is_unsigned_nbit(255, 8) and not is_unsigned_nbit(256, 8)
    with pytest.raises(ValueError):
        is_unsigned_nbit(1, 0)
