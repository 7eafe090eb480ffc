import pytest
from src.vm2hack.hack import AInstr, CInstr, LabelDef, Comment, render, COMP, DEST, JUMP

@pytest.mark.parametrize("instr, text", [
    (AInstr(7), "@7"),
    (AInstr("SP"), "@SP"),
    (CInstr("M+1", "M"), "M=M+1"),
    (CInstr("D", jump="JNE"), "D;JNE"),
    (CInstr("M-1", "AM"), "AM=M-1"),
    (LabelDef("LOOP"), "(LOOP)"),
    (Comment("push constant 7"), "// push constant 7"),
])
def test_render(instr, text):
    assert render(instr) == text

def test_non_canonical_fields_rejected():
    with pytest.raises(ValueError):
        CInstr("M+D", "M")
    with pytest.raises(ValueError):
        CInstr("D", "MA")
    with pytest.raises(ValueError):
        CInstr("D", jump="JZ")

def test_tables_hold_canonical_mnemonics():
    assert len(COMP) == 28 and len(DEST) == 7 and len(JUMP) == 7
    assert "D+M" in COMP and "M+D" not in COMP
    assert "AMD" in DEST and "JMP" in JUMP
