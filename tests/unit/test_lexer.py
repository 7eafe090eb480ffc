import pytest
from src.vm2hack.lexer import strip_comment, sanitize, tokenize

# --- strip_comment ---
@pytest.mark.parametrize("src, expected", [
    ("push constant 7 // siete", "push constant 7"),
    ("// full comment", ""),
    ("   add   ", "add"),
    ("add//pegado", "add"),
    ("", ""),
])
def test_strip_comment(src, expected):
    assert strip_comment(src) == expected

def test_sanitize_keeps_original_line_numbers():
    text = "// header\n\npush constant 7\n   \npush constant 8 // ocho\nadd\n"
    assert sanitize(text) == [(3, "push constant 7"), (5, "push constant 8"), (6, "add")]

# --- tokenize ---
@pytest.mark.parametrize("src, expected", [
    ("push constant 7", ["push", "constant", "7"]),
    ("push\tlocal   2", ["push", "local", "2"]),
    ("return", ["return"]),
    ("", []),
])
def test_tokenize(src, expected):
    assert tokenize(src) == expected
