from src.vm2hack.diagnostics import Diagnostic, error, has_errors

def test_error_str():
    d = error("Segmento desconocido: bogus", line=12, source="pop bogus 0", file="Main.vm",
              hint="constant, local, argument, this, that, temp, pointer o static")
    s = str(d)
    assert s.startswith("Main.vm:12: ERROR: Segmento desconocido: bogus")
    assert "en 'pop bogus 0'" in s
    assert "(pista: constant" in s

def test_str_without_location():
    assert str(error("Comando vacío")) == "ERROR: Comando vacío"
    assert str(error("x", line=3)) == "3: ERROR: x"

def test_has_errors_ignores_warnings():
    aviso = Diagnostic("advertencia", "algo raro", line=1)
    assert not has_errors([aviso])
    assert has_errors([aviso, error("fallo")])
