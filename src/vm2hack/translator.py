from __future__ import annotations
import argparse, logging, os, sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .lexer import sanitize
from .parser import parse
from .emitter import Emitter, emit_all
from .labels import LabelAllocator
from .ast import Command
from .diagnostics import Diagnostic, has_errors
from .hack import Fragment
from .writers import render_fragments, write_asm

LOG = logging.getLogger("vm2hack.translator")

@dataclass
class TranslateResult:
    text: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not has_errors(self.diagnostics)

def _report(diags: Iterable[Diagnostic]) -> None:
    for d in diags:
        LOG.info("línea descartada: %s", d)

def translate_fragments(lines: Iterable[Union[str, Tuple[int, str]]], emitter: Emitter, *,
                        filename: Optional[str] = None) -> Tuple[List[Fragment], List[Diagnostic], List[Command]]:
    commands, diags = parse(lines, filename=filename)
    _report(diags)
    return emit_all(commands, emitter), diags, commands

def translate(lines: Iterable[Union[str, Tuple[int, str]]], *, unit: str,
              allocator: Optional[LabelAllocator] = None, annotate: bool = True,
              scope_labels: bool = False, filename: Optional[str] = None) -> TranslateResult:
    """Traduce líneas VM ya saneadas a texto ensamblador Hack, en orden de fuente.

    Las líneas mal formadas no producen código; quedan como diagnósticos en el
    resultado y la traducción continúa.
    """
    emitter = Emitter(unit, allocator, annotate=annotate, scope_labels=scope_labels)
    fragments, diags, commands = translate_fragments(lines, emitter, filename=filename)
    return TranslateResult(render_fragments(fragments), diags, commands)

def unit_name(filename: Optional[str]) -> str:
    """Identificador de la unidad de traducción: el nombre del archivo sin extensión."""
    if not filename:
        return "Main"
    return Path(filename).stem

def translate_text(text: str, *, filename: Optional[str] = None, unit: Optional[str] = None,
                   **kwargs) -> TranslateResult:
    return translate(sanitize(text), unit=unit or unit_name(filename), filename=filename, **kwargs)

def collect_sources(source: Union[str, Path]) -> List[Path]:
    """Un archivo .vm, o todos los .vm de un directorio en orden alfabético."""
    p = Path(source)
    if p.is_dir():
        return sorted(q for q in p.iterdir() if q.suffix == ".vm" and q.is_file())
    return [p]

def output_path(source: Union[str, Path]) -> Path:
    p = Path(source)
    if p.is_dir():
        return p / f"{p.resolve().name}.asm"
    return p.with_suffix(".asm")

def translate_files(paths: Sequence[Union[str, Path]], *, bootstrap: bool = False,
                    annotate: bool = True, scope_labels: bool = False) -> TranslateResult:
    """Traduce varios .vm a un único programa.

    Todas las unidades comparten el LabelAllocator (un programa, una ejecución);
    cada una mantiene su propio ámbito de variables estáticas. Lanza OSError, o
    UnicodeDecodeError si un archivo no es UTF-8 válido.
    """
    allocator = LabelAllocator()
    fragments: List[Fragment] = []
    diags: List[Diagnostic] = []
    commands: List[Command] = []
    if bootstrap:
        fragments.append(Emitter("bootstrap", allocator, annotate=annotate).bootstrap())
    for path in paths:
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        emitter = Emitter(path.stem, allocator, annotate=annotate, scope_labels=scope_labels)
        frs, ds, cmds = translate_fragments(sanitize(text), emitter, filename=str(path))
        fragments.extend(frs)
        diags.extend(ds)
        commands.extend(cmds)
    return TranslateResult(render_fragments(fragments), diags, commands)

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="vm2hack", description="VM to Hack assembly translator")
    ap.add_argument("source", help="archivo .vm o directorio con archivos .vm")
    ap.add_argument("-o", "--output", help="archivo .asm de salida (por defecto, derivado de la entrada)")
    ap.add_argument("--no-comments", action="store_true", help="no anotar cada comando VM en la salida")
    ap.add_argument("--bootstrap", action="store_true", help="anteponer SP=256; call Sys.init 0")
    ap.add_argument("--scope-labels", action="store_true",
                    help="prefijar las etiquetas de usuario con el nombre de la función")
    ap.add_argument("--strict", action="store_true", help="no escribir la salida si hay errores")
    ap.add_argument("--log-level", default=os.environ.get("VM2HACK_LOG", "WARNING"),
                    help="nivel de logging (por defecto WARNING)")
    return ap

def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    _configure_logging(args.log_level)

    sources = collect_sources(args.source)
    if not sources:
        print(f"ERROR: no hay archivos .vm en {args.source}", file=sys.stderr)
        return 2

    try:
        result = translate_files(sources, bootstrap=args.bootstrap,
                                 annotate=not args.no_comments, scope_labels=args.scope_labels)
    except (OSError, UnicodeDecodeError) as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    for d in result.diagnostics:
        print(d, file=sys.stderr)

    if not result.ok and args.strict:
        return 1

    out = Path(args.output) if args.output else output_path(args.source)
    try:
        write_asm(result.text, out)
    except OSError as ex:
        print(f"ERROR al escribir {out}: {ex}", file=sys.stderr)
        return 3

    LOG.info("%d comandos -> %s", len(result.commands), out)
    return 0 if result.ok else 1

if __name__ == "__main__":
    raise SystemExit(main())
