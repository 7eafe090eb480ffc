from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Union
from .hack import Fragment, render

def to_asm_lines(fragment: Fragment) -> List[str]:
    return [render(i) for i in fragment]

def render_fragments(fragments: Iterable[Fragment]) -> str:
    """Un fragmento por comando, separados por un único salto de línea."""
    return "\n".join("\n".join(to_asm_lines(f)) for f in fragments if f)

def write_asm(text: str, path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
        if text and not text.endswith("\n"):
            f.write("\n")
