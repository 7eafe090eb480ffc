from __future__ import annotations
import logging

LOG = logging.getLogger("vm2hack.labels")

class LabelAllocator:
    """Contador monótono de etiquetas para una ejecución de traducción.

    Cada traducción independiente usa su propia instancia; compartir una entre
    ejecuciones concurrentes rompería la unicidad de las etiquetas.
    """

    def __init__(self, start: int = 0):
        self._counter = start

    @property
    def counter(self) -> int:
        return self._counter

    def allocate(self, prefix: str) -> str:
        label = f"{prefix}{self._counter}"
        self._counter += 1
        LOG.debug("etiqueta %s", label)
        return label

    def reset(self) -> None:
        self._counter = 0
