# DHT11/domain/line_buffer.py
import re
from typing import List

_LINE_END = re.compile(r"\r?\n")


class LineBuffer:
    """
    Acumula los chunks recibidos del puerto serial y entrega las líneas completas.
    Entre lecturas solo queda guardada la última línea parcial (sin salto de línea).
    """

    def __init__(self):
        self._pending = ""

    @property
    def pending(self) -> str:
        return self._pending

    def feed(self, chunk: str) -> List[str]:
        if not chunk:
            return []

        parts = _LINE_END.split(self._pending + chunk)
        self._pending = parts.pop()

        lines = []
        for part in parts:
            line = part.strip()
            if line:
                lines.append(line)
        return lines
