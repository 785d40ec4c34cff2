# DHT11/domain/line_parser.py
import re
from typing import Optional
from DHT11.domain.entities.reading import Reading

# Prefijo numérico decimal: "60.2abc" -> 60.2, "abc" -> sin número
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(text: str) -> Optional[float]:
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return None
    return float(match.group(1))


def parse_line(line: str) -> Optional[Reading]:
    """
    Convierte una línea "temperatura,humedad" en un Reading.
    Las líneas mal formadas se descartan devolviendo None; el enlace serial es ruidoso.
    """
    parts = line.split(",")
    if len(parts) != 2:
        return None

    temperature = parse_number(parts[0])
    humidity = parse_number(parts[1])
    if temperature is None or humidity is None:
        return None

    return Reading(temperature=temperature, humidity=humidity)
