from dataclasses import dataclass
from enum import Enum


class ShapeTier(str, Enum):
    STRICT = "strict"   # formas canónicas de placas peruanas
    LOOSE = "loose"     # fallback permisivo, penalizado al puntuar


@dataclass(frozen=True)
class PlateCandidate:
    """
    Subcadena que coincide con una forma de placa.
    `scorer_confidence` queda en 0.0 hasta que el scorer la evalúa.
    """
    raw_match: str      # coincidencia sin espacios ni guiones
    normalized: str     # coincidencia en formato canónico (ABC-123)
    shape_tier: ShapeTier
    scorer_confidence: float = 0.0
