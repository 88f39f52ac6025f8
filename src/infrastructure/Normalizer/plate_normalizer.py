# src/infrastructure/Normalizer/plate_normalizer.py
import re

from src.domain.Interfaces.text_normalizer import ITextNormalizer
from src.domain.Models.detection_mode import DetectionMode

# Confusiones típicas del OCR en placas recortadas
_CROPPED_CONFUSIONS = str.maketrans({"O": "0", "I": "1"})


class PlateNormalizer(ITextNormalizer):
    """
    Normaliza texto OCR antes de buscar placas:
    - Mayúsculas
    - Aceptar solo A-Z, 0-9, espacio y guion
    - Colapsar espacios y recortar extremos
    - Solo en modo CROPPED: corregir O -> 0 e I -> 1
    """
    _DISALLOWED = re.compile(r"[^A-Z0-9\s\-]")
    _WHITESPACE = re.compile(r"\s+")

    def normalize(self, text: str, mode: DetectionMode = DetectionMode.GENERAL) -> str:
        if not text:
            return ""

        t = self._DISALLOWED.sub("", text.upper())
        t = self._WHITESPACE.sub(" ", t).strip()

        # En GENERAL no se corrige: "BOI" o "PERU" pueden ser letras legítimas
        # en un frame completo, y la evidencia para corregirlas es inconsistente.
        if mode == DetectionMode.CROPPED:
            t = t.translate(_CROPPED_CONFUSIONS)

        return t
