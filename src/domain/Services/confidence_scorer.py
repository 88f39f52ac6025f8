# src/domain/Services/confidence_scorer.py
import math
import re
from typing import Optional

from src.core.config import settings
from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.plate_candidate import PlateCandidate, ShapeTier
from src.domain.Services.plate_formatter import validate_format

_HAS_LETTER = re.compile(r"[A-Z]")
_HAS_DIGIT = re.compile(r"[0-9]")

BASE_CONFIDENCE = {
    DetectionMode.GENERAL: 0.3,
    DetectionMode.CROPPED: 0.4,
}
LENGTH_BONUS = 0.3
SHAPE_BONUS = 0.3
MIXED_BONUS = 0.1
BREVITY_BONUS = 0.1


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


class ConfidenceScorer:
    """
    Confianza compuesta de un candidato:

    base (0.3 GENERAL / 0.4 CROPPED)
      + 0.3 si la longitud está en [6, 8]
      + 0.3 si coincide con una forma válida (3L3D, 1L5D, 2L4D)
      + 0.1 si mezcla letras y dígitos
      + 0.1 (solo CROPPED) si el texto completo es corto (recorte limpio)
    -> clamp -> x0.7 si es LOOSE -> x1.2 en CROPPED (máx 1.0) -> clamp
    """

    def __init__(
        self,
        loose_multiplier: Optional[float] = None,
        cropped_bonus: Optional[float] = None,
        brevity_threshold: Optional[int] = None,
    ):
        self.loose_multiplier = loose_multiplier if loose_multiplier is not None else settings.loose_tier_multiplier
        self.cropped_bonus = cropped_bonus if cropped_bonus is not None else settings.cropped_confidence_bonus
        self.brevity_threshold = brevity_threshold if brevity_threshold is not None else settings.cropped_brevity_threshold

    def score(self, candidate: PlateCandidate, full_text: str, mode: DetectionMode) -> float:
        raw = candidate.raw_match
        parts = [BASE_CONFIDENCE[mode]]

        if 6 <= len(raw) <= 8:
            parts.append(LENGTH_BONUS)
        if validate_format(raw):
            parts.append(SHAPE_BONUS)
        if _HAS_LETTER.search(raw) and _HAS_DIGIT.search(raw):
            parts.append(MIXED_BONUS)
        if mode == DetectionMode.CROPPED and len(full_text or "") < self.brevity_threshold:
            parts.append(BREVITY_BONUS)

        # fsum: 0.3 + 0.3 + 0.3 + 0.1 debe dar exactamente 1.0
        confidence = _clamp(math.fsum(parts))

        if candidate.shape_tier == ShapeTier.LOOSE:
            confidence *= self.loose_multiplier

        if mode == DetectionMode.CROPPED and confidence > 0:
            confidence = min(confidence * self.cropped_bonus, 1.0)

        return _clamp(confidence)
