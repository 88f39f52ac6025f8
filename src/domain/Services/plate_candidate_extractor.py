# src/domain/Services/plate_candidate_extractor.py
import re
from typing import Tuple

from src.domain.Models.plate_candidate import PlateCandidate, ShapeTier
from src.domain.Services.plate_formatter import format_plate

# Todas las formas estrictas se evalúan (no gana la primera)
STRICT_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"[A-Z]{3}[-\s]?[0-9]{3}"),       # auto: ABC-123 / ABC123
    re.compile(r"[A-Z][0-9]{2}[-\s]?[0-9]{3}"),  # taxi: A12-345
    re.compile(r"[A-Z]{2}[0-9]{4}"),            # moto: AB1234
)

LOOSE_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"[A-Z]{2,3}[0-9]{3,4}"),
)

_SEPARATORS = re.compile(r"[\s\-]")


class PlateCandidateExtractor:
    """
    Busca formas de placa en texto ya normalizado.

    Primero corre las formas STRICT; las LOOSE solo si las estrictas no
    encontraron nada. No puntúa: la penalización de LOOSE la aplica el scorer.
    """

    def __init__(
        self,
        strict_patterns: Tuple[re.Pattern, ...] = STRICT_PATTERNS,
        loose_patterns: Tuple[re.Pattern, ...] = LOOSE_PATTERNS,
    ):
        self.strict_patterns = tuple(strict_patterns)
        self.loose_patterns = tuple(loose_patterns)

    def extract(self, normalized_text: str) -> Tuple[PlateCandidate, ...]:
        if not normalized_text:
            return ()

        candidates = self._run(normalized_text, self.strict_patterns, ShapeTier.STRICT)
        if candidates:
            return candidates
        return self._run(normalized_text, self.loose_patterns, ShapeTier.LOOSE)

    @staticmethod
    def _run(text: str, patterns: Tuple[re.Pattern, ...], tier: ShapeTier) -> Tuple[PlateCandidate, ...]:
        found = []
        for pattern in patterns:
            for match in pattern.finditer(text):
                raw = _SEPARATORS.sub("", match.group(0))
                found.append(PlateCandidate(
                    raw_match=raw,
                    normalized=format_plate(raw),
                    shape_tier=tier,
                ))
        return tuple(found)
