# src/domain/Services/hierarchy_aggregator.py
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Iterator, Optional, Tuple

from src.domain.Interfaces.text_normalizer import ITextNormalizer
from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.plate_candidate import PlateCandidate
from src.domain.Models.recognized_text import RecognizedText
from src.domain.Services.confidence_scorer import ConfidenceScorer
from src.domain.Services.plate_candidate_extractor import PlateCandidateExtractor

logger = logging.getLogger(__name__)

# El texto completo no trae confianza propia del motor
FULL_TEXT_CONFIDENCE = 1.0


class HierarchyAggregator:
    """
    Elige el mejor candidato de placa en todo el árbol de texto reconocido.

    Recorre texto completo -> cada bloque -> las líneas de ese bloque
    (inmediatamente después del bloque). Cada fragmento se normaliza,
    extrae y puntúa; la confianza del scorer se multiplica por la confianza
    de reconocimiento del propio fragmento. La comparación es plana entre
    todos los niveles: gana el puntaje estrictamente mayor y, en empate,
    el primero en el recorrido.
    """

    def __init__(
        self,
        normalizer: ITextNormalizer,
        extractor: Optional[PlateCandidateExtractor] = None,
        scorer: Optional[ConfidenceScorer] = None,
    ):
        self.normalizer = normalizer
        self.extractor = extractor or PlateCandidateExtractor()
        self.scorer = scorer or ConfidenceScorer()

    def best_candidate(self, recognized: RecognizedText, mode: DetectionMode) -> Optional[PlateCandidate]:
        """
        Devuelve el mejor candidato con `scorer_confidence` ya ponderada,
        o None si ningún fragmento supera 0 (caso normal, no es error).
        """
        best: Optional[PlateCandidate] = None
        best_score = 0.0

        for text, source_confidence in self._fragments(recognized):
            for candidate in self.score_fragment(text, mode):
                weighted = candidate.scorer_confidence * source_confidence
                if weighted > best_score:
                    best_score = weighted
                    best = replace(candidate, scorer_confidence=weighted)

        if best is None:
            logger.debug("Sin candidatos de placa en el texto reconocido (modo=%s)", mode.value)
        else:
            logger.debug("Mejor candidato %s conf=%.3f tier=%s", best.normalized, best_score, best.shape_tier.value)
        return best

    def score_fragment(self, text: str, mode: DetectionMode) -> Tuple[PlateCandidate, ...]:
        """Normaliza, extrae y puntúa los candidatos de un fragmento, sin ponderar."""
        normalized = self.normalizer.normalize(text, mode)
        return tuple(
            replace(c, scorer_confidence=self.scorer.score(c, normalized, mode))
            for c in self.extractor.extract(normalized)
        )

    @staticmethod
    def _fragments(recognized: RecognizedText) -> Iterator[Tuple[str, float]]:
        yield recognized.full_text, FULL_TEXT_CONFIDENCE
        for block in recognized.blocks:
            yield block.text, block.confidence
            for line in block.lines:
                yield line.text, line.confidence
