import logging
import random
from typing import Optional, Sequence

from src.core.config import settings
from src.domain.Interfaces.text_recognition_engine import ITextRecognitionEngine
from src.domain.Models.recognized_text import RecognizedText, TextBlock, TextLine

logger = logging.getLogger(__name__)

HEADER = "REPUBLICA DEL PERU"


class SyntheticTextRecognizer(ITextRecognitionEngine):
    """
    Implementación sintética para pruebas: ignora la imagen y devuelve el
    texto de una placa peruana tomada de `plates`. Con `seed` (o un `rng`
    propio) la secuencia es determinista.
    """

    def __init__(
        self,
        plates: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        confidence: float = 0.92,
    ):
        self.plates = tuple(plates if plates is not None else settings.synthetic_plates)
        if not self.plates:
            raise ValueError("Se necesita al menos una placa sintética")
        self.rng = rng or random.Random(seed if seed is not None else settings.synthetic_seed)
        self.confidence = confidence

    def recognize(self, image_uri: str) -> RecognizedText:
        plate = self.rng.choice(self.plates)
        logger.debug("Texto sintético para %s: %s", image_uri, plate)
        return RecognizedText(
            full_text=f"{HEADER}\n{plate}",
            blocks=(
                TextBlock(text=HEADER, confidence=self.confidence, lines=(TextLine(HEADER, self.confidence),)),
                TextBlock(text=plate, confidence=self.confidence, lines=(TextLine(plate, self.confidence),)),
            ),
        )
