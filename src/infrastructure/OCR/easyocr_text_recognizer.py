# src/infrastructure/OCR/easyocr_text_recognizer.py
import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from src.core.config import settings
from src.domain.Exceptions.pipeline_errors import RecognitionFailure
from src.domain.Interfaces.text_recognition_engine import ITextRecognitionEngine
from src.domain.Models.recognized_text import RecognizedText, TextBlock, TextLine
from src.infrastructure.Preprocessing.opencv_image_preprocessor import clean_uri

logger = logging.getLogger(__name__)


class EasyOCRTextRecognizer(ITextRecognitionEngine):
    """
    Motor de reconocimiento usando EasyOCR.

    EasyOCR devuelve detecciones planas (bbox, texto, confianza); aquí cada
    detección es una línea y las líneas que comparten franja vertical se
    agrupan en un bloque, con la confianza media de sus líneas.
    """

    def __init__(self, reader: Optional[Any] = None, languages: Optional[List[str]] = None, gpu: Optional[bool] = None):
        if reader is None:
            import easyocr
            reader = easyocr.Reader(
                languages or [settings.ocr_lang],
                gpu=settings.ocr_gpu if gpu is None else gpu,
            )
        self.reader = reader

    def recognize(self, image_uri: str) -> RecognizedText:
        path = clean_uri(image_uri)
        try:
            results = self.reader.readtext(path)
        except Exception as e:
            raise RecognitionFailure(f"EasyOCR falló en {path}: {e}") from e

        blocks = self._group_blocks(results or [])
        full_text = "\n".join(b.text for b in blocks)
        logger.debug("EasyOCR %s: %d detecciones, %d bloques", path, len(results or []), len(blocks))
        return RecognizedText(full_text=full_text, blocks=tuple(blocks))

    @staticmethod
    def _group_blocks(results: Sequence[Any]) -> List[TextBlock]:
        rows = []
        for bbox, text, confidence in results:
            pts = np.asarray(bbox, dtype=float)
            top, bottom = float(pts[:, 1].min()), float(pts[:, 1].max())
            left = float(pts[:, 0].min())
            rows.append((top, bottom, left, str(text).strip(), float(confidence)))

        rows.sort(key=lambda r: (r[0], r[2]))

        groups: List[List[tuple]] = []
        for row in rows:
            if groups:
                last = groups[-1]
                g_top = min(r[0] for r in last)
                g_bottom = max(r[1] for r in last)
                center = (row[0] + row[1]) / 2.0
                if g_top <= center <= g_bottom:
                    last.append(row)
                    continue
            groups.append([row])

        blocks = []
        for group in groups:
            group.sort(key=lambda r: r[2])
            lines = tuple(TextLine(text=r[3], confidence=r[4]) for r in group if r[3])
            if not lines:
                continue
            blocks.append(TextBlock(
                text=" ".join(l.text for l in lines),
                confidence=float(np.mean([l.confidence for l in lines])),
                lines=lines,
            ))
        return blocks
