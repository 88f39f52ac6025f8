# src/application/plate_detection_service.py
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from src.core.config import settings
from src.domain.Exceptions.pipeline_errors import RecognitionFailure
from src.domain.Interfaces.image_preprocessor import IImagePreprocessor
from src.domain.Interfaces.text_normalizer import ITextNormalizer
from src.domain.Interfaces.text_recognition_engine import ITextRecognitionEngine
from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.detection_result import PlateDetectionResult
from src.domain.Models.preprocessing_profile import CropRegion
from src.domain.Models.recognized_text import RecognizedText
from src.domain.Services.hierarchy_aggregator import HierarchyAggregator
from src.domain.Services.plate_formatter import format_plate
from src.domain.Services.preprocessing_advisor import advise_preprocessing
from src.infrastructure.Normalizer.plate_normalizer import PlateNormalizer
from src.monitoring.metrics import (
    detection_failures_total, ocr_latency, pipeline_latency,
    plates_detected_total, preprocessing_fallbacks_total,
)

logger = logging.getLogger(__name__)


def _elapsed_ms(t0: float) -> int:
    return max(0, int(round((time.perf_counter() - t0) * 1000)))


@dataclass(frozen=True)
class DetectionRequest:
    """Una invocación del pipeline para `detect_many`."""
    image_uri: str
    mode: DetectionMode = DetectionMode.GENERAL
    crop_region: Optional[CropRegion] = None
    already_processed: bool = False


class PlateDetectionService:
    """
    Orquesta el pipeline:
    preprocesado (externo) -> reconocimiento (externo) -> agregación -> formato.

    - Un fallo del preprocesado no es fatal: se sigue con la imagen original.
    - Un fallo del reconocimiento sí lo es: resultado con `error`.
    - Sin estado mutable compartido: cada invocación es independiente y
      puede correr en paralelo con otras.
    """

    def __init__(
        self,
        recognizer: Optional[ITextRecognitionEngine] = None,
        preprocessor: Optional[IImagePreprocessor] = None,
        normalizer: Optional[ITextNormalizer] = None,
        aggregator: Optional[HierarchyAggregator] = None,
        high_fidelity: Optional[bool] = None,
        max_workers: Optional[int] = None,
    ):
        self.recognizer = recognizer
        self.preprocessor = preprocessor
        self.aggregator = aggregator or HierarchyAggregator(normalizer or PlateNormalizer())
        self.high_fidelity = settings.high_fidelity if high_fidelity is None else high_fidelity
        self.max_workers = max(1, max_workers or settings.detect_workers)

    # ---------------------------------------------------------
    # PIPELINE COMPLETO
    # ---------------------------------------------------------
    def detect_plate(
        self,
        image_uri: str,
        mode: DetectionMode = DetectionMode.GENERAL,
        crop_region: Optional[CropRegion] = None,
        already_processed: bool = False,
    ) -> PlateDetectionResult:
        t0 = time.perf_counter()

        uri = image_uri
        if not already_processed:
            uri = self._preprocess(image_uri, mode, crop_region)

        t1 = time.perf_counter()
        try:
            if self.recognizer is None:
                raise RecognitionFailure("motor de reconocimiento no configurado")
            recognized = self.recognizer.recognize(uri)
        except Exception as e:
            detection_failures_total.labels(stage="recognize").inc()
            logger.exception("Reconocimiento de texto falló para %s", uri)
            result = PlateDetectionResult.failure(f"Error procesando imagen: {e}", _elapsed_ms(t0))
            pipeline_latency.labels(mode=mode.value).observe(time.perf_counter() - t0)
            return result
        ocr_latency.labels(mode=mode.value).observe(time.perf_counter() - t1)

        return self._build_result(recognized, mode, t0)

    # ---------------------------------------------------------
    # PIPELINE SIN ETAPAS EXTERNAS
    # ---------------------------------------------------------
    def detect_from_recognized_text(
        self,
        recognized_text: RecognizedText,
        mode: DetectionMode = DetectionMode.GENERAL,
    ) -> PlateDetectionResult:
        return self._build_result(recognized_text, mode, time.perf_counter())

    # ---------------------------------------------------------
    # BATCH
    # ---------------------------------------------------------
    def detect_many(self, requests: Sequence[DetectionRequest]) -> List[PlateDetectionResult]:
        """Ejecuta varias invocaciones en paralelo; conserva el orden de entrada."""
        if not requests:
            return []

        # pool por llamada: el servicio no guarda estado entre invocaciones
        workers = min(self.max_workers, len(requests))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="detect") as executor:
            futures = [
                executor.submit(self.detect_plate, r.image_uri, r.mode, r.crop_region, r.already_processed)
                for r in requests
            ]
            return [f.result() for f in futures]

    def close(self) -> None:
        logger.info("🧹 PlateDetectionService cerrado")

    # ---------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------
    def _preprocess(self, image_uri: str, mode: DetectionMode, crop_region: Optional[CropRegion]) -> str:
        if self.preprocessor is None:
            return image_uri

        try:
            dimensions = self.preprocessor.get_image_size(image_uri)
            profile = advise_preprocessing(mode, dimensions, crop_region, self.high_fidelity)
            processed = self.preprocessor.preprocess(
                image_uri,
                profile.crop_region,
                profile.target_size,
                profile.quality,
            )
        except Exception as e:
            return self._fallback(image_uri, e)

        if not processed:
            return self._fallback(image_uri, "el preprocesador devolvió una URI vacía")

        logger.debug("Imagen preprocesada %s -> %s (%dx%d q=%d)",
                     image_uri, processed, profile.target_width, profile.target_height, profile.quality)
        return processed

    @staticmethod
    def _fallback(image_uri: str, reason) -> str:
        preprocessing_fallbacks_total.inc()
        detection_failures_total.labels(stage="preprocess").inc()
        logger.warning("Preprocesado no disponible para %s, se usa la imagen original: %s", image_uri, reason)
        return image_uri

    def _build_result(self, recognized: RecognizedText, mode: DetectionMode, t0: float) -> PlateDetectionResult:
        best = self.aggregator.best_candidate(recognized, mode)

        if best is None:
            plate_number, confidence = "", 0.0
        else:
            plate_number, confidence = format_plate(best.raw_match), best.scorer_confidence
            plates_detected_total.labels(mode=mode.value).inc()

        result = PlateDetectionResult.from_plate(
            plate_number=plate_number,
            confidence=confidence,
            all_text=recognized.full_text,
            processing_time_ms=_elapsed_ms(t0),
        )
        pipeline_latency.labels(mode=mode.value).observe(time.perf_counter() - t0)
        logger.info("Detección modo=%s placa=%r conf=%.3f t=%dms",
                    mode.value, result.plate_number, result.confidence, result.processing_time_ms)
        return result
