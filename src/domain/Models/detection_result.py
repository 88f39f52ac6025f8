# src/domain/Models/detection_result.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlateDetectionResult:
    """
    Resultado de una ejecución completa del pipeline.
    Se construye una sola vez al final y no se modifica.
    """
    plate_number: str
    confidence: float
    success: bool
    all_text: Optional[str] = None      # texto completo reconocido (diagnóstico)
    error: Optional[str] = None         # sólo en fallos de reconocimiento
    processing_time_ms: int = 0

    @staticmethod
    def from_plate(plate_number: str, confidence: float, all_text: Optional[str], processing_time_ms: int) -> "PlateDetectionResult":
        success = len(plate_number) > 0
        return PlateDetectionResult(
            plate_number=plate_number,
            confidence=confidence if success else 0.0,
            success=success,
            all_text=all_text,
            processing_time_ms=max(0, processing_time_ms),
        )

    @staticmethod
    def failure(error: str, processing_time_ms: int) -> "PlateDetectionResult":
        return PlateDetectionResult(
            plate_number="",
            confidence=0.0,
            success=False,
            error=error,
            processing_time_ms=max(0, processing_time_ms),
        )

    def to_dict(self) -> dict:
        """Convierte a dict serializable."""
        return {
            "plate_number": self.plate_number,
            "confidence": self.confidence,
            "success": self.success,
            "all_text": self.all_text,
            "error": self.error,
            "processing_time_ms": self.processing_time_ms,
        }
