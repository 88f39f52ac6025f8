from typing import Protocol

from src.domain.Models.detection_mode import DetectionMode


class ITextNormalizer(Protocol):
    def normalize(self, text: str, mode: DetectionMode = DetectionMode.GENERAL) -> str: ...
