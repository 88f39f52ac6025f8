from enum import Enum


class DetectionMode(str, Enum):
    """
    Modo de detección, fijo durante toda una invocación del pipeline.

    - GENERAL: frame completo capturado por la cámara.
    - CROPPED: imagen ya recortada a la zona de la placa.
    """
    GENERAL = "general"
    CROPPED = "cropped"
