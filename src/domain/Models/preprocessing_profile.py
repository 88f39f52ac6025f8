# src/domain/Models/preprocessing_profile.py
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int


@dataclass(frozen=True)
class CropRegion:
    """Región (x, y, width, height) en coordenadas de la imagen original."""
    x: int
    y: int
    width: int
    height: int

    @staticmethod
    def full_image(dimensions: ImageDimensions) -> "CropRegion":
        return CropRegion(x=0, y=0, width=dimensions.width, height=dimensions.height)


@dataclass(frozen=True)
class PreprocessingProfile:
    """
    Parámetros que se entregan al preprocesador de imagen externo.
    """
    target_width: int
    target_height: int
    quality: int                        # 0-100
    crop_region: Optional[CropRegion] = None

    @property
    def target_size(self) -> Tuple[int, int]:
        return self.target_width, self.target_height
