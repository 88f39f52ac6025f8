from abc import ABC, abstractmethod
from typing import Optional, Tuple

from src.domain.Models.preprocessing_profile import CropRegion, ImageDimensions


class IImagePreprocessor(ABC):
    """
    Preprocesador de imagen externo (recorte + redimensión + compresión).
    """
    @abstractmethod
    def get_image_size(self, uri: str) -> ImageDimensions:
        """Devuelve el tamaño de la imagen. Lanza PreprocessingUnavailable si no se puede leer."""
        pass

    @abstractmethod
    def preprocess(
        self,
        source_uri: str,
        crop_region: Optional[CropRegion],
        target_size: Tuple[int, int],
        quality: int,
    ) -> str:
        """
        Recorta `crop_region`, redimensiona a `target_size` (width, height)
        y guarda con calidad 0-100. Devuelve la URI procesada; si falla
        puede lanzar una excepción o devolver la URI original.
        """
        pass
