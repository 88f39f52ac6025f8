# src/infrastructure/Preprocessing/opencv_image_preprocessor.py
import logging
import os
import tempfile
import uuid
from typing import Optional, Tuple

import cv2
import numpy as np

from src.core.config import settings
from src.domain.Exceptions.pipeline_errors import PreprocessingUnavailable
from src.domain.Interfaces.image_preprocessor import IImagePreprocessor
from src.domain.Models.preprocessing_profile import CropRegion, ImageDimensions

logger = logging.getLogger(__name__)


def clean_uri(uri: str) -> str:
    """Quita el esquema file:// para trabajar con rutas locales."""
    return uri.replace("file://", "", 1) if uri.startswith("file://") else uri


class OpenCVImagePreprocessor(IImagePreprocessor):
    """
    Preprocesador basado en OpenCV:
    - Recorte a la región pedida
    - Redimensión (INTER_AREA al reducir, INTER_CUBIC al ampliar)
    - Guardado JPEG con la calidad pedida en `output_dir`
    """

    def __init__(self, output_dir: Optional[str] = None):
        self.output_dir = output_dir or settings.preprocess_output_dir or tempfile.gettempdir()

    def _read(self, uri: str) -> np.ndarray:
        path = clean_uri(uri)
        image = cv2.imread(path, cv2.IMREAD_COLOR)
        if image is None:
            raise PreprocessingUnavailable(f"No se pudo leer la imagen: {path}")
        return image

    def get_image_size(self, uri: str) -> ImageDimensions:
        h, w = self._read(uri).shape[:2]
        return ImageDimensions(width=w, height=h)

    def preprocess(
        self,
        source_uri: str,
        crop_region: Optional[CropRegion],
        target_size: Tuple[int, int],
        quality: int,
    ) -> str:
        image = self._read(source_uri)
        h, w = image.shape[:2]

        if crop_region is not None:
            x1, y1 = max(0, crop_region.x), max(0, crop_region.y)
            x2, y2 = min(w, crop_region.x + crop_region.width), min(h, crop_region.y + crop_region.height)
            if x2 <= x1 or y2 <= y1:
                raise PreprocessingUnavailable(f"Región fuera de la imagen: {crop_region}")
            image = image[y1:y2, x1:x2]

        target_w, target_h = target_size
        if target_w <= 0 or target_h <= 0:
            raise PreprocessingUnavailable(f"Tamaño destino inválido: {target_size}")

        src_h, src_w = image.shape[:2]
        interpolation = cv2.INTER_AREA if target_w * target_h < src_w * src_h else cv2.INTER_CUBIC
        resized = cv2.resize(image, (target_w, target_h), interpolation=interpolation)

        os.makedirs(self.output_dir, exist_ok=True)
        out_path = os.path.join(self.output_dir, f"plate-{uuid.uuid4().hex}.jpg")
        quality = int(min(max(quality, 0), 100))
        if not cv2.imwrite(out_path, resized, [cv2.IMWRITE_JPEG_QUALITY, quality]):
            raise PreprocessingUnavailable(f"No se pudo escribir la imagen procesada: {out_path}")

        logger.debug("Preprocesado %s -> %s (%dx%d q=%d)", source_uri, out_path, target_w, target_h, quality)
        return out_path
