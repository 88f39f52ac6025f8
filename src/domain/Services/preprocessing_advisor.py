# src/domain/Services/preprocessing_advisor.py
from typing import Optional

from src.core.config import settings
from src.domain.Exceptions.pipeline_errors import PreprocessingUnavailable
from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.preprocessing_profile import CropRegion, ImageDimensions, PreprocessingProfile


def advise_preprocessing(
    mode: DetectionMode,
    image_dimensions: ImageDimensions,
    crop_region: Optional[CropRegion] = None,
    high_fidelity: Optional[bool] = None,
) -> PreprocessingProfile:
    """
    Deriva los parámetros del preprocesador externo.

    GENERAL: ancho 1024, alto proporcional a la región (o a la imagen
    completa), calidad 80 (95 en alta fidelidad).
    CROPPED: 800x360 fijos, calidad 95.
    """
    if image_dimensions.width <= 0 or image_dimensions.height <= 0:
        raise PreprocessingUnavailable(
            f"Dimensiones de imagen inválidas: {image_dimensions.width}x{image_dimensions.height}"
        )

    region = crop_region or CropRegion.full_image(image_dimensions)
    if region.width <= 0 or region.height <= 0:
        raise PreprocessingUnavailable(f"Región de recorte inválida: {region}")

    if mode == DetectionMode.CROPPED:
        return PreprocessingProfile(
            target_width=settings.cropped_target_width,
            target_height=settings.cropped_target_height,
            quality=settings.cropped_quality,
            crop_region=region,
        )

    if high_fidelity is None:
        high_fidelity = settings.high_fidelity

    target_width = settings.general_target_width
    target_height = max(1, round(region.height * target_width / region.width))
    return PreprocessingProfile(
        target_width=target_width,
        target_height=target_height,
        quality=settings.high_fidelity_quality if high_fidelity else settings.general_quality,
        crop_region=region,
    )
