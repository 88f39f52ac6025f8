import logging
from functools import lru_cache

from fastapi import Depends, FastAPI

from src.api.schemas import (
    DetectImageRequest, DetectionResultOut, PlateValidationOut, RecognizedTextRequest,
)
from src.application.plate_detection_service import PlateDetectionService
from src.core.config import settings
from src.domain.Services.plate_formatter import format_plate, validate_format
from src.infrastructure.factory import create_image_preprocessor, create_text_recognizer

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)


@lru_cache(maxsize=1)
def get_detection_service() -> PlateDetectionService:
    logger.info("Creando PlateDetectionService (ocr_engine=%s)", settings.ocr_engine)
    return PlateDetectionService(
        recognizer=create_text_recognizer(),
        preprocessor=create_image_preprocessor(),
    )


@lru_cache(maxsize=1)
def get_text_detection_service() -> PlateDetectionService:
    # solo agregación: no necesita motor OCR ni preprocesador
    return PlateDetectionService()


@app.get("/health")
def health_check():
    return {"status": "ok", "env": settings.app_env}


@app.post("/plates/recognized-text", response_model=DetectionResultOut)
def detect_from_recognized_text(
    body: RecognizedTextRequest,
    service: PlateDetectionService = Depends(get_text_detection_service),
):
    result = service.detect_from_recognized_text(body.recognized_text.to_domain(), body.mode)
    return result.to_dict()


@app.post("/plates/detect", response_model=DetectionResultOut)
def detect_plate(
    body: DetectImageRequest,
    service: PlateDetectionService = Depends(get_detection_service),
):
    result = service.detect_plate(
        body.image_uri,
        body.mode,
        crop_region=body.crop_region.to_domain() if body.crop_region else None,
        already_processed=body.already_processed,
    )
    return result.to_dict()


@app.get("/plates/{plate}/validation", response_model=PlateValidationOut)
def validate_plate(plate: str):
    return {"plate": plate, "valid": validate_format(plate), "formatted": format_plate(plate)}
