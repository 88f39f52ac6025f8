# src/api/schemas.py
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.preprocessing_profile import CropRegion
from src.domain.Models.recognized_text import RecognizedText, TextBlock, TextLine


class TextLineIn(BaseModel):
    text: str = ""
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)


class TextBlockIn(BaseModel):
    text: str = ""
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    lines: List[TextLineIn] = Field(default_factory=list)


class RecognizedTextIn(BaseModel):
    full_text: str = ""
    blocks: List[TextBlockIn] = Field(default_factory=list)

    def to_domain(self) -> RecognizedText:
        # las confianzas ausentes pasan a 1.0 en RecognizedText.from_dict
        return RecognizedText.from_dict(self.model_dump())


class RecognizedTextRequest(BaseModel):
    recognized_text: RecognizedTextIn
    mode: DetectionMode = DetectionMode.GENERAL


class CropRegionIn(BaseModel):
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    def to_domain(self) -> CropRegion:
        return CropRegion(x=self.x, y=self.y, width=self.width, height=self.height)


class DetectImageRequest(BaseModel):
    image_uri: str
    mode: DetectionMode = DetectionMode.GENERAL
    crop_region: Optional[CropRegionIn] = None
    already_processed: bool = False


class DetectionResultOut(BaseModel):
    plate_number: str
    confidence: float
    success: bool
    all_text: Optional[str] = None
    error: Optional[str] = None
    processing_time_ms: int


class PlateValidationOut(BaseModel):
    plate: str
    valid: bool
    formatted: str
