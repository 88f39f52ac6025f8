from typing import List, Optional, Tuple

from src.domain.Exceptions.pipeline_errors import PreprocessingUnavailable
from src.domain.Interfaces.image_preprocessor import IImagePreprocessor
from src.domain.Interfaces.text_recognition_engine import ITextRecognitionEngine
from src.domain.Models.preprocessing_profile import CropRegion, ImageDimensions
from src.domain.Models.recognized_text import RecognizedText


class FakePreprocessor(IImagePreprocessor):
    def __init__(self, dimensions=ImageDimensions(2048, 1536), fail: bool = False):
        self.dimensions = dimensions
        self.fail = fail
        self.calls: List[Tuple[str, Optional[CropRegion], Tuple[int, int], int]] = []

    def get_image_size(self, uri: str) -> ImageDimensions:
        if self.fail:
            raise PreprocessingUnavailable(f"no se puede leer {uri}")
        return self.dimensions

    def preprocess(self, source_uri, crop_region, target_size, quality) -> str:
        self.calls.append((source_uri, crop_region, target_size, quality))
        return f"{source_uri}.processed.jpg"


class FakeRecognizer(ITextRecognitionEngine):
    def __init__(self, recognized: Optional[RecognizedText] = None, error: Optional[Exception] = None):
        self.recognized = recognized or RecognizedText(full_text="")
        self.error = error
        self.uris: List[str] = []

    def recognize(self, image_uri: str) -> RecognizedText:
        self.uris.append(image_uri)
        if self.error is not None:
            raise self.error
        return self.recognized


