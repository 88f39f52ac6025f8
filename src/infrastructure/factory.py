from src.core.config import settings
from src.domain.Interfaces.image_preprocessor import IImagePreprocessor
from src.domain.Interfaces.text_recognition_engine import ITextRecognitionEngine


def create_text_recognizer() -> ITextRecognitionEngine:
    if settings.ocr_engine.lower() == "synthetic":
        from src.infrastructure.OCR.synthetic_text_recognizer import SyntheticTextRecognizer
        return SyntheticTextRecognizer()
    else:
        # EasyOCR carga el modelo al construirse
        from src.infrastructure.OCR.easyocr_text_recognizer import EasyOCRTextRecognizer
        return EasyOCRTextRecognizer()


def create_image_preprocessor() -> IImagePreprocessor:
    from src.infrastructure.Preprocessing.opencv_image_preprocessor import OpenCVImagePreprocessor
    return OpenCVImagePreprocessor()
