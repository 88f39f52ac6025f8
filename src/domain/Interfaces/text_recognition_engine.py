from abc import ABC, abstractmethod

from src.domain.Models.recognized_text import RecognizedText


class ITextRecognitionEngine(ABC):
    """
    Motor OCR externo que extrae el texto jerárquico de una imagen.
    """
    @abstractmethod
    def recognize(self, image_uri: str) -> RecognizedText:
        """
        Reconoce el texto de la imagen.
        Lanza RecognitionFailure (u otra excepción) si el motor falla.
        """
        pass
