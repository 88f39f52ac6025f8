# src/domain/Exceptions/pipeline_errors.py


class PlateDetectionError(Exception):
    """Base de los errores del pipeline de detección de placas."""


class PreprocessingUnavailable(PlateDetectionError):
    """
    No se pudo leer el tamaño de la imagen o falló el preprocesador externo.
    El pipeline se recupera usando la imagen original.
    """


class RecognitionFailure(PlateDetectionError):
    """
    Falló el motor de reconocimiento de texto. Es fatal para la invocación
    y se reporta en `PlateDetectionResult.error`.
    """
