import logging

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

# Latencia total del pipeline
pipeline_latency = Histogram(
    "pipeline_latency_seconds",
    "Tiempo total de detección de placa",
    ["mode"]
)

# Latencia OCR (motor externo)
ocr_latency = Histogram(
    "ocr_latency_seconds",
    "Tiempo del motor de reconocimiento de texto",
    ["mode"]
)

# Placas detectadas
plates_detected_total = Counter(
    "plates_detected_total",
    "Total de placas detectadas",
    ["mode"]
)

# Fallos por etapa (preprocess / recognize)
detection_failures_total = Counter(
    "detection_failures_total",
    "Total de fallos del pipeline por etapa",
    ["stage"]
)

# Veces que se usó la imagen original por fallo del preprocesado
preprocessing_fallbacks_total = Counter(
    "preprocessing_fallbacks_total",
    "Total de fallbacks a la imagen original"
)


def start_metrics_server(port: int = 9100):
    """Arranca servidor de métricas Prometheus."""
    start_http_server(port)
    logger.info("📊 Prometheus metrics disponible en :%d", port)
