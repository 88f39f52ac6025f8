import json
import logging
from typing import List, Optional, Sequence

import click

from src.application.plate_detection_service import DetectionRequest, PlateDetectionService
from src.core.config import settings
from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.detection_result import PlateDetectionResult
from src.domain.Models.preprocessing_profile import CropRegion
from src.infrastructure.factory import create_image_preprocessor, create_text_recognizer
from src.infrastructure.OCR.synthetic_text_recognizer import SyntheticTextRecognizer
from src.monitoring.metrics import start_metrics_server

logger = logging.getLogger(__name__)


def _configure_logging():
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _parse_crop(value: Optional[str]) -> Optional[CropRegion]:
    if not value:
        return None
    try:
        x, y, w, h = (int(v) for v in value.split(","))
    except ValueError:
        raise click.BadParameter("usar el formato x,y,width,height", param_hint="--crop")
    return CropRegion(x=x, y=y, width=w, height=h)


def run_self_test(plates: Optional[Sequence[str]] = None, seed: Optional[int] = None, runs: int = 1) -> List[PlateDetectionResult]:
    """
    Corre el pipeline completo sobre el motor sintético (sin imagen real ni
    preprocesado). Con `seed` el resultado es reproducible.
    """
    service = PlateDetectionService(recognizer=SyntheticTextRecognizer(plates=plates, seed=seed))
    try:
        return [service.detect_plate(f"synthetic://{i}", already_processed=True) for i in range(runs)]
    finally:
        service.close()


@click.group()
def cli():
    """Detección de placas a partir de imágenes."""
    _configure_logging()


@cli.command()
@click.argument("images", nargs=-1, required=True)
@click.option("--mode", type=click.Choice([m.value for m in DetectionMode]), default=DetectionMode.GENERAL.value,
              help="general = frame completo, cropped = placa ya recortada")
@click.option("--crop", default=None, help="Región x,y,width,height a recortar antes de redimensionar")
@click.option("--already-processed", is_flag=True, help="No preprocesar las imágenes")
@click.option("--metrics-port", type=int, default=None, help="Exponer métricas Prometheus en este puerto")
def detect(images, mode, crop, already_processed, metrics_port):
    if metrics_port:
        start_metrics_server(port=metrics_port)

    region = _parse_crop(crop)
    service = PlateDetectionService(
        recognizer=create_text_recognizer(),
        preprocessor=create_image_preprocessor(),
    )
    requests = [DetectionRequest(img, DetectionMode(mode), region, already_processed) for img in images]

    logger.info("🚀 Procesando %d imágenes (modo=%s)", len(requests), mode)
    try:
        results = service.detect_many(requests)
    finally:
        service.close()

    for image, result in zip(images, results):
        click.echo(json.dumps({"image": image, **result.to_dict()}, ensure_ascii=False))


@cli.command("self-test")
@click.option("--plate", "plates", multiple=True, help="Placa sintética (repetible)")
@click.option("--seed", type=int, default=None, help="Semilla para resultados reproducibles")
@click.option("--runs", type=int, default=1, show_default=True)
def self_test(plates, seed, runs):
    for result in run_self_test(plates or None, seed, runs):
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))


def main():
    cli()


if __name__ == "__main__":
    main()
