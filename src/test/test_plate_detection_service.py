import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from prometheus_client import REGISTRY

from src.application.plate_detection_service import DetectionRequest, PlateDetectionService
from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.preprocessing_profile import CropRegion
from src.domain.Models.recognized_text import RecognizedText, TextBlock, TextLine
from src.test.fakes import FakePreprocessor, FakeRecognizer


def test_end_to_end_from_recognized_text(peru_text):
    service = PlateDetectionService(recognizer=FakeRecognizer())
    result = service.detect_from_recognized_text(peru_text, DetectionMode.GENERAL)
    assert result.plate_number == "ABC-123"
    assert result.success is True
    assert result.confidence > 0.6
    assert result.all_text == "REPUBLICA DEL PERU ABC-123"
    assert result.error is None
    assert result.processing_time_ms >= 0


def test_exact_canonical_confidence():
    service = PlateDetectionService(recognizer=FakeRecognizer())
    result = service.detect_from_recognized_text(RecognizedText(full_text="ABC123"))
    assert result.confidence == 1.0


def test_no_match_is_not_an_error():
    service = PlateDetectionService(recognizer=FakeRecognizer())
    result = service.detect_from_recognized_text(RecognizedText(full_text="###???"))
    assert result.plate_number == ""
    assert result.confidence == 0
    assert result.success is False
    assert result.error is None


def test_hierarchy_selects_formatted_plate():
    recognized = RecognizedText(
        full_text="XX NOISE ZZZ999 YY",
        blocks=(TextBlock("ZZZ999", 0.95, (TextLine("ZZZ999", 0.99),)),),
    )
    result = PlateDetectionService(recognizer=FakeRecognizer()).detect_from_recognized_text(recognized)
    assert result.plate_number == "ZZZ-999"
    assert result.success is True


def test_cropped_confidence_not_lower_than_general():
    service = PlateDetectionService(recognizer=FakeRecognizer())
    text = RecognizedText(full_text="AB123")
    general = service.detect_from_recognized_text(text, DetectionMode.GENERAL)
    cropped = service.detect_from_recognized_text(text, DetectionMode.CROPPED)
    assert general.confidence > 0
    assert cropped.confidence >= general.confidence


def test_detect_plate_preprocesses_then_recognizes(fake_preprocessor, peru_text):
    recognizer = FakeRecognizer(peru_text)
    service = PlateDetectionService(recognizer=recognizer, preprocessor=fake_preprocessor, high_fidelity=False)

    result = service.detect_plate("file:///tmp/car.jpg")

    ((uri, region, size, quality),) = fake_preprocessor.calls
    assert uri == "file:///tmp/car.jpg"
    assert region == CropRegion(0, 0, 2048, 1536)
    assert size == (1024, 768)
    assert quality == 80
    assert recognizer.uris == ["file:///tmp/car.jpg.processed.jpg"]
    assert result.plate_number == "ABC-123"


def test_detect_plate_cropped_profile(fake_preprocessor, peru_text):
    service = PlateDetectionService(recognizer=FakeRecognizer(peru_text), preprocessor=fake_preprocessor)
    service.detect_plate("plate.jpg", DetectionMode.CROPPED, crop_region=CropRegion(10, 10, 300, 100))
    ((_, region, size, quality),) = fake_preprocessor.calls
    assert region == CropRegion(10, 10, 300, 100)
    assert size == (800, 360)
    assert quality == 95


def test_preprocessing_failure_falls_back_to_original(peru_text):
    recognizer = FakeRecognizer(peru_text)
    service = PlateDetectionService(recognizer=recognizer, preprocessor=FakePreprocessor(fail=True))
    result = service.detect_plate("car.jpg")
    assert recognizer.uris == ["car.jpg"]
    assert result.success is True
    assert result.error is None


def test_already_processed_skips_preprocessing(fake_preprocessor, peru_text):
    recognizer = FakeRecognizer(peru_text)
    service = PlateDetectionService(recognizer=recognizer, preprocessor=fake_preprocessor)
    service.detect_plate("car.jpg", already_processed=True)
    assert fake_preprocessor.calls == []
    assert recognizer.uris == ["car.jpg"]


def test_recognition_failure_is_reported(fake_preprocessor, failing_recognizer):
    service = PlateDetectionService(recognizer=failing_recognizer, preprocessor=fake_preprocessor)
    result = service.detect_plate("car.jpg")
    assert result.success is False
    assert result.plate_number == ""
    assert result.confidence == 0
    assert "motor caído" in result.error
    assert result.error.startswith("Error procesando imagen")
    assert isinstance(result.processing_time_ms, int)
    assert result.processing_time_ms >= 0


def test_detect_many_keeps_order():
    service = PlateDetectionService(recognizer=FakeRecognizer(RecognizedText(full_text="XYZ 789")), max_workers=3)
    try:
        results = service.detect_many([DetectionRequest(f"img-{i}.jpg") for i in range(5)])
    finally:
        service.close()
    assert [r.plate_number for r in results] == ["XYZ-789"] * 5
    assert service.detect_many([]) == []


def test_result_is_immutable(peru_text):
    result = PlateDetectionService(recognizer=FakeRecognizer()).detect_from_recognized_text(peru_text)
    with pytest.raises(AttributeError):
        result.plate_number = "OTHER"


def test_detect_plate_without_recognizer_is_a_failure():
    result = PlateDetectionService().detect_plate("car.jpg", already_processed=True)
    assert result.success is False
    assert "no configurado" in result.error


def test_empty_preprocessed_uri_falls_back_and_is_counted(peru_text, caplog):
    class EmptyUriPreprocessor(FakePreprocessor):
        def preprocess(self, source_uri, crop_region, target_size, quality) -> str:
            return ""

    before = REGISTRY.get_sample_value("preprocessing_fallbacks_total") or 0.0
    recognizer = FakeRecognizer(peru_text)
    service = PlateDetectionService(recognizer=recognizer, preprocessor=EmptyUriPreprocessor())

    with caplog.at_level(logging.WARNING):
        result = service.detect_plate("car.jpg")

    assert recognizer.uris == ["car.jpg"]
    assert result.success is True
    assert REGISTRY.get_sample_value("preprocessing_fallbacks_total") == before + 1
    assert "URI vacía" in caplog.text


def test_detect_many_is_usable_after_close_and_concurrently():
    service = PlateDetectionService(recognizer=FakeRecognizer(RecognizedText(full_text="ABC 123")), max_workers=2)
    service.close()
    requests = [DetectionRequest(f"img-{i}.jpg") for i in range(4)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        batches = [pool.submit(service.detect_many, requests) for _ in range(4)]
        service.close()
        results = [b.result() for b in batches]

    assert all(r.plate_number == "ABC-123" for batch in results for r in batch)
