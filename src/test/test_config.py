import pytest

from src.core.config import Settings
from src.domain.Models.detection_mode import DetectionMode
from src.domain.Models.plate_candidate import PlateCandidate, ShapeTier
from src.domain.Services.confidence_scorer import ConfidenceScorer


def test_defaults():
    s = Settings()
    assert s.general_target_width == 1024
    assert (s.cropped_target_width, s.cropped_target_height) == (800, 360)
    assert s.loose_tier_multiplier == 0.7


def test_env_override(monkeypatch):
    monkeypatch.setenv("LOOSE_TIER_MULTIPLIER", "0.5")
    monkeypatch.setenv("OCR_ENGINE", "synthetic")
    s = Settings()
    assert s.loose_tier_multiplier == 0.5
    assert s.ocr_engine == "synthetic"


def test_scorer_override():
    scorer = ConfidenceScorer(loose_multiplier=0.5)
    candidate = PlateCandidate(raw_match="AB123", normalized="AB123", shape_tier=ShapeTier.LOOSE)
    assert scorer.score(candidate, "AB123", DetectionMode.GENERAL) == pytest.approx(0.2)
