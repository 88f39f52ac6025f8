import json

from click.testing import CliRunner

from src.core.config import settings
from src.workers.main_worker import cli, run_self_test


def _json_lines(output):
    return [json.loads(l) for l in output.splitlines() if l.startswith("{")]


def test_run_self_test_is_reproducible():
    first = run_self_test(["ABC-123", "XYZ-789", "DEF-456"], seed=7, runs=5)
    second = run_self_test(["ABC-123", "XYZ-789", "DEF-456"], seed=7, runs=5)
    assert [r.plate_number for r in first] == [r.plate_number for r in second]
    assert all(r.success for r in first)


def test_self_test_command():
    result = CliRunner().invoke(cli, ["self-test", "--plate", "A12-345", "--seed", "3"])
    assert result.exit_code == 0, result.output
    (data,) = _json_lines(result.stdout)
    assert data["plate_number"] == "A12345"
    assert data["success"] is True


def test_detect_command_with_synthetic_engine(monkeypatch):
    monkeypatch.setattr(settings, "ocr_engine", "synthetic")
    monkeypatch.setattr(settings, "synthetic_plates", ["DEF-456"])
    result = CliRunner().invoke(cli, ["detect", "a.jpg", "b.jpg", "--already-processed", "--mode", "cropped"])
    assert result.exit_code == 0, result.output
    lines = _json_lines(result.stdout)
    assert [l["image"] for l in lines] == ["a.jpg", "b.jpg"]
    assert {l["plate_number"] for l in lines} == {"DEF-456"}


def test_detect_command_rejects_bad_crop():
    result = CliRunner().invoke(cli, ["detect", "a.jpg", "--crop", "1,2,3"])
    assert result.exit_code == 2
