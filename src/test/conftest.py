import pytest

from src.domain.Exceptions.pipeline_errors import RecognitionFailure
from src.domain.Models.recognized_text import RecognizedText
from src.test.fakes import FakePreprocessor, FakeRecognizer


@pytest.fixture
def peru_text():
    return RecognizedText(full_text="REPUBLICA DEL PERU ABC-123")


@pytest.fixture
def fake_preprocessor():
    return FakePreprocessor()


@pytest.fixture
def failing_recognizer():
    return FakeRecognizer(error=RecognitionFailure("motor caído"))
