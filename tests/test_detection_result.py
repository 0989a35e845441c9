import pytest

from resinscan.detection_result import (
    DetectionMethod,
    DetectionResult,
    MatchStrategy,
    RecognitionResult,
    SymbolGuess,
)


def test_recognition_result_normalizes_missing_fields():
    result = RecognitionResult.from_raw(None, None)
    assert result.text == ""
    assert result.blocks == ()
    assert not result.has_blocks

    assert RecognitionResult.from_raw(b"bytes", ["b"]).text == ""
    assert RecognitionResult.from_raw("x", ["b"]).has_blocks


def test_recognition_result_constructor_normalizes():
    assert RecognitionResult(text=None).text == ""
    assert RecognitionResult(text=42).text == ""

    result = RecognitionResult(text="PET 1", blocks=None)
    assert result.blocks == ()
    assert not result.has_blocks

    assert RecognitionResult(text="x", blocks=["a", "b"]).blocks == ("a", "b")
    assert RecognitionResult(text="x", blocks=7).blocks == ()


@pytest.mark.parametrize(
    "code,confidence",
    [("8", 70), ("1", 101), ("1", -1), (None, 40), ("1", 70.5)],
)
def test_invalid_results_rejected(code, confidence):
    with pytest.raises(ValueError):
        DetectionResult(code=code, confidence=confidence, raw_text="", method=DetectionMethod.TEXT_RECOGNITION)


def test_from_guess_normalizes_missing_code():
    result = DetectionResult.from_guess(
        SymbolGuess(code=None, confidence=80, strategy=MatchStrategy.LOOSE_DIGIT),
        raw_text=None,
        method=DetectionMethod.TEXT_RECOGNITION,
    )
    assert result.confidence == 0
    assert result.strategy is None
    assert result.raw_text == ""


def test_with_tip_returns_copy():
    result = DetectionResult(code="4", confidence=70, raw_text="LDPE", method=DetectionMethod.TEXT_RECOGNITION)
    tipped = result.with_tip("Move closer")
    assert result.tip is None
    assert tipped.tip == "Move closer"
    assert tipped.code == "4"


def test_resin_info_and_pretty():
    result = DetectionResult(code="6", confidence=80, raw_text="PS 6", method=DetectionMethod.TEXT_RECOGNITION)
    assert result.resin_info.name == "PS"
    assert "PS (Polystyrene)" in result.pretty()
    assert "text-recognition" in result.pretty()
