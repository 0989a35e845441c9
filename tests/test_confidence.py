from resinscan.confidence import estimate_confidence
from resinscan.detection_result import RecognitionResult


def _result(text, blocks=()):
    return RecognitionResult.from_raw(text, blocks)


def test_no_code_is_zero():
    assert estimate_confidence(_result("PET 1", ["b"]), None) == 0
    assert estimate_confidence(_result(""), None) == 0


def test_base_score_clamped_to_minimum():
    # 70 - 8 (medium length), no other signals -> clamped to 65
    text = "x" * 40 + "3" + "x" * 19
    assert estimate_confidence(_result(text), "3") == 65


def test_short_isolated_digit_with_keyword():
    # 70 + 8 + 15 + 10 = 103 -> 95
    assert estimate_confidence(_result("PP 5"), "5") == 95


def test_long_text_penalty():
    # 70 + 15 (isolated) - 15 (> 100 chars) = 70
    text = "a " * 30 + "4 " + "b " * 30
    assert len(text) > 100
    assert estimate_confidence(_result(text), "4") == 70


def test_medium_text_penalty():
    # 70 + 15 (isolated) - 8 (> 50 chars) = 77
    text = "z" * 30 + " 2 " + "z" * 30
    assert 50 < len(text) <= 100
    assert estimate_confidence(_result(text), "2") == 77


def test_keyword_bonus_counted_once():
    # 70 + 8 + 15 = 93 (length 23..50, no blocks)
    text = "HDPE PLASTIC RESIN 2 ok"
    assert estimate_confidence(_result(text), "2") == 93


def test_blocks_bonus():
    text = "abcdefghij 6 klmnopqrstu"
    without = estimate_confidence(_result(text), "6")
    with_blocks = estimate_confidence(_result(text, ["block"]), "6")
    assert without == 85
    assert with_blocks == 95


def test_glyph_counts_as_keyword():
    text = "abcdefghij ♻ 3 klmnopqrst"
    assert estimate_confidence(_result(text), "3") == 93


def test_monotonic_in_signals():
    base_text = "zzzzzzzzzzzzzzzzzzzzzz7zzzzzzzzz"
    scores = [
        estimate_confidence(_result(base_text), "7"),
        estimate_confidence(_result(base_text, ["b"]), "7"),
        estimate_confidence(_result(base_text.replace("zzz", "PVC", 1), ["b"]), "7"),
        estimate_confidence(_result(base_text.replace("z7z", " 7 ").replace("zzz", "PVC", 1), ["b"]), "7"),
    ]
    assert scores == sorted(scores)


def test_present_code_always_in_range():
    samples = ["", "1", "x" * 500 + " 1", "PET 1 " * 40, "1"]
    for text in samples:
        for blocks in ((), ("b",)):
            score = estimate_confidence(_result(text, blocks), "1")
            assert 65 <= score <= 95


def test_estimate_is_deterministic():
    r = _result("Plastic code 5 tub", ["b"])
    assert estimate_confidence(r, "5") == estimate_confidence(r, "5")


def test_accented_neighbour_still_isolates_code():
    # 70 + 15 (isolated) + 10 (short)
    assert estimate_confidence(_result("É1"), "1") == 95
