import pytest

from resinscan.detection_result import MatchStrategy
from resinscan.symbol_inference import infer, match_resin_code


def test_isolated_digit():
    assert match_resin_code("bottle 2 recycle") == ("2", MatchStrategy.ISOLATED_DIGIT)


def test_isolated_digit_ignores_longer_numbers():
    # "20" and "12" are not resin codes, "3" is
    code, strategy = match_resin_code("20 12 3")
    assert code == "3"
    assert strategy is MatchStrategy.ISOLATED_DIGIT


def test_isolated_digit_first_in_document_order():
    assert match_resin_code("5 then 1")[0] == "5"


def test_recycling_glyph_next_to_digit():
    assert match_resin_code("♻️5x") is not None
    assert match_resin_code("AB♻5C") == ("5", MatchStrategy.CONTEXTUAL)


def test_resin_keyword():
    assert match_resin_code("RESIN CODE:4X") == ("4", MatchStrategy.CONTEXTUAL)
    assert match_resin_code("plastictype2a") == ("2", MatchStrategy.CONTEXTUAL)


def test_abbreviation_with_digit():
    assert match_resin_code("HDPE2") == ("2", MatchStrategy.CONTEXTUAL)
    assert match_resin_code("1PETE") == ("1", MatchStrategy.CONTEXTUAL)
    assert match_resin_code("LDPE-4A") == ("4", MatchStrategy.CONTEXTUAL)


def test_contextual_takes_earliest_match():
    assert match_resin_code("X6PS and PP5") == ("6", MatchStrategy.CONTEXTUAL)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("pet", "1"),
        ("PETE", "1"),
        ("hdpe", "2"),
        ("PVC", "3"),
        ("LDPE", "4"),
        ("pp", "5"),
        ("PS", "6"),
        ("Other", "7"),
        ("OTHERS", "7"),
    ],
)
def test_bare_abbreviation(text, expected):
    assert match_resin_code(text) == (expected, MatchStrategy.ABBREVIATION)


def test_abbreviation_requires_standalone_word():
    # Whitespace is stripped before the word search, so "PET BOTTLE" is one token
    assert match_resin_code("PET BOTTLE") is None


def test_loose_digit_is_low_precision():
    # Stray digits in an address still count as a detection
    code, strategy = match_resin_code("12345 Main Street Suite 7B")
    assert code == "1"
    assert strategy is MatchStrategy.LOOSE_DIGIT


def test_no_match():
    assert match_resin_code("hello world 890") is None


@pytest.mark.parametrize("text", ["", None, 42, "   "])
def test_empty_or_malformed_text(text):
    guess = infer(text)
    assert guess.code is None
    assert guess.confidence == 0


def test_isolated_digit_beats_abbreviation():
    assert match_resin_code("HDPE 5")[0] == "5"


def test_scenario_pet_label():
    guess = infer("Recycling symbol: PET #1 bottle", blocks=["block"])
    assert guess.code == "1"
    assert guess.strategy is MatchStrategy.ISOLATED_DIGIT
    assert guess.confidence == 95


def test_infer_is_idempotent():
    text = "LDPE 4 squeeze bottle"
    assert infer(text) == infer(text)


def test_accented_letters_are_word_boundaries():
    assert match_resin_code("É1") == ("1", MatchStrategy.ISOLATED_DIGIT)
    assert match_resin_code("RECYCLÉ 5é") == ("5", MatchStrategy.ISOLATED_DIGIT)
    assert match_resin_code("ÉPS") == ("6", MatchStrategy.ABBREVIATION)
