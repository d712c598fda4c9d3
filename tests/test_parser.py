import pytest

from rpncalc.parser import NUMBER, WORD, tokenize


def test_numbers_and_words():
    assert tokenize("3 4 +") == [(NUMBER, "3"), (NUMBER, "4"), (WORD, "+")]


def test_blank_lines():
    assert tokenize("") == []
    assert tokenize("   \t ") == []


@pytest.mark.parametrize("text", ["-5", "+5", "1.5", ".5", "6.02e23",
                                  "0x1f", "0b101", "2.2k", "inf"])
def test_number_tokens(text):
    assert tokenize(text) == [(NUMBER, text)]


@pytest.mark.parametrize("text", ["-", "+", "sqrt", "d2r", "1.5e", "2x",
                                  "NEG"])
def test_word_tokens(text):
    assert tokenize(text) == [(WORD, text)]


def test_comments():
    assert tokenize("1 2 # add them later") == [(NUMBER, "1"), (NUMBER, "2")]
    assert tokenize("5#five") == [(NUMBER, "5")]
    assert tokenize("# nothing but a comment") == []


def test_any_whitespace_separates():
    assert tokenize("  2\t3   swap ") == [(NUMBER, "2"), (NUMBER, "3"),
                                          (WORD, "swap")]
