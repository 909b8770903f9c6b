## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from stackline.lexer import Lexer, tokenize
from stackline.types import Token, TokenKind, INT64_MIN, INT64_MAX
from stackline.errors import LineParseError, LineAssertionError


@pytest.mark.parametrize("line, count", [
    ("34 35 + print", 4),
    ("print", 1),
    ("   1    2\t3  ", 3),
    ("", 0),
    ("    ", 0),
])
def test_token_count_matches_segments_and_next_calls(line, count):
    lexer = Lexer(line)
    assert lexer.token_count() == count
    for _ in range(count):
        lexer.next()
    assert lexer.exhausted
    with pytest.raises(LineAssertionError):
        lexer.next()


def test_token_count_is_not_updated_while_consuming():
    lexer = Lexer("1 2 3")
    lexer.next()
    lexer.next()
    assert lexer.token_count() == 3


def test_classifies_integers_and_words():
    tokens = tokenize("34 35 + print")
    assert tokens == [Token(TokenKind.INTEGER, 34), Token(TokenKind.INTEGER, 35),
                      Token(TokenKind.WORD, "+"), Token(TokenKind.WORD, "print")]
    assert [t.column for t in tokens] == [1, 4, 7, 9]


def test_mixed_alphanumeric_is_a_word_unless_all_digits():
    # Only segments made entirely of digits are integers, so `12a` and `a12` stay words.
    assert tokenize("12a a12 12") == [Token(TokenKind.WORD, "12a"), Token(TokenKind.WORD, "a12"),
                                      Token(TokenKind.INTEGER, 12)]


def test_signed_literals_are_integers():
    assert tokenize("-5 +7 -0") == [Token(TokenKind.INTEGER, -5), Token(TokenKind.INTEGER, 7),
                                    Token(TokenKind.INTEGER, 0)]


def test_lone_signs_and_non_ascii_digits_are_words():
    assert tokenize("+ - -a 5- ²") == [Token(TokenKind.WORD, "+"), Token(TokenKind.WORD, "-"),
                                       Token(TokenKind.WORD, "-a"), Token(TokenKind.WORD, "5-"),
                                       Token(TokenKind.WORD, "²")]


def test_int64_bounds_are_accepted():
    assert tokenize(f"{INT64_MAX} {INT64_MIN}") == [Token(TokenKind.INTEGER, INT64_MAX),
                                                    Token(TokenKind.INTEGER, INT64_MIN)]


def test_literal_below_int64_min_raises_parse_error():
    with pytest.raises(LineParseError) as excinfo:
        tokenize(str(INT64_MIN - 1))
    assert excinfo.value.token == str(INT64_MIN - 1)


def test_overflowing_literal_raises_parse_error():
    lexer = Lexer("1 99999999999999999999 print", filename="<test>")
    lexer.next()
    with pytest.raises(LineParseError) as excinfo:
        lexer.next()
    assert excinfo.value.token == "99999999999999999999"
    assert excinfo.value.column == 3
    assert excinfo.value.filename == "<test>"


def test_position_advances_past_terminating_whitespace():
    lexer = Lexer("34 35")
    lexer.next()
    assert lexer.position == 3
    lexer.next()
    assert lexer.position == len(lexer.text)


def test_history_records_every_token_in_order():
    lexer = Lexer("1 + print")
    produced = [lexer.next() for _ in range(lexer.token_count())]
    assert lexer.tokens == produced


def test_relexing_same_text_is_identical():
    line = "1 2 3 + + print foo 12a"
    assert list(Lexer(line)) == list(Lexer(line))


def test_iteration_stops_at_token_count():
    lexer = Lexer("5 print 7 print")
    assert [t.text for t in lexer] == ["5", "print", "7", "print"]
    assert list(lexer) == []
