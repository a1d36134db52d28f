from __future__ import annotations

import logging

import pytest

from parsekit import END, ExpectationError, Scanner, StalledRuleError, UsageError, tokenize


def _scanner(text: str) -> Scanner[str]:
    return Scanner(text, lambda s: None)


def _word_rule(s: Scanner[str]) -> None:
    s.skip_while(str.isspace)
    if s.at_end:
        s.add_end_token("eof")
        return
    start = s.mark()
    s.skip_while(lambda c: not c.isspace())
    s.add_token(s.make_token("word", start))


def test_peek_does_not_advance() -> None:
    s = _scanner("ab")
    assert s.peek() == "a"
    assert s.peek() == "a"
    assert s.position == 0
    assert s.peek(2) == "ab"


def test_peek_pads_with_end_marker() -> None:
    s = _scanner("ab")
    assert s.peek(4) == "ab" + END
    assert s.peek(10**12) == "ab" + END
    assert s.peek(0) == ""
    s.read(2)
    assert s.peek() == END
    assert s.peek(2) == END


def test_read_tracks_line_and_column() -> None:
    s = _scanner("ab\ncd")
    assert s.read() == "a"
    assert (s.line, s.column, s.position) == (1, 1, 1)
    s.read(2)
    assert s.current == "\n"
    assert (s.line, s.column, s.position) == (2, 0, 3)
    assert s.read() == "c"
    assert (s.line, s.column) == (2, 1)


def test_read_at_end_returns_marker_and_consumes_end() -> None:
    s = _scanner("a")
    s.read()
    assert s.at_end
    assert not s.is_end_of_file()
    assert s.read() == END
    assert s.position == 1
    assert s.current == END
    assert s.is_end_of_file()


def test_read_n_stops_early_without_consuming_end() -> None:
    s = _scanner("abc")
    assert s.read(5) == "abc"
    assert s.at_end
    assert not s.is_end_of_file()


def test_read_while_and_skip_while() -> None:
    s = _scanner("123abc")
    assert s.read_while(str.isdigit) == "123"
    assert s.read_while(str.isdigit) == ""
    s.skip_while(str.isalpha)
    assert s.peek() == END


def test_accept_and_is_match() -> None:
    s = _scanner("Ab")
    assert s.is_match("A")
    assert not s.accept("a")
    assert s.accept("a", ignore_case=True)
    assert s.position == 1
    assert not s.is_match("x")


def test_expect_consumes_or_raises() -> None:
    s = _scanner("xy")
    assert s.expect("x") == "x"
    assert s.expect("Y", ignore_case=True) == "y"
    with pytest.raises(ExpectationError) as e:
        s.expect("z")
    assert e.value.expected == "z"
    assert e.value.found == END
    assert s.position == 2


def test_read_line() -> None:
    s = _scanner("first\nsecond\n")
    assert s.read_line() == "first"
    assert s.peek() == "\n"
    s.skip()
    assert s.read_line(consume_newline=True) == "second"
    assert s.at_end
    assert s.line == 3


def test_read_escaped() -> None:
    s = _scanner(r'"a\"b" rest')
    assert s.read_escaped('"', "\\") == ('a"b', True)
    assert s.peek() == " "


def test_read_escaped_unterminated() -> None:
    s = _scanner('"abc')
    assert s.read_escaped('"', "\\") == ("abc", False)
    assert s.at_end


@pytest.mark.parametrize(
    ("text", "expected", "rest"),
    [
        ("42", ("42", False), END),
        ("3.14+", ("3.14", True), "+"),
        ("1.2.3", ("1.2", True), "."),
        ("x", ("", False), "x"),
        ("2\u00b2+1", ("2", False), "\u00b2"),
        ("\u0663", ("", False), "\u0663"),
    ],
)
def test_read_number(text: str, expected: tuple[str, bool], rest: str) -> None:
    s = _scanner(text)
    assert s.read_number() == expected
    assert s.peek() == rest


def test_make_token_position_starts_at_mark() -> None:
    s = _scanner("a\nbc d")
    s.read(2)
    start = s.mark()
    s.read(2)
    tok = s.make_token("word", start)
    assert tok.text == "bc"
    assert (tok.position.line, tok.position.column) == (2, 0)
    assert (tok.position.start, tok.position.length, tok.position.end) == (2, 2, 4)
    assert not tok.position.is_multiline


def test_make_token_with_replacement_text_keeps_raw_span() -> None:
    s = _scanner('"a\\nb"')
    start = s.mark()
    text, _ = s.read_escaped('"', "\\")
    tok = s.make_token("string", start, text)
    assert tok.text == "anb"
    assert tok.position.length == 6


def test_add_token_and_add_error_reject_bad_arguments() -> None:
    s = _scanner("a")
    with pytest.raises(UsageError):
        s.add_token(None)  # type: ignore[arg-type]
    tok = s.make_token("word", s.mark())
    with pytest.raises(UsageError):
        s.add_error(None, "x")  # type: ignore[arg-type]
    with pytest.raises(UsageError):
        s.add_error(tok, "  ")


def test_add_end_token_before_end_is_usage_error() -> None:
    s = _scanner("a")
    with pytest.raises(UsageError):
        s.add_end_token("eof")
    assert s.position == 0


def test_tokenize_emits_single_end_token() -> None:
    res = tokenize("one two\nthree", _word_rule)
    assert res.errors is None
    assert res.tokens is not None
    assert [t.text for t in res.tokens] == ["one", "two", "three", ""]
    assert [t.kind for t in res.tokens][-1] == "eof"
    assert res.tokens[2].position.line == 2
    assert res.tokens[-1].position.start == len("one two\nthree")


def test_tokenize_empty_input() -> None:
    res = tokenize("", _word_rule)
    assert res.tokens is not None
    assert len(res.tokens) == 1
    assert res.tokens[0].kind == "eof"


def test_errors_are_kept_alongside_tokens() -> None:
    def rule(s: Scanner[str]) -> None:
        if s.at_end:
            s.add_end_token("eof")
            return
        start = s.mark()
        ch = s.read()
        tok = s.make_token("char", start)
        if ch == "!":
            s.add_error(tok, "letter", "bang not allowed")
        else:
            s.add_token(tok)

    res = tokenize("a!b", rule, source="bang.txt")
    assert res.tokens is not None
    assert [t.text for t in res.tokens] == ["a", "b", ""]
    assert res.errors is not None
    [err] = res.errors
    assert (err.line, err.column, err.expected, err.found) == (1, 1, "letter", "!")
    assert res.source == "bang.txt"


def test_stalled_rule_raises() -> None:
    with pytest.raises(StalledRuleError):
        tokenize("abc", lambda s: None)


def test_tokenize_runs_once() -> None:
    s = Scanner("a", _word_rule)
    s.tokenize()
    with pytest.raises(UsageError):
        s.tokenize()


def test_tokenize_logs_summary(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="parsekit.scanner"):
        tokenize("a b", _word_rule, source="words")
    assert "words: tokenized 3 tokens (0 errors)" in caplog.text
