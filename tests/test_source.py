"""Tests for statement splitting."""

import pytest

from llscan.ir import UnterminatedBodyError
from llscan.ir.source import line_start, statement_bounds


def test_single_line_statements():
    text = "\n\n  ; c\nx"
    assert statement_bounds(text) == (4, 7)
    assert statement_bounds(text, 7) == (8, 9)


def test_only_whitespace():
    assert statement_bounds("   \n\t") is None
    assert statement_bounds("") is None


def test_open_brace_continues_statement():
    text = "!0 = !{\n!1,\n!2}\n!3 = !{}"
    assert statement_bounds(text) == (0, 15)


def test_braces_in_strings_and_comments_are_ignored():
    text = '@s = constant [2 x i8] c"{\\00" ; {\n@t = global i32 0\n'
    start, end = statement_bounds(text)
    assert text[start:end] == '@s = constant [2 x i8] c"{\\00" ; {'


def test_define_waits_for_body():
    text = "define void @f()\n{\n  ret void\n}\nnext"
    start, end = statement_bounds(text)
    assert text[start:end].endswith("}")
    assert text[end + 1:] == "next"


def test_unterminated_body():
    with pytest.raises(UnterminatedBodyError) as info:
        statement_bounds("; a\n\ndefine void @f() {\n  ret void\n", 3)
    assert info.value.span.line == 3
    assert info.value.statement == "define void @f() {"


def test_define_without_any_body():
    with pytest.raises(UnterminatedBodyError):
        statement_bounds("define void @f()\n")


def test_line_start():
    text = "ab\ncd"
    assert line_start(text, 0) == 0
    assert line_start(text, 4) == 3
