import io

import pytest

from stunkit.prettyprint import pretty_format, pretty_print, split_paragraphs, wrap_paragraph

SAMPLE = (
    "Usage: stunclient [OPTIONS] server [port]\n"
    "\n"
    "    --mode MODE where MODE is either basic, full, behavior or filtering\n"
    "    --family IPVERSION where IPVERSION is either 4 or 6"
)


def test_split_handles_all_line_endings():
    assert split_paragraphs("a\nb\r\nc\rd") == ["a", "b", "c", "d"]


def test_split_trailing_newline_adds_nothing():
    assert split_paragraphs("a\n") == ["a"]
    assert split_paragraphs("a\r\n") == ["a"]


def test_split_keeps_blank_lines():
    assert split_paragraphs("a\n\nb") == ["a", "", "b"]


@pytest.mark.parametrize("text", ["", None])
def test_split_empty(text):
    assert split_paragraphs(text) == []


def test_wrap_worked_example():
    assert wrap_paragraph("hello world foo", 11) == ["hello world", "foo"]


@pytest.mark.parametrize("width", [5, 10, 20, 40, 80])
def test_wrap_preserves_words_and_respects_width(width):
    paragraph = "the quick brown fox jumps over the lazy dog again and again"
    lines = wrap_paragraph(paragraph, width)
    assert " ".join(lines).split() == paragraph.split()
    for line in lines:
        assert len(line) <= width or len(line.split()) == 1


def test_wrap_long_word_gets_own_line():
    word = "x" * 30
    lines = wrap_paragraph("a " + word + " b", 10)
    assert word in lines


def test_wrap_keeps_indent_on_each_line():
    lines = wrap_paragraph("    alpha beta gamma delta epsilon", 16)
    assert len(lines) > 1
    for line in lines:
        assert line.startswith("    ")
        assert not line.startswith("     ")


def test_wrap_indent_capped_below_width():
    lines = wrap_paragraph(" " * 20 + "word", 8)
    assert lines[0].endswith("word")
    assert len(lines[0]) - len("word") == 7


def test_wrap_empty_paragraph_is_one_empty_line():
    assert wrap_paragraph("   ", 40) == [""]


def test_wrap_zero_width_prints_nothing():
    assert wrap_paragraph("some words", 0) == []


def test_pretty_format_lines_end_with_newline():
    out = pretty_format(SAMPLE, 30)
    assert out.endswith("\n")
    for line in out.splitlines():
        assert len(line) <= 30 or len(line.split()) == 1


def test_pretty_format_keeps_blank_paragraph():
    out = pretty_format(SAMPLE, 200)
    assert out.splitlines()[1] == ""
    assert len(out.splitlines()) == len(split_paragraphs(SAMPLE))


def test_pretty_print_writes_formatted_text():
    buffer = io.StringIO()
    pretty_print(SAMPLE, 25, buffer)
    assert buffer.getvalue() == pretty_format(SAMPLE, 25)


def test_pretty_print_defaults_to_stdout(capsys):
    pretty_print("one two", 80)
    assert capsys.readouterr().out == "one two\n"