import io

import pytest

from sentpres.slides import NoSlidesError, Slide, load, parse_slides


def test_two_slides():
    slides = parse_slides(["Hello\n", "World\n", "\n", "Second\n"])
    assert [s.lines for s in slides] == [["Hello", "World"], ["Second"]]


def test_consecutive_blank_lines_and_comments_skipped():
    slides = parse_slides(["\n", "# note\n", "\n", "A\n", "\n", "\n", "#x\n", "B\n"])
    assert [s.lines for s in slides] == [["A"], ["B"]]


def test_comment_inside_slide_does_not_split():
    slides = parse_slides(["one\n", "# hidden\n", "two\n"])
    assert len(slides) == 1
    assert slides[0].lines == ["one", "two"]


def test_backslash_escape():
    slides = parse_slides(["\\#not a comment\n", "\\\\x\n"])
    assert slides[0].lines == ["#not a comment", "\\x"]


def test_embed_on_first_line():
    slide = parse_slides(["@picture.png\n"])[0]
    assert slide.embed == "picture.png"
    assert slide.lines == ["@picture.png"]


def test_escaped_at_is_not_embed():
    slide = parse_slides(["\\@picture.png\n"])[0]
    assert slide.embed is None
    assert slide.lines == ["@picture.png"]


def test_at_on_later_line_is_text():
    slide = parse_slides(["title\n", "@picture.png\n"])[0]
    assert slide.embed is None


def test_bare_at_has_no_embed():
    slide = parse_slides(["@\n"])[0]
    assert slide.embed is None


def test_last_line_without_newline():
    slides = parse_slides(["a\n", "\n", "b"])
    assert slides[-1].lines == ["b"]


@pytest.mark.parametrize("lines", [[], ["\n", "\n"], ["# only\n", "\n"]])
def test_no_slides(lines):
    with pytest.raises(NoSlidesError):
        parse_slides(lines)


def test_load_from_stream():
    stream = io.StringIO("first\n\nsecond\nline\n")
    slides = load(stream)
    assert slides == [Slide(["first"]), Slide(["second", "line"])]