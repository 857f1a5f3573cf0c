import struct

import pytest

from sentpres.app import VERSION, UsageError, Viewer, main, parse_args
from sentpres.config import BACKGROUND, FOREGROUND, PROGRESS_HEIGHT
from sentpres.drw import FontSet, parse_color
from sentpres.presenter import Presentation
from sentpres.slides import load, parse_slides

SIZE = (160, 120)


@pytest.fixture(scope="module")
def fontsets():
    return [FontSet.load([], size) for size in (6, 10, 14)]


def make_viewer(fontsets, texts=("a", "b", "c"), filename=None, size=SIZE):
    lines = []
    for text in texts:
        lines.extend([text + "\n", "\n"])
    presentation = Presentation(parse_slides(lines), filename)
    return Viewer(presentation, size=size, fontsets=fontsets)


# parse_args


def test_no_arguments_reads_stdin():
    assert parse_args([]) == (False, None)


def test_dash_reads_stdin():
    assert parse_args(["-"]) == (False, None)


def test_file_argument():
    assert parse_args(["talk.txt"]) == (False, "talk.txt")


def test_version_flag():
    assert parse_args(["-v"]) == (True, None)


def test_version_flag_first_in_group():
    assert parse_args(["-vx"]) == (True, None)


def test_unknown_flag_raises():
    with pytest.raises(UsageError):
        parse_args(["-x"])


def test_unknown_flag_before_version_raises():
    with pytest.raises(UsageError):
        parse_args(["-xv"])


def test_double_dash_ends_options():
    assert parse_args(["--", "-v"]) == (False, "-v")


# main


def test_main_version(capsys):
    assert main(["-v"]) == 0
    assert capsys.readouterr().err.strip().endswith("-" + VERSION)


def test_main_usage(capsys):
    assert main(["-x"]) == 1
    assert capsys.readouterr().err.startswith("usage:")


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing.txt"
    assert main([str(missing)]) == 1
    assert "Unable to open" in capsys.readouterr().err


def test_main_no_slides(tmp_path, capsys):
    path = tmp_path / "empty.txt"
    path.write_text("# only a comment\n\n")
    assert main([str(path)]) == 1
    assert "No slides in file" in capsys.readouterr().err


def test_main_missing_image(tmp_path, capsys):
    path = tmp_path / "talk.txt"
    path.write_text(f"@{tmp_path / 'absent.ff'}\n")
    assert main([str(path)]) == 1
    assert "Unable to open" in capsys.readouterr().err


# navigation


def test_keys_advance_and_go_back(fontsets):
    viewer = make_viewer(fontsets)
    viewer.handle_key("Right")
    assert viewer.presentation.index == 1
    viewer.handle_key("space")
    assert viewer.presentation.index == 2
    viewer.handle_key("k")
    assert viewer.presentation.index == 1


def test_advance_stops_at_ends(fontsets):
    viewer = make_viewer(fontsets)
    viewer.handle_key("Left")
    assert viewer.presentation.index == 0
    for _ in range(5):
        viewer.handle_key("n")
    assert viewer.presentation.index == len(viewer.presentation) - 1


def test_advance_marks_dirty(fontsets):
    viewer = make_viewer(fontsets)
    viewer.draw()
    assert viewer.dirty is False
    viewer.handle_key("Down")
    assert viewer.dirty is True


def test_unbound_key_does_nothing(fontsets):
    viewer = make_viewer(fontsets)
    viewer.handle_key("x")
    assert viewer.presentation.index == 0
    assert viewer.running is True


@pytest.mark.parametrize("key", ["q", "Escape"])
def test_quit_keys(fontsets, key):
    viewer = make_viewer(fontsets)
    viewer.handle_key(key)
    assert viewer.running is False


def test_mouse_buttons(fontsets):
    viewer = make_viewer(fontsets)
    viewer.handle_button(1)
    assert viewer.presentation.index == 1
    viewer.handle_button(5)
    assert viewer.presentation.index == 2
    viewer.handle_button(3)
    assert viewer.presentation.index == 1
    viewer.handle_button(4)
    assert viewer.presentation.index == 0


def test_reload_reads_file_again(tmp_path, fontsets):
    path = tmp_path / "talk.txt"
    path.write_text("one\n\ntwo\n\nthree\n")
    with open(path) as stream:
        slides = load(stream)
    viewer = Viewer(Presentation(slides, str(path)), size=SIZE, fontsets=fontsets)
    viewer.handle_key("Right")
    viewer.handle_key("Right")
    path.write_text("alpha\n\nbeta\n")
    viewer.handle_key("r")
    assert [s.lines for s in viewer.presentation.slides] == [["alpha"], ["beta"]]
    assert viewer.presentation.index == 1


def test_reload_without_file_keeps_slides(fontsets):
    viewer = make_viewer(fontsets)
    before = [s.lines for s in viewer.presentation.slides]
    viewer.handle_key("r")
    assert [s.lines for s in viewer.presentation.slides] == before


# drawing


def test_draw_text_slide(fontsets):
    viewer = make_viewer(fontsets, texts=("Hello",))
    surface = viewer.draw()
    background = parse_color(BACKGROUND)
    assert surface.get_size() == SIZE
    assert tuple(surface.get_at((0, 0)))[:3] == background
    inked = sum(
        1
        for x in range(SIZE[0])
        for y in range(SIZE[1])
        if tuple(surface.get_at((x, y)))[:3] != background
    )
    assert inked > 0


def test_no_progress_bar_on_first_slide(fontsets):
    viewer = make_viewer(fontsets)
    surface = viewer.draw()
    assert tuple(surface.get_at((0, SIZE[1] - 1)))[:3] == parse_color(BACKGROUND)


def test_full_progress_bar_on_last_slide(fontsets):
    viewer = make_viewer(fontsets)
    viewer.handle_key("Right")
    viewer.handle_key("Right")
    surface = viewer.draw()
    foreground = parse_color(FOREGROUND)
    assert tuple(surface.get_at((0, SIZE[1] - 1)))[:3] == foreground
    assert tuple(surface.get_at((SIZE[0] - 1, SIZE[1] - PROGRESS_HEIGHT)))[:3] == foreground


def test_half_progress_bar_in_middle(fontsets):
    viewer = make_viewer(fontsets)
    viewer.handle_key("Right")
    surface = viewer.draw()
    assert tuple(surface.get_at((0, SIZE[1] - 1)))[:3] == parse_color(FOREGROUND)
    assert tuple(surface.get_at((SIZE[0] - 1, SIZE[1] - 1)))[:3] == parse_color(
        BACKGROUND
    )


def _farbfeld(width, height, pixel):
    header = b"farbfeld" + struct.pack(">II", width, height)
    return header + struct.pack(">HHHH", *pixel) * (width * height)


def test_draw_image_slide(tmp_path, fontsets):
    image = tmp_path / "red.ff"
    image.write_bytes(_farbfeld(2, 2, (65535, 0, 0, 65535)))
    presentation = Presentation(parse_slides([f"@{image}\n"]))
    viewer = Viewer(presentation, size=(40, 40), fontsets=fontsets)
    surface = viewer.draw()
    assert tuple(surface.get_at((20, 20)))[:3] == (255, 0, 0)
    assert tuple(surface.get_at((0, 0)))[:3] == parse_color(BACKGROUND)