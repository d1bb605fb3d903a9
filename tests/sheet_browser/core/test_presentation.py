from sheet_browser.core.navigation import Direction, FocusCoordinate
from sheet_browser.core.presentation import animation_class, focused_font_size, position_label


def _rem(value: str) -> float:
    assert value.endswith("rem")
    return float(value[:-3])


def test_font_size_at_reference_length():
    assert focused_font_size("x" * 100) == "1.9rem"


def test_font_size_shrinks_with_length_and_is_bounded():
    short = _rem(focused_font_size("hi"))
    medium = _rem(focused_font_size("x" * 300))
    huge = _rem(focused_font_size("x" * 50000))

    assert short > 1.9
    assert short <= 2.2
    assert medium < 1.9
    assert huge == 0.7


def test_font_size_for_empty_content():
    assert focused_font_size(None) == focused_font_size("")
    assert _rem(focused_font_size(None)) <= 2.2


def test_position_label_is_one_based():
    assert position_label(FocusCoordinate(0, 2), 10, 4) == "Row 1/10, Col 3/4"


def test_animation_class():
    assert animation_class(Direction.LEFT) == "animate-left"
    assert animation_class("up") == "animate-up"
    assert animation_class(None) == ""
