import pytest

from sheet_browser.core.navigation import Direction, FocusCoordinate, NavigationEngine
from sheet_browser.core.scheduling import ManualScheduler


def _engine(rows=3, cols=3, focus=None, scheduler=None) -> NavigationEngine:
    return NavigationEngine(row_count=rows, column_count=cols, initial_focus=focus, scheduler=scheduler)


def test_default_focus_is_origin():
    engine = _engine()
    assert engine.focus == FocusCoordinate(0, 0)
    assert engine.animation_direction is None


def test_move_down_then_right():
    engine = _engine()

    assert engine.move_down() is True
    assert engine.focus == FocusCoordinate(1, 0)
    assert engine.animation_direction is Direction.DOWN

    assert engine.move_right() is True
    assert engine.focus == FocusCoordinate(1, 1)
    assert engine.animation_direction is Direction.RIGHT


def test_boundary_moves_are_ignored():
    engine = _engine(rows=2, cols=2)

    assert engine.move_up() is False
    assert engine.move_left() is False
    assert engine.focus == FocusCoordinate(0, 0)
    assert engine.animation_direction is None


def test_boundary_move_keeps_previous_animation():
    engine = _engine(rows=2, cols=1)
    engine.move_down()
    assert engine.move_down() is False
    assert engine.focus == FocusCoordinate(1, 0)
    assert engine.animation_direction is Direction.DOWN


def test_bottom_right_corner():
    engine = _engine(rows=2, cols=2, focus=FocusCoordinate(1, 1))
    assert engine.can_move(Direction.DOWN) is False
    assert engine.can_move(Direction.RIGHT) is False
    assert engine.can_move(Direction.UP) is True
    assert engine.can_move(Direction.LEFT) is True


def test_empty_table_refuses_every_move():
    engine = _engine(rows=0, cols=0)
    for d in Direction:
        assert engine.move(d) is False
    assert engine.focus == FocusCoordinate(0, 0)


def test_round_trip_returns_to_start():
    engine = _engine(rows=5, cols=5, focus=FocusCoordinate(2, 2))
    for there, back in [
        (Direction.UP, Direction.DOWN),
        (Direction.LEFT, Direction.RIGHT),
    ]:
        assert engine.move(there)
        assert engine.move(back)
        assert engine.focus == FocusCoordinate(2, 2)


def test_move_accepts_direction_strings():
    engine = _engine()
    assert engine.move("down") is True
    assert engine.focus == FocusCoordinate(1, 0)
    with pytest.raises(ValueError):
        engine.move("sideways")


def test_bounds_change_is_respected_on_next_move():
    engine = _engine(rows=5, cols=5, focus=FocusCoordinate(3, 0))
    engine.set_bounds(row_count=4, column_count=5)
    assert engine.move_down() is False
    engine.set_bounds(row_count=2, column_count=5)
    # focus is now stale: row 3 of 2
    assert engine.move_up() is False
    assert engine.focus == FocusCoordinate(3, 0)


def test_set_focus_is_unchecked():
    engine = _engine()
    engine.set_focus(FocusCoordinate(10, 10))
    assert engine.focus == FocusCoordinate(10, 10)


def test_animation_resets_after_duration():
    scheduler = ManualScheduler()
    engine = _engine(scheduler=scheduler)

    engine.move_down()
    scheduler.advance(299)
    assert engine.animation_direction is Direction.DOWN

    scheduler.advance(1)
    assert engine.animation_direction is None
    assert engine.focus == FocusCoordinate(1, 0)


def test_new_move_restarts_animation_timer():
    scheduler = ManualScheduler()
    engine = _engine(scheduler=scheduler)

    engine.move_down()
    scheduler.advance(200)
    engine.move_right()
    scheduler.advance(200)
    assert engine.animation_direction is Direction.RIGHT
    assert scheduler.pending == 1

    scheduler.advance(100)
    assert engine.animation_direction is None


def test_clear_animation_without_scheduler():
    engine = _engine()
    engine.move_down()
    engine.clear_animation()
    assert engine.animation_direction is None


def test_listeners_notified_on_move_and_reset():
    scheduler = ManualScheduler()
    engine = _engine(scheduler=scheduler)
    seen = []
    unsubscribe = engine.subscribe(lambda e: seen.append((e.focus, e.animation_direction)))

    engine.move_down()
    scheduler.advance(300)
    assert seen == [
        (FocusCoordinate(1, 0), Direction.DOWN),
        (FocusCoordinate(1, 0), None),
    ]

    unsubscribe()
    engine.move_down()
    assert len(seen) == 2


def test_refused_move_does_not_notify():
    engine = _engine(rows=1, cols=1)
    seen = []
    engine.subscribe(lambda e: seen.append(e.focus))
    engine.move_down()
    assert seen == []


def test_close_cancels_pending_reset_and_stops_moves():
    scheduler = ManualScheduler()
    engine = _engine(scheduler=scheduler)
    engine.move_down()

    engine.close()
    assert engine.closed is True
    assert scheduler.pending == 0
    assert engine.move_down() is False

    engine.set_focus(FocusCoordinate(0, 0))
    assert engine.focus == FocusCoordinate(1, 0)


def test_focus_coordinate_from_dict_accepts_both_key_styles():
    assert FocusCoordinate.from_dict({"row_index": 2, "col_index": 1}) == FocusCoordinate(2, 1)
    assert FocusCoordinate.from_dict({"rowIndex": 4, "colIndex": 3}) == FocusCoordinate(4, 3)
    assert FocusCoordinate.from_dict(None) == FocusCoordinate(0, 0)
    coord = FocusCoordinate(5, 6)
    assert FocusCoordinate.from_dict(coord.to_dict()) == coord
