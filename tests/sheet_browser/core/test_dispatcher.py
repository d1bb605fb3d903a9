from sheet_browser.core.dispatcher import (
    InputDispatcher,
    Orientation,
    classify_orientation,
    resolve_key,
    resolve_swipe,
    user_agent_compact_viewport,
)
from sheet_browser.core.navigation import Direction, FocusCoordinate, NavigationEngine
from sheet_browser.core.scheduling import ManualScheduler

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
DESKTOP_UA = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 Chrome/120.0"


def always_compact(width, height):
    return True


def _dispatcher(scheduler=None, compact=always_compact, viewport_size=None):
    engine = NavigationEngine(row_count=3, column_count=3)
    closed = []
    dispatcher = InputDispatcher(
        engine,
        on_close=lambda: closed.append(True),
        is_compact_viewport=compact,
        scheduler=scheduler,
        viewport_size=viewport_size,
    )
    return engine, dispatcher, closed


def test_key_bindings():
    assert resolve_key("ArrowUp") is Direction.UP
    assert resolve_key("ArrowRight") is Direction.RIGHT
    assert resolve_key("Escape") == "close"
    assert resolve_key("Enter") is None
    assert resolve_key(None) is None


def test_swipes_are_inverted():
    assert resolve_swipe("up") is Direction.DOWN
    assert resolve_swipe("down") is Direction.UP
    assert resolve_swipe("left") is Direction.RIGHT
    assert resolve_swipe("right") is Direction.LEFT
    assert resolve_swipe("diagonal") is None


def test_orientation_classification():
    assert classify_orientation(800, 400) is Orientation.LANDSCAPE
    assert classify_orientation(400, 800) is Orientation.PORTRAIT
    assert classify_orientation(500, 500) is Orientation.PORTRAIT


def test_input_ignored_before_attach():
    engine, dispatcher, _ = _dispatcher()
    assert dispatcher.handle_key("ArrowDown") is False
    assert engine.focus == FocusCoordinate(0, 0)


def test_arrow_keys_move_focus():
    engine, dispatcher, _ = _dispatcher()
    dispatcher.attach()

    assert dispatcher.handle_key("ArrowDown") is True
    assert dispatcher.handle_key("ArrowRight") is True
    assert engine.focus == FocusCoordinate(1, 1)


def test_bound_key_at_boundary_is_still_handled():
    engine, dispatcher, _ = _dispatcher()
    dispatcher.attach()
    assert dispatcher.handle_key("ArrowUp") is True
    assert engine.focus == FocusCoordinate(0, 0)


def test_unbound_key_not_handled():
    _, dispatcher, _ = _dispatcher()
    dispatcher.attach()
    assert dispatcher.handle_key("a") is False


def test_escape_closes_once():
    engine, dispatcher, closed = _dispatcher()
    dispatcher.attach()

    dispatcher.handle_key("Escape")
    dispatcher.handle_key("Escape")

    assert closed == [True]
    assert engine.closed is True
    assert dispatcher.handle_key("ArrowDown") is False


def test_swipe_up_shows_next_row():
    engine, dispatcher, _ = _dispatcher()
    dispatcher.attach()

    assert dispatcher.handle_swipe("up") is True
    assert engine.focus == FocusCoordinate(1, 0)
    dispatcher.handle_swipe("left")
    assert engine.focus == FocusCoordinate(1, 1)


def test_attach_in_landscape_on_compact_viewport_closes():
    _, dispatcher, closed = _dispatcher()
    dispatcher.attach(800, 400)
    assert closed == [True]


def test_attach_in_portrait_stays_open():
    _, dispatcher, closed = _dispatcher()
    dispatcher.attach(400, 800)
    assert closed == []
    assert dispatcher.orientation is Orientation.PORTRAIT


def test_landscape_on_desktop_does_not_close():
    _, dispatcher, closed = _dispatcher(compact=lambda w, h: False)
    dispatcher.attach(1600, 900)
    dispatcher.handle_resize(1800, 900)
    assert closed == []


def test_attach_reads_viewport_size_when_not_given():
    _, dispatcher, closed = _dispatcher(viewport_size=lambda: (900, 400))
    dispatcher.attach()
    assert closed == [True]


def test_orientation_change_waits_for_settle_delay():
    scheduler = ManualScheduler()
    size = {"value": (400, 800)}
    _, dispatcher, closed = _dispatcher(scheduler=scheduler, viewport_size=lambda: size["value"])
    dispatcher.attach()

    size["value"] = (800, 400)
    dispatcher.handle_orientation_change()
    scheduler.advance(299)
    assert closed == []

    scheduler.advance(1)
    assert closed == [True]


def test_orientation_changes_are_debounced():
    scheduler = ManualScheduler()
    _, dispatcher, _ = _dispatcher(scheduler=scheduler, viewport_size=lambda: (400, 800))
    dispatcher.attach()

    dispatcher.handle_orientation_change()
    scheduler.advance(200)
    dispatcher.handle_orientation_change()
    assert scheduler.pending == 1


def test_detach_cancels_pending_orientation_check():
    scheduler = ManualScheduler()
    _, dispatcher, closed = _dispatcher(scheduler=scheduler, viewport_size=lambda: (800, 400))
    dispatcher.attach(400, 800)

    dispatcher.handle_orientation_change()
    dispatcher.detach()
    scheduler.advance(1000)

    assert closed == []
    assert dispatcher.handle_key("ArrowDown") is False


def test_orientation_change_without_scheduler_checks_immediately():
    _, dispatcher, closed = _dispatcher()
    dispatcher.attach(400, 800)
    dispatcher.handle_orientation_change(800, 400)
    assert closed == [True]


def test_user_agent_compact_viewport():
    phone = user_agent_compact_viewport(IPHONE_UA)
    desktop = user_agent_compact_viewport(DESKTOP_UA)

    assert phone(800, 400) is True
    assert phone(1200, 800) is False
    assert desktop(800, 400) is False
    assert user_agent_compact_viewport(None)(300, 200) is False
