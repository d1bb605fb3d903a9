from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from sheet_browser.core.navigation import Direction, NavigationEngine
from sheet_browser.core.scheduling import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)

CLOSE = "close"

KEY_BINDINGS: Dict[str, Union[Direction, str]] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "Escape": CLOSE,
}

# A swipe drags the content along with the finger, so swiping up brings the
# row below into view.
SWIPE_BINDINGS: Dict[str, Direction] = {
    "up": Direction.DOWN,
    "down": Direction.UP,
    "left": Direction.RIGHT,
    "right": Direction.LEFT,
}

ORIENTATION_SETTLE_MS = 300
MOBILE_MAX_WIDTH = 1024
MOBILE_USER_AGENT_RE = re.compile(
    r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini",
    re.IGNORECASE,
)

CompactViewportQuery = Callable[[float, float], bool]
ViewportSize = Callable[[], Tuple[float, float]]


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


def classify_orientation(width: float, height: float) -> Orientation:
    return Orientation.LANDSCAPE if width > height else Orientation.PORTRAIT


def user_agent_compact_viewport(
    user_agent: Optional[str],
    max_width: int = MOBILE_MAX_WIDTH,
) -> CompactViewportQuery:
    """
    Build an `is_compact_viewport(width, height)` query from a user agent
    string: a mobile-looking agent on a viewport narrower than `max_width`.
    """
    is_mobile_agent = bool(user_agent and MOBILE_USER_AGENT_RE.search(user_agent))

    def is_compact_viewport(width: float, height: float) -> bool:
        return is_mobile_agent and width < max_width

    return is_compact_viewport


def never_compact(width: float, height: float) -> bool:
    return False


def resolve_key(key: Optional[str]) -> Optional[Union[Direction, str]]:
    if not key:
        return None
    return KEY_BINDINGS.get(key)


def resolve_swipe(swipe: Optional[str]) -> Optional[Direction]:
    if not swipe:
        return None
    return SWIPE_BINDINGS.get(str(swipe).lower())


class InputDispatcher:
    """
    The single entry point turning keys, swipes and viewport changes into
    engine transitions or a close.

    Input is only accepted between `attach()` and `detach()`/`close()`.
    Landscape on a compact (mobile) viewport closes the viewer, and
    orientation-change signals are re-checked after a short settle delay.
    """

    def __init__(
        self,
        engine: NavigationEngine,
        on_close: Optional[Callable[[], None]] = None,
        is_compact_viewport: CompactViewportQuery = never_compact,
        scheduler: Optional[Scheduler] = None,
        viewport_size: Optional[ViewportSize] = None,
        settle_ms: int = ORIENTATION_SETTLE_MS,
    ):
        self.engine = engine
        self._on_close = on_close
        self._is_compact_viewport = is_compact_viewport
        self._scheduler = scheduler
        self._viewport_size = viewport_size
        self._settle_ms = settle_ms
        self._pending_check: Optional[ScheduledCall] = None
        self._attached = False
        self._closed = False
        self.orientation: Optional[Orientation] = None

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def attach(self, width: Optional[float] = None, height: Optional[float] = None) -> None:
        """Start accepting input; runs the initial orientation check when a size is known."""
        if self._closed or self._attached:
            return
        self._attached = True

        if width is None or height is None:
            if self._viewport_size is None:
                return
            width, height = self._viewport_size()
        self.handle_resize(width, height)

    def detach(self) -> None:
        self._attached = False
        self._cancel_pending_check()

    def close(self) -> None:
        if self._closed:
            return
        self.detach()
        self._closed = True
        self.engine.close()
        logger.debug("Viewer closed")
        if self._on_close is not None:
            self._on_close()

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def handle_key(self, key: Optional[str]) -> bool:
        """
        Returns True when the key is bound (even if the move was a boundary
        no-op), so the host can suppress the browser default.
        """
        if not self._attached:
            return False

        action = resolve_key(key)
        if action is None:
            return False
        if action == CLOSE:
            self.close()
        else:
            self.engine.move(action)
        return True

    def handle_swipe(self, swipe: Optional[str]) -> bool:
        if not self._attached:
            return False

        direction = resolve_swipe(swipe)
        if direction is None:
            return False
        self.engine.move(direction)
        return True

    def handle_resize(self, width: float, height: float) -> Orientation:
        """Immediate orientation check. Closes on landscape + compact viewport."""
        self.orientation = classify_orientation(width, height)
        if (
            self._attached
            and self.orientation is Orientation.LANDSCAPE
            and self._is_compact_viewport(width, height)
        ):
            logger.debug(
                "Auto-closing viewer on mobile landscape",
                extra={"width": width, "height": height},
            )
            self.close()
        return self.orientation

    def handle_orientation_change(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> None:
        """
        Native orientation signal. The check runs after the settle delay with
        the viewport size read at that point (falls back to the given size).
        """
        if not self._attached:
            return

        def check() -> None:
            self._pending_check = None
            if not self._attached:
                return
            size = self._viewport_size() if self._viewport_size is not None else (width, height)
            if size[0] is None or size[1] is None:
                return
            self.handle_resize(size[0], size[1])

        self._cancel_pending_check()
        if self._scheduler is None:
            check()
        else:
            self._pending_check = self._scheduler.call_later(self._settle_ms, check)

    def _cancel_pending_check(self) -> None:
        if self._pending_check is not None:
            self._pending_check.cancel()
            self._pending_check = None
