"""The application shell: window settings, state management and the frame loop."""

from __future__ import annotations

import sys
import time
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

_RELEASE = 0


def default_screenshot_filepath(now: datetime | None = None) -> str:
    """Path for a screenshot taken at ``now`` (local time when omitted)."""
    moment = now if now is not None else datetime.now()
    return f"screenshots/screenshot-{moment.strftime('%Y-%m-%d-%H-%M-%S')}.png"


@dataclass(frozen=True)
class WindowConfiguration:
    """Title, size (width, height) and full-screen flag of the window."""

    title: str
    size: tuple[int, int]
    is_fullscreen: bool


class State:
    """Base class for the scenes an application runs; override the ``on_*`` hooks.

    The base hooks keep a small record of the state's lifecycle and of the input
    it has seen, so subclasses that call ``super()`` can rely on it.
    """

    application: Application | None = None
    initialized: bool = False
    frames_drawn: int = 0
    gui_frames: int = 0
    elapsed: float = 0.0
    pressed_keys: frozenset[int] = frozenset()
    pressed_buttons: frozenset[int] = frozenset()
    cursor_position: tuple[float, float] = (0.0, 0.0)
    cursor_inside: bool = False
    scroll_offset: tuple[float, float] = (0.0, 0.0)

    def on_initialize(self) -> None:
        """Called once before the state starts receiving frames."""
        self.initialized = True

    def on_immediate_gui(self) -> None:
        """Called every frame to build the immediate-mode GUI."""
        self.gui_frames += 1

    def on_draw(self, delta_time: float) -> None:
        """Called every frame with the seconds elapsed since the previous frame."""
        self.frames_drawn += 1
        self.elapsed += delta_time

    def on_destroy(self) -> None:
        """Called once when the state stops running."""
        self.initialized = False

    def on_key_event(self, key: int, scancode: int, action: int, mods: int) -> None:
        """Called when a keyboard key changes."""
        if action == _RELEASE:
            self.pressed_keys = self.pressed_keys - {key}
        else:
            self.pressed_keys = self.pressed_keys | {key}

    def on_cursor_move_event(self, x: float, y: float) -> None:
        """Called when the mouse cursor moves."""
        self.cursor_position = (x, y)

    def on_cursor_enter_event(self, entered: int) -> None:
        """Called when the cursor enters or leaves the window."""
        self.cursor_inside = bool(entered)

    def on_mouse_button_event(self, button: int, action: int, mods: int) -> None:
        """Called when a mouse button changes."""
        if action == _RELEASE:
            self.pressed_buttons = self.pressed_buttons - {button}
        else:
            self.pressed_buttons = self.pressed_buttons | {button}

    def on_scroll_event(self, x_offset: float, y_offset: float) -> None:
        """Called when the mouse wheel scrolls."""
        sx, sy = self.scroll_offset
        self.scroll_offset = (sx + x_offset, sy + y_offset)


class Application:
    """Runs registered states frame by frame according to a JSON-like configuration.

    ``clock`` returns the current time in seconds; ``screenshot`` saves the current
    frame to the given path and reports success. Without a ``screenshot`` function,
    every requested screenshot fails.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        clock: Callable[[], float] | None = None,
        screenshot: Callable[[str], bool] | None = None,
    ) -> None:
        self.config = config
        self._clock = clock if clock is not None else time.monotonic
        self._screenshot = screenshot
        self._states: dict[str, State] = {}
        self._current: State | None = None
        self._next: State | None = None
        self._should_close = False

    @property
    def current_state(self) -> State | None:
        """The state currently running, if any."""
        return self._current

    @property
    def states(self) -> Mapping[str, State]:
        """The registered states by name."""
        return dict(self._states)

    def register_state(self, name: str, state_type: type[State]) -> State:
        """Create a state of the given type under ``name``, replacing any previous one."""
        if not (isinstance(state_type, type) and issubclass(state_type, State)):
            raise TypeError("state_type must be a subclass of State")
        state = state_type()
        state.application = self
        self._states[name] = state
        return state

    def change_state(self, name: str) -> None:
        """Switch to the named state at the end of the current frame; unknown names are ignored."""
        state = self._states.get(name)
        if state is not None:
            self._next = state

    def close(self) -> None:
        """Ask the frame loop to stop before the next frame."""
        self._should_close = True

    def window_configuration(self) -> WindowConfiguration:
        """Read the window title, size and full-screen flag from the configuration."""
        window = self.config["window"]
        size = window["size"]
        return WindowConfiguration(
            title=str(window["title"]),
            size=(int(size["width"]), int(size["height"])),
            is_fullscreen=bool(window["fullscreen"]),
        )

    def screenshot_requests(self) -> list[tuple[int, str]]:
        """Requested screenshots as ``(frame, path)`` pairs in the order they are taken."""
        screenshots = self.config.get("screenshots")
        if not isinstance(screenshots, Mapping):
            return []
        base_path = Path(screenshots.get("directory", "screenshots"))
        requests = screenshots.get("requests")
        if not isinstance(requests, list):
            return []
        return sorted(
            (int(item.get("frame", 0)), str(base_path / item.get("file", "")))
            for item in requests
        )

    def _take_screenshot(self, path: str) -> None:
        saved = self._screenshot(path) if self._screenshot is not None else False
        if saved:
            print(f"Screenshot saved to: {path}")
        else:
            print(f"Failed to save a screenshot to: {path}", file=sys.stderr)

    def run(self, run_for_frames: int = 0) -> int:
        """Run the frame loop; stop after ``run_for_frames`` frames, or on close when 0."""
        self._should_close = False
        pending = deque(self.screenshot_requests())

        if self._next is not None:
            self._current, self._next = self._next, None
        if self._current is not None:
            self._current.on_initialize()

        last_frame_time = self._clock()
        current_frame = 0

        while not self._should_close:
            if run_for_frames != 0 and current_frame >= run_for_frames:
                break

            if self._current is not None:
                self._current.on_immediate_gui()

            frame_time = self._clock()
            if self._current is not None:
                self._current.on_draw(frame_time - last_frame_time)
            last_frame_time = frame_time

            while pending and pending[0][0] == current_frame:
                _, path = pending.popleft()
                self._take_screenshot(path)

            while self._next is not None:
                if self._current is not None:
                    self._current.on_destroy()
                self._current, self._next = self._next, None
                self._current.on_initialize()

            current_frame += 1

        if self._current is not None:
            self._current.on_destroy()
        return 0