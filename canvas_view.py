from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Dict, List, Sequence, Set, Tuple

import tkinter as tk
import tkinter.font as tkfont
from matplotlib import colors

import config
from controls import Color, Control
from events import (
    WINDOW_RESIZE,
    WINDOW_SHOW,
    InputEvent,
    Key,
    PointerButton,
    PointerMotion,
    Scroll,
    WindowChanged,
)
from geometry import Point, Rect
from viewport import Viewport

FRAME_TAG = "frame"

# tkinter event.state bit for Shift
SHIFT_MASK = 0x0001
# X11 reports wheel ticks as buttons 4-7
WHEEL_BUTTONS = {4: (0, 1), 5: (0, -1), 6: (-1, 0), 7: (1, 0)}
WINDOWS_WHEEL_STEP = 120


def resolve_color(color: Color, background: str = config.THEME["bg"]) -> str:
    """Description: Resolve a theme color to a tkinter hex string
    Inputs: color: Color, background: str
    RGBA tuples (0-255) are blended over the background since tkinter has no alpha.
    """
    if isinstance(color, str):
        return colors.to_hex(colors.to_rgba(color))
    red, green, blue, alpha = (channel / 255 for channel in color)
    base = colors.to_rgb(background)
    mixed = [min(1.0, alpha * fg + (1 - alpha) * bg) for fg, bg in zip((red, green, blue), base)]
    return colors.to_hex(mixed)


def fit_text(text: str, origin_x: int, clip: Rect, measure: Callable[[str], int]) -> Tuple[int, str]:
    """Description: Fit text
    Inputs: text: str, origin_x: int, clip: Rect, measure: Callable[[str], int]
    Drops leading characters that start left of the clip and trailing ones that
    end right of it. Returns the x of the first kept character and the kept text.
    """
    # Widths grow with length, so both cut points are found by bisection.
    low, high = 0, len(text)
    while low < high:
        mid = (low + high) // 2
        if origin_x + measure(text[:mid]) < clip.x:
            low = mid + 1
        else:
            high = mid
    start = low
    start_x = origin_x + measure(text[:start])

    low, high = start, len(text)
    while low < high:
        mid = (low + high + 1) // 2
        if start_x + measure(text[start:mid]) <= clip.right:
            low = mid
        else:
            high = mid - 1
    return start_x, text[start:low]


class TkRenderer:
    def __init__(self, canvas: tk.Canvas, font: tkfont.Font, background: str = config.THEME["bg"]) -> None:
        """Description: Init
        Inputs: canvas: tk.Canvas, font: tkfont.Font, background: str
        """
        self.canvas = canvas
        self.font = font
        self.background = background
        self._colors: Dict[Color, str] = {}

    def _color(self, color: Color) -> str:
        if color not in self._colors:
            self._colors[color] = resolve_color(color, self.background)
        return self._colors[color]

    def begin_frame(self) -> None:
        self.canvas.delete(FRAME_TAG)

    def draw_rect(self, rect: Rect, color: Color) -> None:
        """Description: Outline covering the pixels x .. x + w - 1, y .. y + h - 1
        Inputs: rect: Rect, color: Color
        """
        if rect.empty:
            return
        self.canvas.create_rectangle(
            rect.x, rect.y, rect.right - 1, rect.bottom - 1,
            outline=self._color(color),
            width=1,
            tags=FRAME_TAG,
        )

    def fill_rect(self, rect: Rect, color: Color) -> None:
        if rect.empty:
            return
        self.canvas.create_rectangle(
            rect.x, rect.y, rect.right, rect.bottom,
            fill=self._color(color),
            outline="",
            tags=FRAME_TAG,
        )

    def draw_line(self, p1: Point, p2: Point, color: Color) -> None:
        self.canvas.create_line(p1[0], p1[1], p2[0], p2[1], fill=self._color(color), width=1, tags=FRAME_TAG)

    def draw_text(self, text: str, origin: Point, clip: Rect, color: Color) -> None:
        """Description: Draw text
        Inputs: text: str, origin: Point, clip: Rect, color: Color
        A line clipped vertically is not drawn at all.
        """
        _, text_h = self.measure_text(text)
        if clip.empty or clip.h < text_h:
            return
        start_x, visible = fit_text(text, origin[0], clip, self.font.measure)
        if not visible:
            return
        self.canvas.create_text(
            start_x, origin[1],
            text=visible,
            anchor="nw",
            fill=self._color(color),
            font=self.font,
            tags=FRAME_TAG,
        )

    def measure_text(self, text: str) -> Tuple[int, int]:
        return self.font.measure(text), self.font.metrics("linespace")


class CanvasView:
    def __init__(self, master: tk.Misc) -> None:
        """Description: Init
        Inputs: master: tk.Misc
        """
        self.canvas = tk.Canvas(master, bg=config.THEME["bg"], highlightthickness=0)
        self.renderer = TkRenderer(self.canvas, tkfont.Font(master, font=config.FONT))

        self._events: Deque[InputEvent] = deque()
        self._pointer: Point | None = None
        self._held_keys: Set[str] = set()
        self._last_release: Dict[str, int] = {}

        self.canvas.bind("<Configure>", lambda _event: self.post(WindowChanged(WINDOW_RESIZE)))
        self.canvas.bind("<Map>", lambda _event: self.post(WindowChanged(WINDOW_SHOW)))
        self.canvas.bind("<ButtonPress>", self._on_button_press)
        self.canvas.bind("<ButtonRelease>", self._on_button_release)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<MouseWheel>", self._on_mouse_wheel)
        self.canvas.bind("<KeyPress>", self._on_key_press)
        self.canvas.bind("<KeyRelease>", self._on_key_release)
        self.canvas.focus_set()

    def post(self, event: InputEvent) -> None:
        self._events.append(event)

    def poll_events(self) -> List[InputEvent]:
        """Description: Drain every queued event
        Inputs: None
        """
        drained = list(self._events)
        self._events.clear()
        return drained

    def get_window_size(self) -> Tuple[int, int]:
        return self.canvas.winfo_width(), self.canvas.winfo_height()

    def render(self, viewport: Viewport, controls: Sequence[Control]) -> None:
        """Description: Render one frame
        Inputs: viewport: Viewport, controls: Sequence[Control]
        """
        self.renderer.begin_frame()
        for control in controls:
            control.render(self.renderer, viewport)
        viewport.render(self.renderer)

    def _on_button_press(self, event: tk.Event) -> None:
        self.canvas.focus_set()
        if event.num in WHEEL_BUTTONS:
            dx, dy = WHEEL_BUTTONS[event.num]
            self.post(self._wheel(dx, dy, event.state))
            return
        self.post(PointerButton(event.num, True, event.x, event.y))

    def _on_button_release(self, event: tk.Event) -> None:
        if event.num in WHEEL_BUTTONS:
            return
        self.post(PointerButton(event.num, False, event.x, event.y))

    def _on_motion(self, event: tk.Event) -> None:
        if self._pointer is None:
            dx, dy = 0, 0
        else:
            dx, dy = event.x - self._pointer[0], event.y - self._pointer[1]
        self._pointer = (event.x, event.y)
        self.post(PointerMotion(event.x, event.y, dx, dy))

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.delta == 0:
            return
        if abs(event.delta) >= WINDOWS_WHEEL_STEP:
            units = int(event.delta / WINDOWS_WHEEL_STEP)
        else:
            units = 1 if event.delta > 0 else -1
        self.post(self._wheel(0, units, event.state))

    @staticmethod
    def _wheel(dx: int, dy: int, state: int) -> Scroll:
        # Shift turns a vertical wheel into a horizontal one; wheel up goes left.
        if state & SHIFT_MASK and dx == 0:
            return Scroll(-dy, 0)
        return Scroll(dx, dy)

    def _on_key_press(self, event: tk.Event) -> None:
        # X11 auto-repeat sends release/press pairs with the same timestamp.
        repeat = event.keysym in self._held_keys or self._last_release.get(event.keysym) == event.time
        self._held_keys.add(event.keysym)
        self.post(Key(event.keysym, True, repeat))

    def _on_key_release(self, event: tk.Event) -> None:
        self._held_keys.discard(event.keysym)
        self._last_release[event.keysym] = event.time
        self.post(Key(event.keysym, False))
