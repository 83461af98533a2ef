# Non-panel UI controls and the drawing interface they share with panels.

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple, Union

import config
from events import PointerButton, PointerMotion
from geometry import Point, Rect, point_in

if TYPE_CHECKING:
    from viewport import Viewport

Color = Union[str, Tuple[int, int, int, int]]


class Renderer(Protocol):
    def draw_rect(self, rect: Rect, color: Color) -> None: ...

    def fill_rect(self, rect: Rect, color: Color) -> None: ...

    def draw_line(self, p1: Point, p2: Point, color: Color) -> None: ...

    def draw_text(self, text: str, origin: Point, clip: Rect, color: Color) -> None: ...

    def measure_text(self, text: str) -> Tuple[int, int]: ...


class Control(Protocol):
    def on_pointer_button(self, event: PointerButton, viewport: "Viewport") -> bool: ...

    def on_pointer_motion(self, event: PointerMotion, viewport: "Viewport") -> None: ...

    def render(self, renderer: Renderer, viewport: "Viewport") -> None: ...


class AddPanelButton:
    def __init__(self, rect: Rect | None = None, flash_ms: int = config.BUTTON_PRESS_FLASH_MS) -> None:
        """Description: Init
        Inputs: rect: Rect | None, flash_ms: int
        """
        self.rect = rect or Rect(*config.ADD_BUTTON_RECT)
        self.label = config.ADD_BUTTON_LABEL
        self.active = False
        self.hover = False
        self.flash_ms = flash_ms
        self.remaining_flash_ms = 0

    def tick(self, elapsed_ms: int) -> None:
        self.remaining_flash_ms = max(self.remaining_flash_ms - elapsed_ms, 0)

    def on_pointer_button(self, event: PointerButton, viewport: "Viewport") -> bool:
        """Description: Arm on press, add a panel on release while hovered
        Inputs: event: PointerButton, viewport: Viewport
        Raises PanelCapacityError from the viewport when it is full.
        """
        if event.button != config.BUTTON_LEFT:
            return False
        if event.pressed:
            if point_in(event.position, self.rect):
                self.active = True
                return True
            return False
        self.active = False
        if not self.hover:
            return False
        self.remaining_flash_ms = self.flash_ms
        viewport.add_panel()
        return True

    def on_pointer_motion(self, event: PointerMotion, viewport: "Viewport") -> None:
        self.hover = point_in(event.position, self.rect)

    def render(self, renderer: Renderer, viewport: "Viewport") -> None:
        """Description: Render
        Inputs: renderer: Renderer, viewport: Viewport
        """
        pressed = self.active or self.remaining_flash_ms > 0
        if pressed:
            fill = config.THEME["button_active"]
        elif self.hover:
            fill = config.THEME["button_hover"]
        else:
            fill = config.THEME["button"]
        renderer.fill_rect(self.rect, fill)

        glyph = config.THEME["button_glyph_active"] if pressed else config.THEME["button_glyph"]
        inset_x = int(self.rect.w * config.BUTTON_GLYPH_INSET)
        inset_y = int(self.rect.h * config.BUTTON_GLYPH_INSET)
        inner = Rect(
            self.rect.x + inset_x,
            self.rect.y + inset_y,
            self.rect.w - 2 * inset_x,
            self.rect.h - 2 * inset_y,
        )
        renderer.draw_rect(inner, glyph)
        mid_x = inner.x + inner.w // 2
        mid_y = inner.y + inner.h // 2
        renderer.draw_line((mid_x, inner.y), (mid_x, inner.bottom - 1), glyph)
        renderer.draw_line((inner.x, mid_y), (inner.right - 1, mid_y), glyph)

        text_w, text_h = renderer.measure_text(self.label)
        origin = (self.rect.x - (text_w - self.rect.w) // 2, self.rect.bottom)
        renderer.draw_text(self.label, origin, Rect(origin[0], origin[1], text_w, text_h), config.THEME["text"])
