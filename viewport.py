# Visible window onto canvas space: transform, scroll bounds and panel ownership.
#
# Canvas coordinates start at (0, 0) in the top-left corner of the viewport and
# everything visible is non-negative; it is never possible to scroll left or up
# from the default view. Scroll offsets are therefore always <= 0, and the
# "maximum" scroll on an axis is the most negative offset allowed.

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple
import logging

import config
from events import Scroll
from geometry import Rect, intersect_rect
from model import Panel, place_new_panel

if TYPE_CHECKING:
    from controls import Renderer

LOGGER = logging.getLogger("TableCanvas.Viewport")


class CanvasError(RuntimeError):
    pass


class PanelCapacityError(CanvasError):
    def __init__(self, capacity: int) -> None:
        super().__init__(f"Reached table count limit ({capacity})")
        self.capacity = capacity


class Viewport:
    def __init__(self, rect: Rect | None = None, capacity: int = config.MAX_PANELS) -> None:
        """Description: Init
        Inputs: rect: Rect | None, capacity: int
        """
        self.rect = rect or Rect(config.VIEWPORT_ORIGIN[0], config.VIEWPORT_ORIGIN[1], 0, 0)
        self.capacity = capacity
        self.panels: List[Panel] = []
        self.horizontal_scroll = 0
        self.vertical_scroll = 0
        # Time left in ms to show each scrollbar
        self.horizontal_scrollbar_ms = 0
        self.vertical_scrollbar_ms = 0

    @property
    def panel_count(self) -> int:
        return len(self.panels)

    def screen_x(self, x: int) -> int:
        return self.rect.x + self.horizontal_scroll + x

    def screen_y(self, y: int) -> int:
        return self.rect.y + self.vertical_scroll + y

    def get_rect(self, x: int, y: int, w: int, h: int) -> Tuple[Rect, bool]:
        """Description: Transform a canvas rectangle to screen space and clip it to the viewport
        Inputs: x: int, y: int, w: int, h: int
        """
        return intersect_rect(Rect(self.screen_x(x), self.screen_y(y), w, h), self.rect)

    def max_used_x(self) -> int:
        """Description: Right edge of the right-most panel
        Inputs: None
        """
        return max((panel.rect.right for panel in self.panels), default=0)

    def max_used_y(self) -> int:
        """Description: Bottom edge of the lowest panel
        Inputs: None
        """
        return max((panel.rect.bottom for panel in self.panels), default=0)

    def max_viewable_x(self) -> int:
        return max(self.max_used_x() + config.VIEWPORT_RIGHT_SCROLL_MARGIN, self.rect.w)

    def max_viewable_y(self) -> int:
        return max(self.max_used_y() + config.VIEWPORT_BOTTOM_SCROLL_MARGIN, self.rect.h)

    def max_scroll_x(self) -> int:
        return self.rect.w - self.max_viewable_x()

    def max_scroll_y(self) -> int:
        return self.rect.h - self.max_viewable_y()

    def add_panel(self) -> Panel:
        """Description: Create a panel and stack it at the first free spot
        Inputs: None
        Raises PanelCapacityError once the viewport holds `capacity` panels.
        """
        if len(self.panels) >= self.capacity:
            LOGGER.critical("Cannot add table: %d of %d already placed", len(self.panels), self.capacity)
            raise PanelCapacityError(self.capacity)
        panel = place_new_panel(Panel.new(), self.panels)
        self.panels.append(panel)
        LOGGER.info("Added table %d at (%d, %d)", len(self.panels), panel.rect.x, panel.rect.y)
        return panel

    def on_scroll(self, event: Scroll) -> None:
        self.scroll(event.dx, event.dy)

    def scroll(self, dx: int, dy: int) -> None:
        """Description: Scroll along the dominant axis of (dx, dy)
        Inputs: dx: int, dy: int
        Positive dx scrolls right, positive dy scrolls up. Only one axis moves
        per event and a tie moves neither.
        """
        if abs(dx) > abs(dy):
            self.horizontal_scrollbar_ms = config.SCROLLBAR_DISPLAY_MS
            self.vertical_scrollbar_ms = 0
            self.horizontal_scroll = self._bounded_scroll(
                self.horizontal_scroll, -config.SCROLL_SPEED * dx, self.max_scroll_x()
            )
        elif abs(dx) < abs(dy):
            self.horizontal_scrollbar_ms = 0
            self.vertical_scrollbar_ms = config.SCROLLBAR_DISPLAY_MS
            self.vertical_scroll = self._bounded_scroll(
                self.vertical_scroll, config.SCROLL_SPEED * dy, self.max_scroll_y()
            )

    @staticmethod
    def _bounded_scroll(current: int, delta: int, bound: int) -> int:
        # Never reveal negative coordinates.
        target = min(current + delta, 0)
        if target >= bound:
            return target
        if delta > 0:
            # Heading back toward the origin from past the bound, which happens
            # once panels move so the extent shrinks. Do not snap to the bound.
            return target
        if current >= bound:
            return bound
        return current

    def tick(self, elapsed_ms: int) -> None:
        self.horizontal_scrollbar_ms = max(self.horizontal_scrollbar_ms - elapsed_ms, 0)
        self.vertical_scrollbar_ms = max(self.vertical_scrollbar_ms - elapsed_ms, 0)

    def on_window_resize(self, width: int, height: int) -> None:
        """Description: Fit the viewport to a new window size
        Inputs: width: int, height: int
        """
        self.rect.w = max(width - 2 * config.VIEWPORT_SIDE_MARGIN, 0)
        self.rect.h = max(height - 2 * config.VIEWPORT_VERTICAL_MARGIN - config.TOP_BAR_HEIGHT, 0)
        LOGGER.debug("Viewport resized to %dx%d for window %dx%d", self.rect.w, self.rect.h, width, height)

    def horizontal_scrollbar(self) -> Rect | None:
        if self.horizontal_scrollbar_ms <= 0 or self.rect.w <= 0:
            return None
        extent = max(self.max_viewable_x(), self.rect.w - self.horizontal_scroll)
        ratio = self.rect.w / extent
        return Rect(
            self.rect.x - int(self.horizontal_scroll * ratio),
            self.rect.bottom - config.SCROLLBAR_DIM,
            int(self.rect.w * ratio),
            config.SCROLLBAR_DIM,
        )

    def vertical_scrollbar(self) -> Rect | None:
        if self.vertical_scrollbar_ms <= 0 or self.rect.h <= 0:
            return None
        extent = max(self.max_viewable_y(), self.rect.h - self.vertical_scroll)
        ratio = self.rect.h / extent
        return Rect(
            self.rect.right - config.SCROLLBAR_DIM,
            self.rect.y - int(self.vertical_scroll * ratio),
            config.SCROLLBAR_DIM,
            int(self.rect.h * ratio),
        )

    def render(self, renderer: "Renderer") -> None:
        """Description: Render the frame, every panel, then the visible scrollbars
        Inputs: renderer: Renderer
        """
        renderer.draw_rect(self.rect, config.THEME["frame"])
        for panel in self.panels:
            panel.render(renderer, self)
        for bar in (self.horizontal_scrollbar(), self.vertical_scrollbar()):
            if bar is not None:
                renderer.fill_rect(bar, config.THEME["scrollbar"])
