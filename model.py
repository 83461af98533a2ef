from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple
import logging

import config
from events import Key, PointerButton, PointerMotion
from geometry import Rect, clamp, clip_segment, intersect_rect, intersects, point_in

if TYPE_CHECKING:
    from controls import Renderer
    from viewport import Viewport

Cell = Tuple[int, int]

LOGGER = logging.getLogger("TableCanvas.Panel")

_ARROW_STEPS = {
    config.KEY_UP: (-1, 0),
    config.KEY_DOWN: (1, 0),
    config.KEY_LEFT: (0, -1),
    config.KEY_RIGHT: (0, 1),
}


def _empty_cells() -> List[List[str]]:
    size = config.PANEL_GRID_SIZE
    return [[config.DEFAULT_CELL_VALUE for _ in range(size)] for _ in range(size)]


@dataclass
class Panel:
    rect: Rect
    cells: List[List[str]] = field(default_factory=_empty_cells)
    grabbed: bool = False
    hovered: bool = False
    grab_handle_visible: bool = False
    selection_visible: bool = False
    active_cell: Cell = (0, 0)

    @classmethod
    def new(cls, size: Tuple[int, int] = config.PANEL_DEFAULT_SIZE) -> "Panel":
        """Description: New panel at the canvas origin
        Inputs: cls, size: Tuple[int, int]
        """
        return cls(rect=Rect(0, 0, size[0], size[1]))

    @property
    def grab_handle(self) -> Rect:
        """Description: Grab handle in canvas coordinates
        Inputs: None
        """
        return Rect(self.rect.x, self.rect.y, config.GRAB_HANDLE_SIZE, config.GRAB_HANDLE_SIZE)

    @property
    def cell_w(self) -> float:
        return self.rect.w / config.PANEL_GRID_SIZE

    @property
    def cell_h(self) -> float:
        return self.rect.h / config.PANEL_GRID_SIZE

    def screen_rect(
        self,
        viewport: "Viewport",
        x: int = 0,
        y: int = 0,
        w: Optional[int] = None,
        h: Optional[int] = None,
    ) -> Tuple[Rect, bool]:
        """Description: Clipped screen rectangle of a panel-local area
        Inputs: viewport: Viewport, x: int, y: int, w: Optional[int], h: Optional[int]
        Without w/h the whole panel is used.
        """
        width = self.rect.w if w is None else w
        height = self.rect.h if h is None else h
        return viewport.get_rect(self.rect.x + x, self.rect.y + y, width, height)

    def grab_handle_screen_rect(self, viewport: "Viewport") -> Tuple[Rect, bool]:
        """Description: Grab handle screen rect
        Inputs: viewport: Viewport
        """
        handle = self.grab_handle
        return viewport.get_rect(handle.x, handle.y, handle.w, handle.h)

    def point_inside(self, viewport: "Viewport", x: int, y: int) -> bool:
        rect, visible = self.screen_rect(viewport)
        return visible and point_in((x, y), rect)

    def cell_at(self, viewport: "Viewport", x: int, y: int) -> Cell:
        """Description: Row and column of the cell under a screen position
        Inputs: viewport: Viewport, x: int, y: int
        """
        last = config.PANEL_GRID_SIZE - 1
        step_x = max(1, self.rect.w // config.PANEL_GRID_SIZE)
        step_y = max(1, self.rect.h // config.PANEL_GRID_SIZE)
        col = (x - viewport.screen_x(self.rect.x)) // step_x
        row = (y - viewport.screen_y(self.rect.y)) // step_y
        return clamp(row, 0, last), clamp(col, 0, last)

    def set_cell(self, row: int, col: int, value: object) -> None:
        """Description: Set cell
        Inputs: row: int, col: int, value: object
        """
        self.cells[row][col] = str(value)

    def active_value(self) -> str:
        row, col = self.active_cell
        return self.cells[row][col]

    def can_move(self, viewport: "Viewport", dx: int, dy: int) -> bool:
        """Description: Whether translating by (dx, dy) keeps the panel on the canvas and clear of others
        Inputs: viewport: Viewport, dx: int, dy: int
        """
        if self.rect.x + dx < 0 or self.rect.y + dy < 0:
            return False
        moved = self.rect.translated(dx, dy)
        for other in viewport.panels:
            # Same top-left means this panel.
            if other.rect.x == self.rect.x and other.rect.y == self.rect.y:
                continue
            if intersects(other.rect, moved):
                return False
        return True

    def move_by(self, dx: int, dy: int) -> None:
        self.rect = self.rect.translated(dx, dy)

    def on_pointer_button(self, event: PointerButton, viewport: "Viewport") -> bool:
        """Description: Grab on the handle, select a cell on the body
        Inputs: event: PointerButton, viewport: Viewport
        Returns True while the panel holds the grab.
        """
        if not event.pressed:
            self.grabbed = False
            return False
        if event.button != config.BUTTON_LEFT:
            return False

        on_handle = False
        if self.grab_handle_visible:
            handle, visible = self.grab_handle_screen_rect(viewport)
            on_handle = visible and point_in(event.position, handle)
        self.grabbed = on_handle

        if on_handle:
            return True
        self.selection_visible = self.point_inside(viewport, event.x, event.y)
        if self.selection_visible:
            self.active_cell = self.cell_at(viewport, event.x, event.y)
        return False

    def on_pointer_motion(self, event: PointerMotion, viewport: "Viewport") -> None:
        if self.grabbed and (event.dx or event.dy):
            if self.can_move(viewport, event.dx, event.dy):
                self.move_by(event.dx, event.dy)
            else:
                LOGGER.debug("Move by (%d, %d) blocked at %s", event.dx, event.dy, self.rect)
        self.hovered = self.point_inside(viewport, event.x, event.y)
        self.grab_handle_visible = self.hovered

    def on_key(self, event: Key) -> None:
        """Description: Arrow-key navigation of the active cell
        Inputs: event: Key
        """
        if not self.selection_visible or not event.pressed:
            return
        step = _ARROW_STEPS.get(event.key)
        if step is None:
            return
        last = config.PANEL_GRID_SIZE - 1
        row, col = self.active_cell
        self.active_cell = (clamp(row + step[0], 0, last), clamp(col + step[1], 0, last))

    def render(self, renderer: "Renderer", viewport: "Viewport") -> None:
        """Description: Render
        Inputs: renderer: Renderer, viewport: Viewport
        """
        frame, visible = self.screen_rect(viewport)
        if not visible:
            return
        renderer.draw_rect(frame, config.THEME["frame"])

        cell_w = self.cell_w
        cell_h = self.cell_h
        if self.selection_visible:
            row, col = self.active_cell
            rect, visible = self.screen_rect(
                viewport,
                col * int(cell_w),
                row * int(cell_h),
                int(cell_w),
                int(cell_h),
            )
            if visible:
                renderer.fill_rect(rect, config.THEME["active_cell"])

        self._render_grid(renderer, viewport)
        self._render_cells(renderer, viewport)

        if self.grab_handle_visible:
            handle, visible = self.grab_handle_screen_rect(viewport)
            if visible:
                renderer.fill_rect(handle, config.THEME["grab_handle"])

    def _render_grid(self, renderer: "Renderer", viewport: "Viewport") -> None:
        top = viewport.screen_y(self.rect.y)
        bottom = viewport.screen_y(self.rect.bottom - 1)
        left = viewport.screen_x(self.rect.x)
        right = viewport.screen_x(self.rect.right - 1)
        for i in range(config.PANEL_GRID_SIZE):
            x = viewport.screen_x(self.rect.x + int(i * self.cell_w))
            p1, p2, visible = clip_segment((x, top), (x, bottom), viewport.rect)
            if visible:
                renderer.draw_line(p1, p2, config.THEME["grid"])
        for i in range(config.PANEL_GRID_SIZE):
            y = viewport.screen_y(self.rect.y + int(i * self.cell_h))
            p1, p2, visible = clip_segment((left, y), (right, y), viewport.rect)
            if visible:
                renderer.draw_line(p1, p2, config.THEME["grid"])

    def _render_cells(self, renderer: "Renderer", viewport: "Viewport") -> None:
        cell_w = self.cell_w
        cell_h = self.cell_h
        for row, values in enumerate(self.cells):
            for col, text in enumerate(values):
                if not text:
                    continue
                text_w, text_h = renderer.measure_text(text)
                # Left aligned, vertically centred.
                local_x = int(col * cell_w + cell_w * config.CELL_TEXT_MARGIN)
                local_y = int(row * cell_h + (cell_h - text_h) / 2)
                dst, visible = self.screen_rect(viewport, local_x, local_y, text_w, text_h)
                if not visible:
                    continue
                cell_rect, _ = self.screen_rect(
                    viewport, int(col * cell_w), int(row * cell_h), int(cell_w), int(cell_h)
                )
                clip, visible = intersect_rect(dst, cell_rect)
                if not visible:
                    continue
                origin = (
                    viewport.screen_x(self.rect.x + local_x),
                    viewport.screen_y(self.rect.y + local_y),
                )
                renderer.draw_text(text, origin, clip, config.THEME["text"])


def place_new_panel(panel: Panel, panels: Iterable[Panel], gap: int = config.PANEL_PLACEMENT_GAP) -> Panel:
    """Description: Stack a new panel below whatever it collides with
    Inputs: panel: Panel, panels: Iterable[Panel], gap: int
    The candidate starts at the canvas origin and is only ever pushed down, so
    each push strictly increases y and the scan ends once a full pass is clean.
    """
    existing = list(panels)
    panel.rect = Rect(0, 0, panel.rect.w, panel.rect.h)
    moved = True
    while moved:
        moved = False
        for other in existing:
            if intersects(panel.rect, other.rect):
                panel.rect = Rect(panel.rect.x, other.rect.bottom + gap, panel.rect.w, panel.rect.h)
                moved = True
                break
    return panel
