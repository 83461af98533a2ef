# Routes input events to the viewport, the controls and the panels.

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Tuple
import logging

import config
from controls import Control
from events import InputEvent, Key, PointerButton, PointerMotion, Quit, Scroll, WindowChanged
from model import Panel
from viewport import Viewport

LOGGER = logging.getLogger("TableCanvas.Dispatch")


class InputDispatcher:
    def __init__(
        self,
        viewport: Viewport,
        controls: Sequence[Control],
        get_window_size: Callable[[], Tuple[int, int]],
        on_edit_cell: Optional[Callable[[Panel], None]] = None,
        quit_key: str = config.QUIT_KEY,
    ) -> None:
        """Description: Init
        Inputs: viewport: Viewport, controls: Sequence[Control], get_window_size, on_edit_cell, quit_key: str
        """
        self.viewport = viewport
        self.controls: List[Control] = list(controls)
        self._get_window_size = get_window_size
        self._on_edit_cell = on_edit_cell
        self.quit_key = quit_key

    def dispatch_all(self, events: Iterable[InputEvent]) -> bool:
        """Description: Dispatch events in order, stopping at the first that ends the session
        Inputs: events: Iterable[InputEvent]
        """
        for event in events:
            if not self.dispatch(event):
                return False
        return True

    def dispatch(self, event: InputEvent) -> bool:
        """Description: Dispatch one event
        Inputs: event: InputEvent
        Returns False when the session should end.
        """
        if isinstance(event, Quit):
            LOGGER.info("Window closed")
            return False
        if isinstance(event, Key):
            return self._on_key(event)
        if isinstance(event, PointerButton):
            self._on_pointer_button(event)
        elif isinstance(event, PointerMotion):
            self._on_pointer_motion(event)
        elif isinstance(event, Scroll):
            self.viewport.on_scroll(event)
        elif isinstance(event, WindowChanged):
            width, height = self._get_window_size()
            self.viewport.on_window_resize(width, height)
        return True

    def _on_pointer_button(self, event: PointerButton) -> None:
        # Every handler sees the event; a panel must hear about clicks elsewhere
        # to drop its selection.
        consumed_by: List[str] = []
        for control in self.controls:
            if control.on_pointer_button(event, self.viewport):
                consumed_by.append(type(control).__name__)
        for index, panel in enumerate(self.viewport.panels):
            if panel.on_pointer_button(event, self.viewport):
                consumed_by.append(f"table {index + 1}")
        if consumed_by:
            LOGGER.debug("Button %d %s at (%d, %d) taken by %s", event.button,
                         "down" if event.pressed else "up", event.x, event.y, ", ".join(consumed_by))

    def _on_pointer_motion(self, event: PointerMotion) -> None:
        for control in self.controls:
            control.on_pointer_motion(event, self.viewport)
        for panel in self.viewport.panels:
            panel.on_pointer_motion(event, self.viewport)

    def _on_key(self, event: Key) -> bool:
        if event.repeat:
            return True
        if event.pressed and event.key.lower() == self.quit_key:
            LOGGER.info("Quit key pressed")
            return False
        for panel in self.viewport.panels:
            panel.on_key(event)
        if event.pressed and event.key == config.EDIT_KEY and self._on_edit_cell is not None:
            for panel in self.viewport.panels:
                if panel.selection_visible:
                    self._on_edit_cell(panel)
                    break
        return True
