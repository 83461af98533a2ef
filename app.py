from __future__ import annotations

import logging
import time
import tkinter as tk
from tkinter import messagebox, simpledialog

import config
from canvas_view import CanvasView
from controls import AddPanelButton
from dispatch import InputDispatcher
from events import Quit
from model import Panel
from viewport import CanvasError, Viewport

LOGGER = logging.getLogger("TableCanvas.App")


class CanvasApp:
    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(config.WINDOW_TITLE)
        self.root.configure(bg=config.THEME["bg"])
        width, height = config.WINDOW_DEFAULT_SIZE
        self.root.geometry(f"{width}x{height}")
        self.root.minsize(*config.WINDOW_MIN_SIZE)

        self.viewport = Viewport()
        self.add_button = AddPanelButton()
        self.controls = [self.add_button]

        self.canvas_view = CanvasView(self.root)
        self.canvas_view.canvas.pack(fill=tk.BOTH, expand=True)
        self.root.protocol("WM_DELETE_WINDOW", lambda: self.canvas_view.post(Quit()))

        self.dispatcher = InputDispatcher(
            self.viewport,
            self.controls,
            get_window_size=self.canvas_view.get_window_size,
            on_edit_cell=self._request_cell_edit,
        )

        self.exit_code = 0
        self._last_frame = 0.0
        self._frame_job: str | None = None

    def run(self) -> int:
        LOGGER.info("Session started")
        self._last_frame = time.monotonic()
        self._frame_job = self.root.after(0, self._frame)
        self.root.mainloop()
        LOGGER.info("Session ended with %d table(s)", self.viewport.panel_count)
        return self.exit_code

    def stop(self) -> None:
        if self._frame_job is not None:
            self.root.after_cancel(self._frame_job)
            self._frame_job = None
        self.root.destroy()

    def _frame(self) -> None:
        self._frame_job = None
        now = time.monotonic()
        elapsed_ms = int((now - self._last_frame) * 1000)
        self._last_frame = now

        try:
            running = self.dispatcher.dispatch_all(self.canvas_view.poll_events())
        except CanvasError as exc:
            self._fail(exc)
            return
        if not running:
            self.stop()
            return

        self.viewport.tick(elapsed_ms)
        for control in self.controls:
            control.tick(elapsed_ms)
        self.canvas_view.render(self.viewport, self.controls)
        self._frame_job = self.root.after(config.FRAME_MS, self._frame)

    def _fail(self, exc: CanvasError) -> None:
        LOGGER.critical("Fatal: %s", exc)
        self.exit_code = 1
        messagebox.showerror(config.WINDOW_TITLE, f"{exc}.\nThe session will now close.", parent=self.root)
        self.stop()

    def _request_cell_edit(self, panel: Panel) -> None:
        # Prompt outside the event drain so the rest of the frame is unaffected.
        self.root.after_idle(lambda: self._edit_cell(panel))

    def _edit_cell(self, panel: Panel) -> None:
        row, col = panel.active_cell
        value = simpledialog.askstring(
            "Edit Cell",
            f"Row {row + 1}, column {col + 1}:",
            initialvalue=panel.active_value(),
            parent=self.root,
        )
        self.canvas_view.canvas.focus_set()
        if value is None:
            return
        panel.set_cell(row, col, value)
        LOGGER.debug("Cell (%d, %d) set to %r", row, col, value)


def run_app() -> int:
    app = CanvasApp()
    return app.run()
