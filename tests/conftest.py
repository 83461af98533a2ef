from __future__ import annotations

from typing import List, Tuple

import pytest

from geometry import Rect
from viewport import Viewport

CHAR_WIDTH = 6
LINE_HEIGHT = 12


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: List[Tuple] = []

    def draw_rect(self, rect, color) -> None:
        self.calls.append(("draw_rect", rect, color))

    def fill_rect(self, rect, color) -> None:
        self.calls.append(("fill_rect", rect, color))

    def draw_line(self, p1, p2, color) -> None:
        self.calls.append(("draw_line", p1, p2, color))

    def draw_text(self, text, origin, clip, color) -> None:
        self.calls.append(("draw_text", text, origin, clip, color))

    def measure_text(self, text: str) -> Tuple[int, int]:
        return CHAR_WIDTH * len(text), LINE_HEIGHT

    def of_kind(self, kind: str) -> List[Tuple]:
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(Rect(10, 55, 800, 500))
