# Rectangle and segment helpers shared by the viewport and panels.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Point = Tuple[int, int]

# Cohen-Sutherland outcodes
_INSIDE = 0
_LEFT = 1
_RIGHT = 2
_BOTTOM = 4
_TOP = 8


@dataclass
class Rect:
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def translated(self, dx: int, dy: int) -> "Rect":
        """Description: Translated
        Inputs: dx: int, dy: int
        """
        return Rect(self.x + dx, self.y + dy, self.w, self.h)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def intersects(a: Rect, b: Rect) -> bool:
    """Description: True when the rectangles share any point, edges included
    Inputs: a: Rect, b: Rect
    """
    return a.x <= b.right and b.x <= a.right and a.y <= b.bottom and b.y <= a.bottom


def point_in(point: Point, rect: Rect) -> bool:
    """Description: Closed-interval point test
    Inputs: point: Point, rect: Rect
    """
    x, y = point
    return rect.x <= x <= rect.right and rect.y <= y <= rect.bottom


def intersect_rect(a: Rect, b: Rect) -> Tuple[Rect, bool]:
    """Description: Intersection of two rectangles
    Inputs: a: Rect, b: Rect
    Returns (rect, non_empty); non_empty is False for zero-area or disjoint results.
    """
    if a.empty or b.empty:
        return Rect(), False
    x = max(a.x, b.x)
    y = max(a.y, b.y)
    w = min(a.right, b.right) - x
    h = min(a.bottom, b.bottom) - y
    if w <= 0 or h <= 0:
        return Rect(x, y, max(w, 0), max(h, 0)), False
    return Rect(x, y, w, h), True


def _outcode(x: float, y: float, xmin: int, ymin: int, xmax: int, ymax: int) -> int:
    code = _INSIDE
    if x < xmin:
        code |= _LEFT
    elif x > xmax:
        code |= _RIGHT
    if y < ymin:
        code |= _TOP
    elif y > ymax:
        code |= _BOTTOM
    return code


def clip_segment(p1: Point, p2: Point, rect: Rect) -> Tuple[Point, Point, bool]:
    """Description: Clip a segment to the pixel area of rect (Cohen-Sutherland)
    Inputs: p1: Point, p2: Point, rect: Rect
    The pixel area spans x .. x + w - 1 and y .. y + h - 1. When nothing of the
    segment is inside, the original points are returned with visible=False.
    """
    if rect.empty:
        return p1, p2, False
    xmin, ymin = rect.x, rect.y
    xmax, ymax = rect.right - 1, rect.bottom - 1

    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])
    code1 = _outcode(x1, y1, xmin, ymin, xmax, ymax)
    code2 = _outcode(x2, y2, xmin, ymin, xmax, ymax)

    while True:
        if not (code1 | code2):
            clipped1 = (int(round(x1)), int(round(y1)))
            clipped2 = (int(round(x2)), int(round(y2)))
            return clipped1, clipped2, True
        if code1 & code2:
            return p1, p2, False

        code = code1 or code2
        if code & _TOP:
            x = x1 + (x2 - x1) * (ymin - y1) / (y2 - y1)
            y = float(ymin)
        elif code & _BOTTOM:
            x = x1 + (x2 - x1) * (ymax - y1) / (y2 - y1)
            y = float(ymax)
        elif code & _LEFT:
            y = y1 + (y2 - y1) * (xmin - x1) / (x2 - x1)
            x = float(xmin)
        else:
            y = y1 + (y2 - y1) * (xmax - x1) / (x2 - x1)
            x = float(xmax)

        if code == code1:
            x1, y1 = x, y
            code1 = _outcode(x1, y1, xmin, ymin, xmax, ymax)
        else:
            x2, y2 = x, y
            code2 = _outcode(x2, y2, xmin, ymin, xmax, ymax)
