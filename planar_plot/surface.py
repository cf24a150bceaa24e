from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal


Color = str | tuple[int, ...]
Point = tuple[float, float]
TextAlign = Literal["left", "center", "right"]
TextBaseline = Literal["top", "middle", "bottom"]


@dataclass(frozen=True)
class TextStyle:
    align: TextAlign = "center"
    baseline: TextBaseline = "middle"
    font_family: str = "Arial"
    font_size_px: float = 20.0
    color: Color = "black"
    stay_inbound: bool = True
    inbound_color: Color = "grey"
    render_outside_if_out_of_bound: bool = False


class DrawingSurface(ABC):
    """Immediate-mode 2D drawing in pixel space, origin top-left."""

    @property
    @abstractmethod
    def width(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def height(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_line(self, start: Point, end: Point, color: Color | None = None, width: float | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_arc(
        self,
        x: float,
        y: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        color: Color,
        counter_clockwise: bool = False,
        filled: bool = False,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    def draw_overlay_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        """Optional hook for text placed outside the visible surface."""
        return

    def clear_overlay(self) -> None:
        """Optional hook paired with ``draw_overlay_text``."""
        return
